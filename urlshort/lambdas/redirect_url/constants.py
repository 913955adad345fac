# Error codes (also used as log event codes)
INVALID_SHORT_URL_PATH = 'INVALID_SHORT_URL_PATH'
RETRIEVE_FAILED = 'RETRIEVE_FAILED'

# Log event codes
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
