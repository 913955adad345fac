# Error codes (also used as log event codes)
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
SAVE_FAILED = 'SAVE_FAILED'

# Log event codes
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
