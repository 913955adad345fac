# Log event codes
PATH_NOT_MAPPED = 'PATH_NOT_MAPPED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
