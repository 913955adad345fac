# Short key generation
SHORTCODE_LENGTH = 6
MAX_SHORTCODE_ATTEMPTS = 3  # fresh keys tried before giving up on a collision

# Route prefix for short URLs: {host}/short/{shortcode}
SHORT_URL_PREFIX = 'short'

# Application environment
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Public host used when composing short URLs (optional)
PUBLIC_HOST_ENV = 'PUBLIC_HOST'

# Static mode: YAML or JSON file with {path, url} records
PATH_MAPPINGS_FILE_ENV = 'PATH_MAPPINGS_FILE'

# Redis: connection details and key expiration (minutes)
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # noqa: S105
REDIS_EXPIRATION_MINUTES_ENV = 'REDIS_EXPIRATION_MINUTES'

# AppConfig: identifiers of the deployed configuration document
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'

# Seconds kept in reserve when deriving a storage timeout from the Lambda deadline
DEADLINE_MARGIN_SECONDS = 0.25

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
