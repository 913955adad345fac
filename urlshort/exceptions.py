class UrlShortError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlshort_error'


class ConfigurationError(UrlShortError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class DuplicatePathError(BadConfigurationError):
    """Raised when a path mapping document repeats a path."""

    error_code = 'config:duplicate_path_error'

    def __init__(self, path: str):
        super().__init__(f"Repeated path '{path}' in path mappings.")
        self.path = path
