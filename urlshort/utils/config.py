"""Utility functions for application configuration management.

The dynamic lambdas need a Redis backend configuration. It is resolved from
two sources, in order of precedence:

1. Environment variables (`REDIS_HOST` set): the usual choice for local runs
   and single-stack deployments.

       REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_USERNAME, REDIS_PASSWORD,
       REDIS_EXPIRATION_MINUTES

2. **AWS AppConfig**: one JSON document per environment, deployed to the
   AppConfig application identified by `APPCONFIG_APP_ID`:

       {
           "active_backend": "redis",
           "configs": {
               "shorten_url": {
                   "redis": {"host": "...", "port": 6379, "db": 0, "expiration_minutes": 1440}
               },
               "redirect_url": {
                   "redis": { ... }
               }
           }
       }

Either way `load_config()` returns the same structure:

    {"redis": {"host": ..., "port": ..., "db": ..., "username": ...,
               "password": ..., "expiration_minutes": ...}}

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to 'local'.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the Redis key namespace, or None if `APP_NAME` is not set.

    mappings_file() -> Path
        Return the path mappings file used by the static redirect lambda.

    public_host() -> str | None
        Return the public host used to compose short URLs, if configured.

    parse_expiration_minutes(value) -> int
        Validate a TTL expressed in minutes.

    load_config(lambda_name: str) -> dict
        Load the backend configuration for a given lambda.

Example:
    >>> from urlshort.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config['redis']['expiration_minutes']
    1440
"""

import os
import json
import functools
import logging
from pathlib import Path
from typing import Any
from collections.abc import Callable

import boto3

from urlshort.types import AppConfig, AppConfigDataClient, LambdaConfiguration
from urlshort.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from urlshort.utils.helpers import require_environment
from urlshort.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    PUBLIC_HOST_ENV,
    PATH_MAPPINGS_FILE_ENV,
    REDIS_HOST_ENV,
    REDIS_PORT_ENV,
    REDIS_DB_ENV,
    REDIS_USERNAME_ENV,
    REDIS_PASSWORD_ENV,
    REDIS_EXPIRATION_MINUTES_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshort'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshort:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@require_environment(PATH_MAPPINGS_FILE_ENV)
def mappings_file() -> Path:
    return Path(os.environ[PATH_MAPPINGS_FILE_ENV])


def public_host() -> str | None:
    return os.environ.get(PUBLIC_HOST_ENV) or None


def parse_expiration_minutes(value: Any) -> int:
    """Validate a key expiration horizon expressed in whole minutes

    Raises:
        BadConfigurationError: If the value is not a positive integer.

    Example:
        >>> parse_expiration_minutes('60')
        60
    """
    try:
        minutes = int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Expiration must be an integer number of minutes (given value: {value!r}).') from e
    if isinstance(value, float) and value != minutes:
        raise BadConfigurationError(f'Expiration must be an integer number of minutes (given value: {value!r}).')
    if minutes <= 0:
        raise BadConfigurationError(f'Expiration must be a positive number of minutes (given value: {value!r}).')
    return minutes


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {value!r}).") from e


def _load_environment_config(func: Callable[[str], LambdaConfiguration]) -> Callable[[str], LambdaConfiguration]:
    """Decorator: build the Redis configuration from environment variables

    Behavior:
        - If `REDIS_HOST` is set, read every Redis setting from the environment
          (`REDIS_EXPIRATION_MINUTES` is then required).
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> LambdaConfiguration:
        host = os.environ.get(REDIS_HOST_ENV)
        if not host:
            return func(lambda_name, *args, **kwargs)

        expiration = os.environ.get(REDIS_EXPIRATION_MINUTES_ENV)
        if not expiration:
            raise MissingEnvironmentVariableError(f"Missing required environment variables: '{REDIS_EXPIRATION_MINUTES_ENV}'")

        data = {
            'redis': {
                'host': host,
                'port': _int_env(REDIS_PORT_ENV, 6379),
                'db': _int_env(REDIS_DB_ENV, 0),
                'username': os.environ.get(REDIS_USERNAME_ENV) or None,
                'password': os.environ.get(REDIS_PASSWORD_ENV) or None,
                'expiration_minutes': parse_expiration_minutes(expiration),
            }
        }
        logger.debug('Loaded Redis configuration from environment.', extra={'lambdaName': lambda_name, 'redisHost': host})
        return data

    return wrapper


@_load_environment_config
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load backend configuration for a given Lambda

    Without Redis environment variables, the AppConfig JSON is fetched and
    the section relevant to the requested Lambda is returned.

    Environment variables required (AppConfig path):
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The lambda's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If neither Redis nor AppConfig environment variables are set.
        BadConfigurationError:
            If the document lacks the lambda's section or has an invalid expiration.
        botocore.exceptions.ClientError:
            On AWS AppConfig API failures.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config: AppConfig = json.loads(content.decode('utf-8'))

    # Extract the active backend config for this lambda
    try:
        backend = config['active_backend']
        backend_config = dict(config['configs'][lambda_name][backend])
    except KeyError as e:
        raise BadConfigurationError(f'AppConfig document has no {e} section for lambda {lambda_name!r}.') from e

    backend_config['expiration_minutes'] = parse_expiration_minutes(backend_config.get('expiration_minutes'))
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return {backend: backend_config}
