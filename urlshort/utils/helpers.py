"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    http_method() -> str
        HTTP verb of the request (REST and HTTP API events)
    request_path() -> str
        Stage-less request path (REST and HTTP API events)
    form_value() -> str | None
        Read a form field from an urlencoded body or the query string
    is_valid_url() -> bool
        Check that a string is an absolute URL with scheme and host
    prefers_html() -> bool
        Content negotiation: does the client ask for an HTML page?
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler failures into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshort.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import base64
import binascii
import functools
import logging
from urllib.parse import parse_qs, urlsplit
from collections.abc import Callable

from urlshort.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshort.exceptions import MissingEnvironmentVariableError
from urlshort.utils.constants import SHORT_URL_PREFIX, UNKNOWN_INTERNAL_SERVER_ERROR
from urlshort.utils.responses import response_500
from urlshort.utils.runtime import running_locally


logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: LambdaEvent, host: str | None = None) -> str:
    """Get string representation of shortened URL: {host}/short/{shortcode}

    Args:
        shortcode (str): shortcode
        event (dict): API Gateway event object passed to Lambda handler
        host (str | None): public host; derived from the event when omitted

    Returns:
        str: short url string representation
    """
    host = host or base_url(event)
    return f'{host.rstrip("/")}/{SHORT_URL_PREFIX}/{shortcode}'


def http_method(event: LambdaEvent) -> str:
    method = event.get('httpMethod') or (event.get('requestContext') or {}).get('http', {}).get('method', '')
    return method.upper()


def request_path(event: LambdaEvent) -> str:
    """Request path as routed by API Gateway, without the stage

    REST API events carry a stage-less `path`. HTTP API events only carry
    `rawPath`, which starts with the stage name unless the stage is `$default`.

    Example:
        >>> request_path({'rawPath': '/prod/short/abc123', 'requestContext': {'stage': 'prod'}})
        '/short/abc123'
    """
    if event.get('path'):
        return event['path']

    path = event.get('rawPath') or ''
    stage = (event.get('requestContext') or {}).get('stage') or '$default'
    if stage != '$default' and (path == f'/{stage}' or path.startswith(f'/{stage}/')):
        path = path[len(stage) + 1 :] or '/'
    return path


def _header(event: LambdaEvent, name: str) -> str:
    headers = event.get('headers') or {}
    return next((value for key, value in headers.items() if key.lower() == name.lower()), '')


def form_value(event: LambdaEvent, name: str) -> str | None:
    """Return the first value of a form field, like a browser form submission

    Fields in an urlencoded request body take precedence over query string
    parameters. Base64-encoded bodies (binary media types) are decoded first.

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        name (str): form field name

    Returns:
        str | None: field value, or None if the field is not present.

    Example:
        >>> form_value({'httpMethod': 'POST', 'body': 'url=https%3A%2F%2Fexample.com'}, 'url')
        'https://example.com'
    """
    content_type = _header(event, 'Content-Type').split(';')[0].strip().lower()
    body = event.get('body') or ''

    if body and content_type in ('', FORM_CONTENT_TYPE):
        if event.get('isBase64Encoded'):
            try:
                body = base64.b64decode(body).decode('utf-8')
            except (binascii.Error, UnicodeDecodeError):
                logger.info('Ignoring undecodable base64 request body.')
                body = ''
        form = parse_qs(body, keep_blank_values=True)
        if name in form:
            return form[name][0]

    query = event.get('queryStringParameters') or {}
    return query.get(name)


def is_valid_url(url: str) -> bool:
    """Check that `url` is an absolute request URI with at least a scheme and a host

    Example:
        >>> is_valid_url('https://example.com/page')
        True
        >>> is_valid_url('example.com')
        False
    """
    # urlsplit() silently drops tabs, newlines and leading blanks: check the raw string first
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False

    try:
        components = urlsplit(url)
        components.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(components.scheme) and bool(components.hostname)


def prefers_html(event: LambdaEvent) -> bool:
    """Check whether the client's Accept header ranks HTML at least as high as JSON

    Browsers submitting a form send `Accept: text/html,...`; API clients
    send `application/json`, `*/*` or nothing at all and get JSON.

    Example:
        >>> prefers_html({'headers': {'Accept': 'text/html,application/xhtml+xml,*/*;q=0.8'}})
        True
        >>> prefers_html({'headers': {'Accept': '*/*'}})
        False
    """
    weights = {}
    for media_range in _header(event, 'Accept').split(','):
        media_type, *params = (part.strip() for part in media_range.split(';'))
        quality = 1.0
        for param in params:
            name, _, value = param.partition('=')
            if name.strip().lower() == 'q':
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        weights[media_type.lower()] = quality

    html = weights.get('text/html', 0.0)
    return html > 0 and html >= weights.get('application/json', 0.0)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: answer with a 500 response whenever the handler raises

    When running locally the original exception is re-raised instead, so it
    shows up in the SAM console.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
