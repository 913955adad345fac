import string
import logging
import functools

from urlshort.types import LambdaEvent, LambdaContext, LambdaHandler, LambdaResponse
from urlshort.models import PathTable
from urlshort.lambdas.views import hello
from urlshort.utils.config import mappings_file
from urlshort.utils.helpers import http_method, request_path
from urlshort.utils.mappings import build_table, load_path_mappings, parse_json_mappings, parse_yaml_mappings
from urlshort.utils.responses import response_301, response_405
from urlshort.lambdas.redirect_static.constants import PATH_NOT_MAPPED, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Trim trailing slashes and whitespace: '/urlshort/  ' -> '/urlshort'"""
    return path.rstrip('/' + string.whitespace)


def create_handler(table: PathTable, fallback: LambdaHandler) -> LambdaHandler:
    """Build a handler redirecting mapped paths and delegating everything else

    HTTP responses:
        301: Path found in the table
            headers:
                Location: mapped URL
        405: Method other than GET
        *:   Whatever the fallback handler answers for unmapped paths

    Args:
        table (PathTable):
            Immutable path -> URL table, shared by every invocation.
        fallback (LambdaHandler):
            Handler invoked when the path is not in the table.

    Returns:
        LambdaHandler: handler with the usual (event, context) signature.

    Example:
        >>> handler = create_handler(PathTable({'/urlshort': 'https://example.com/a'}), hello)
        >>> handler({'httpMethod': 'GET', 'path': '/urlshort/'}, None)['headers']['Location']
        'https://example.com/a'
    """

    def handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        method = http_method(event)
        if method != 'GET':
            logger.info('Static redirect requested with method %s. Responding with 405.', method)
            return response_405(allowed='GET')

        path = normalize_path(request_path(event))
        target_url = table.lookup(path)
        if target_url is None:
            logger.debug('Path not mapped. Delegating to fallback.', extra={'path': path, 'event': PATH_NOT_MAPPED})
            return fallback(event, context)

        logger.info('Redirecting client to mapped URL. Responding with 301.', extra={'path': path, 'event': REDIRECT_SUCCESS})
        return response_301(location=target_url)

    return handler


def yaml_handler(data: bytes | str, fallback: LambdaHandler) -> LambdaHandler:
    """Parse a YAML path mappings document and build its redirect handler

    Raises:
        BadConfigurationError: If the document is invalid.
        DuplicatePathError: If a path repeats.
    """
    return create_handler(build_table(parse_yaml_mappings(data)), fallback)


def json_handler(data: bytes | str, fallback: LambdaHandler) -> LambdaHandler:
    """Parse a JSON path mappings document and build its redirect handler

    Raises:
        BadConfigurationError: If the document is invalid.
        DuplicatePathError: If a path repeats.
    """
    return create_handler(build_table(parse_json_mappings(data)), fallback)


@functools.cache
def configured_handler() -> LambdaHandler:
    """Build the handler from PATH_MAPPINGS_FILE once per Lambda container"""
    path = mappings_file()
    table = build_table(load_path_mappings(path))
    logger.info('Built static path table with %d paths.', len(table), extra={'file': str(path)})
    return create_handler(table, fallback=hello)


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle API Gateway requests in static mode: GET {any path}

    Configuration errors (missing file, invalid document, repeated path) are
    not turned into responses: they propagate and fail the invocation, since
    the function can't serve anything until its configuration is fixed.
    """
    return configured_handler()(event, context)
