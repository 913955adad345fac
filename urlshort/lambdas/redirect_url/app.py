import string
import logging

from urlshort.types import LambdaEvent, LambdaContext, LambdaHandler, LambdaResponse
from urlshort.dao.base import ShortURLBaseDAO
from urlshort.dao.redis import ShortURLRedisDAO
from urlshort.dao.exceptions import DAOError, ShortURLNotFoundError
from urlshort.exceptions import ConfigurationError
from urlshort.lambdas.views import missing_url_page
from urlshort.utils import load_config, app_prefix
from urlshort.utils.helpers import http_method, request_path, guarantee_500_response
from urlshort.utils.responses import response_301, response_404, response_405, response_500
from urlshort.utils.runtime import request_deadline
from urlshort.lambdas.redirect_url.constants import (
    INVALID_SHORT_URL_PATH,
    RETRIEVE_FAILED,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def create_handler(dao: ShortURLBaseDAO, fallback: LambdaHandler = missing_url_page) -> LambdaHandler:
    """Build a handler redirecting /{prefix}/{shortcode} to the stored URL

    The handler must be mounted under a fixed prefix route (e.g. /short/{shortcode});
    the prefix value itself is not checked.

    The handler follows this procedure:
    - Step 1: Accept GET requests only
    - Step 2: Extract shortcode from request path
    - Step 3: Get short URL record from database
    - Step 4: Redirect client to target URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: target URL destination
        404: Path is not shaped as /{prefix}/{shortcode}
        405: Method other than GET
        500: Internal server error
            message: error retrieving short url (storage error details are only logged)
        *:   Whatever the fallback handler answers for missing or expired short URLs

    Args:
        dao (ShortURLBaseDAO):
            Storage backend to read mappings from.
        fallback (LambdaHandler):
            Handler rendering the response for missing or expired short URLs.

    Returns:
        LambdaHandler: handler with the usual (event, context) signature.
    """

    def handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        # 1- Accept GET requests only
        method = http_method(event)
        if method != 'GET':
            logger.info('Redirect requested with method %s. Responding with 405.', method)
            return response_405(allowed='GET')

        # 2- Extract shortcode from request's path
        segments = request_path(event).strip('/' + string.whitespace).split('/')
        if len(segments) != 2:
            logger.info('Path is not shaped as /<prefix>/<shortcode>. Responding with 404.', extra={'event': INVALID_SHORT_URL_PATH})
            return response_404(error_code=INVALID_SHORT_URL_PATH)
        shortcode = segments[1]

        # 3- Get short_url record from database
        try:
            short_url = dao.get(shortcode)
        except ShortURLNotFoundError:
            logger.info(
                'Short URL record not found in database. Delegating to fallback.',
                extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
            )
            return fallback(event, context)
        except DAOError:
            logger.exception('Failed to retrieve short URL. Responding with 500.', extra={'shortcode': shortcode, 'event': RETRIEVE_FAILED})
            return response_500(message='error retrieving short url', error_code=RETRIEVE_FAILED)

        # 4- Redirect client to target URL
        logger.info(
            'Redirecting client to target URL. Responding with 301.',
            extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
        )
        return response_301(location=short_url.target)

    return handler


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle API Gateway requests to redirect short URLs: GET /short/{shortcode}

    Example:
        >>> event = {'httpMethod': 'GET', 'path': '/short/aZ3k9Q'}
        >>> response = lambda_handler(event, context)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except ConfigurationError:
        logger.exception('Failed to load configuration for redirect URL function. Responding with 500.')
        return response_500()

    logger.debug('Assuming Redis as the backend database for short URLs')
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items() if k != 'expiration_minutes'}

    try:
        short_url_dao = ShortURLRedisDAO(
            expiration_minutes=app_config['redis']['expiration_minutes'],
            redis_socket_timeout=request_deadline(context),
            prefix=app_prefix(),
            **redis_config,
        )
    except DAOError:
        logger.exception('Redis is unreachable. Responding with 500.', extra={'event': RETRIEVE_FAILED})
        return response_500(message='error retrieving short url', error_code=RETRIEVE_FAILED)

    return create_handler(short_url_dao, fallback=missing_url_page)(event, context)
