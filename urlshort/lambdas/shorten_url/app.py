import logging

from urlshort.types import LambdaEvent, LambdaContext, LambdaHandler, LambdaResponse
from urlshort.models import ShortURLModel
from urlshort.dao.base import ShortURLBaseDAO
from urlshort.dao.redis import ShortURLRedisDAO
from urlshort.dao.exceptions import DAOError
from urlshort.exceptions import ConfigurationError
from urlshort.lambdas.views import invalid_url_page, shortened_url_page
from urlshort.utils import generate_shortcode, load_config, get_short_url, app_prefix, public_host
from urlshort.utils.constants import MAX_SHORTCODE_ATTEMPTS
from urlshort.utils.helpers import form_value, http_method, is_valid_url, prefers_html, guarantee_500_response
from urlshort.utils.responses import response_200, response_400, response_405, response_500
from urlshort.utils.runtime import request_deadline
from urlshort.lambdas.shorten_url.constants import (
    MISSING_URL,
    INVALID_URL,
    SAVE_FAILED,
    SHORTCODE_COLLISION,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def create_handler(dao: ShortURLBaseDAO, fallback: LambdaHandler = invalid_url_page, host: str | None = None) -> LambdaHandler:
    """Build a handler that shortens URLs submitted through a form

    The handler follows this procedure:
    - Step 1: Accept POST requests only
    - Step 2: Extract the `url` form field
    - Step 3: Validate the URL (invalid URLs go to the fallback handler)
    - Step 4: Generate a shortcode and store the mapping (via DAO)
    - Step 5: Respond with the original and the short URL (HTML page for
              browsers, JSON for API clients)

    HTTP responses:
        200: Successful URL shortening
            message: success message
            target_url: original url (provided in request)
            short_url: newly generated short url ({host}/short/{shortcode})
            shortcode: newly generated shortcode
            (an HTML page with both URLs when the Accept header prefers text/html)
        400: Bad client request
            message: URL parameter is missing
        405: Method other than POST
        500: Internal server error
            message: error saving short url (storage error details are only logged)
        *:   Whatever the fallback handler answers for invalid URLs

    Args:
        dao (ShortURLBaseDAO):
            Storage backend with set-if-absent semantics.
        fallback (LambdaHandler):
            Handler rendering the response for syntactically invalid URLs.
        host (str | None):
            Public host of short URLs. Derived from the API Gateway event when None.

    Returns:
        LambdaHandler: handler with the usual (event, context) signature.
    """

    def handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        # 1- Accept POST requests only
        method = http_method(event)
        if method != 'POST':
            logger.info('Shortening requested with method %s. Responding with 405.', method)
            return response_405(allowed='POST')

        # 2- Extract original URL from the submitted form
        target_url = form_value(event, 'url')
        if not target_url:
            logger.info('Missing "url" form field. Responding with 400.', extra={'event': MISSING_URL})
            return response_400(message='URL parameter is missing', error_code=MISSING_URL)

        # 3- Validate the URL; invalid input degrades to a user-facing page
        if not is_valid_url(target_url):
            logger.info('Invalid URL submitted. Delegating to fallback.', extra={'targetUrl': target_url, 'event': INVALID_URL})
            return fallback(event, context)

        # 4- Generate a shortcode and store the mapping
        # NOTE: Shortcodes are random, so two requests may draw the same one.
        #       The DAO never overwrites an existing mapping and reports the
        #       collision instead; a fresh shortcode is drawn in that case.
        for attempt in range(1, MAX_SHORTCODE_ATTEMPTS + 1):
            shortcode = generate_shortcode()
            try:
                created = dao.insert(ShortURLModel(target=target_url, shortcode=shortcode))
            except DAOError:
                logger.exception('Failed to save short URL. Responding with 500.', extra={'shortcode': shortcode, 'event': SAVE_FAILED})
                return response_500(message='error saving short url', error_code=SAVE_FAILED)

            if created:
                break
            logger.warning(
                'Shortcode collision. Generating a new shortcode.',
                extra={'shortcode': shortcode, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
            )
        else:
            logger.error(
                'Gave up after %d shortcode collisions. Responding with 500.',
                MAX_SHORTCODE_ATTEMPTS,
                extra={'event': SAVE_FAILED},
            )
            return response_500(message='error saving short url', error_code=SAVE_FAILED)

        # 5- Return the original and the short URL
        short_url = get_short_url(shortcode, event, host)
        logger.info('Shortened URL. Responding with 200.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
        if prefers_html(event):
            return shortened_url_page(target_url, short_url)
        return response_200(
            {
                'message': f'Successfully shortened {target_url} to {short_url}',
                'target_url': target_url,
                'short_url': short_url,
                'shortcode': shortcode,
            }
        )

    return handler


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle API Gateway requests to shorten URLs: POST /shorten

    Wires the Redis backend from the application's config into
    `create_handler()`. Redis commands are bounded by the time left before the
    invocation times out.

    Example:
        >>> event = {'httpMethod': 'POST', 'body': 'url=https%3A%2F%2Fexample.com'}
        >>> response = lambda_handler(event, context)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_url']
        'https://sho.rt/short/aZ3k9Q'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except ConfigurationError:
        logger.exception('Failed to load configuration for shorten URL function. Responding with 500.')
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
        logger.exception('Redis is unreachable. Responding with 500.', extra={'event': SAVE_FAILED})
        return response_500(message='error saving short url', error_code=SAVE_FAILED)

    return create_handler(short_url_dao, fallback=invalid_url_page, host=public_host())(event, context)
