"""Fallback and page handlers

These are ordinary handlers `(event, context) -> response`, so any of them can
be passed as the `fallback` of a redirect or shortener handler.

Handlers:
    hello:              default fallback of the static redirect lambda.
    missing_url_page:   short URL not found or expired (redirect_url fallback).
    invalid_url_page:   submitted URL is not valid (shorten_url fallback).
    home_page:          GET-only form posting to /shorten.

Pages:
    shortened_url_page: confirmation rendered by shorten_url for browser clients.
"""

import html
import logging

from urlshort.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshort.utils.helpers import http_method
from urlshort.utils.responses import response_html, response_405


logger = logging.getLogger(__name__)


_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
 <meta charset="UTF-8">
 <title>{title}</title>
 <style>
     body {{ font-family: Arial, sans-serif; background-color: #f5f5f5; padding: 20px; text-align: center; }}
     h1 {{ color: #333; font-size: 2.5em; }}
     p {{ color: #666; font-size: 1.2em; padding: 20px 0; }}
 </style>
</head>
<body>
{content}
</body>
</html>
"""

MISSING_URL_HTML = _PAGE.format(
    title='URL Not Found',
    content=' <h1>404</h1>\n <p>The URL you entered is not available.</p>',
)

INVALID_URL_HTML = _PAGE.format(
    title='Invalid URL',
    content=' <h1>Invalid URL</h1>\n <p>The URL you entered is not valid. Include the scheme, e.g. https://example.com</p>',
)

HOME_HTML = _PAGE.format(
    title='URL Shortener',
    content=(
        ' <h1>URL Shortener</h1>\n'
        ' <form method="post" action="/shorten">\n'
        '  <input type="url" name="url" placeholder="https://example.com" required>\n'
        '  <button type="submit">Shorten</button>\n'
        ' </form>'
    ),
)


def shortened_url_page(target_url: str, short_url: str) -> LambdaResponse:
    """Confirmation page listing the submitted URL and its short URL

    Not a handler: the shortener renders it once the mapping is stored.
    """
    target, short = html.escape(target_url), html.escape(short_url)
    content = (
        ' <h1>URL Shortened</h1>\n'
        f' <p>Original URL: <a href="{target}">{target}</a></p>\n'
        f' <p>Short URL: <a href="{short}">{short}</a></p>'
    )
    return response_html(_PAGE.format(title='URL Shortened', content=content))


def hello(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': 'Hello, world!\n',
    }


def missing_url_page(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return response_html(MISSING_URL_HTML, status_code=404)


def invalid_url_page(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    return response_html(INVALID_URL_HTML, status_code=400)


def home_page(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    method = http_method(event)
    if method != 'GET':
        logger.info('Home page requested with method %s. Responding with 405.', method)
        return response_405(allowed='GET')
    return response_html(HOME_HTML)
