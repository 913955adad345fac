"""API Gateway (Lambda proxy) response builders.

Every handler in this project, fallbacks included, answers with one of these
dictionaries so API Gateway can translate it into an HTTP response.
"""

import json

from urlshort.types import LambdaResponse
from urlshort.utils.constants import METHOD_NOT_ALLOWED


JSON_HEADERS = {'Content-Type': 'application/json'}
HTML_HEADERS = {'Content-Type': 'text/html; charset=utf-8'}


def _json_response(status_code: int, body: dict, headers: dict | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: dict) -> LambdaResponse:
    return _json_response(200, body)


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(404, _error_body('Not Found', message, error_code))


def response_405(*, allowed: str) -> LambdaResponse:
    body = _error_body('Method Not Allowed', 'invalid request method', METHOD_NOT_ALLOWED)
    return _json_response(405, body, headers={'Allow': allowed})


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _json_response(500, _error_body('Internal Server Error', message, error_code))


def response_html(html: str, status_code: int = 200) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': dict(HTML_HEADERS),
        'body': html,
    }
