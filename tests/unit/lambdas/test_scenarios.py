"""End-to-end scenarios across the shorten_url and redirect_url handlers.

Both handlers share an in-process DAO, so a short URL produced by one can be
followed with the other, exactly like the Redis-backed deployment.
"""

import json
from datetime import timedelta

import pytest
from freezegun import freeze_time

from urlshort.dao.memory import ShortURLMemoryDAO
from urlshort.lambdas.shorten_url.app import create_handler as create_shorten_handler
from urlshort.lambdas.redirect_url.app import create_handler as create_redirect_handler
from urlshort.lambdas.views import MISSING_URL_HTML


@pytest.fixture
def dao() -> ShortURLMemoryDAO:
    return ShortURLMemoryDAO(expiration_minutes=1)


@pytest.fixture
def shorten(dao):
    return create_shorten_handler(dao, host='http://localhost:8080')


@pytest.fixture
def redirect(dao):
    return create_redirect_handler(dao)


def shorten_event(url: str) -> dict:
    return {'httpMethod': 'POST', 'path': '/shorten', 'body': f'url={url}'}


def redirect_event(path: str) -> dict:
    return {'httpMethod': 'GET', 'path': path}


def test_shorten_then_redirect(shorten, redirect):
    response = shorten(shorten_event('https%3A%2F%2Fexample.com%2Fa%3Fq%3D1'), None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 200
    assert body['short_url'] == f'http://localhost:8080/short/{body["shortcode"]}'
    assert len(body['shortcode']) == 6

    response = redirect(redirect_event(f'/short/{body["shortcode"]}'), None)

    assert response['statusCode'] == 301
    assert response['headers']['Location'] == 'https://example.com/a?q=1'


def test_same_url_gets_independent_short_urls(shorten, redirect):
    first = json.loads(shorten(shorten_event('https%3A%2F%2Fexample.com'), None)['body'])
    second = json.loads(shorten(shorten_event('https%3A%2F%2Fexample.com'), None)['body'])

    assert first['shortcode'] != second['shortcode']
    for shortcode in (first['shortcode'], second['shortcode']):
        assert redirect(redirect_event(f'/short/{shortcode}'), None)['headers']['Location'] == 'https://example.com'


def test_short_url_expires(shorten, redirect):
    with freeze_time('2026-10-18 12:00:00') as frozen_time:
        shortcode = json.loads(shorten(shorten_event('https%3A%2F%2Fexample.com'), None)['body'])['shortcode']

        frozen_time.tick(timedelta(seconds=30))
        assert redirect(redirect_event(f'/short/{shortcode}'), None)['statusCode'] == 301

        frozen_time.tick(timedelta(minutes=1))
        response = redirect(redirect_event(f'/short/{shortcode}'), None)
        assert response['statusCode'] == 404
        assert response['body'] == MISSING_URL_HTML


def test_invalid_url_is_never_stored(shorten, redirect, dao):
    response = shorten(shorten_event('not-a-url'), None)

    assert response['statusCode'] == 400
    assert dao._links == {}


def test_unknown_shortcode(redirect):
    assert redirect(redirect_event('/short/zzzzzz'), None)['statusCode'] == 404


@pytest.mark.parametrize(
    'url',
    [
        'http%3A%2F%2Fexample.com%2F%0D%0ASet-Cookie%3A%20a%3Db',
        'http%3A%2F%2Fexample.com%2F%0ALocation%3A%20http%3A%2F%2Fevil.com',
        '%20http%3A%2F%2Fexample.com',
    ],
)
def test_header_injection_is_never_stored(shorten, dao, url):
    response = shorten(shorten_event(url), None)

    assert response['statusCode'] == 400
    assert dao._links == {}


def test_redirect_location_never_carries_line_breaks(shorten, redirect):
    shortcodes = []
    for url in ('https%3A%2F%2Fexample.com%2Fa', 'http%3A%2F%2Fexample.com%2F%0D%0ASet-Cookie%3A%20a%3Db', 'https%3A%2F%2Fexample.com%2Fb'):
        response = shorten(shorten_event(url), None)
        if response['statusCode'] == 200:
            shortcodes.append(json.loads(response['body'])['shortcode'])

    assert len(shortcodes) == 2
    for shortcode in shortcodes:
        response = redirect(redirect_event(f'/short/{shortcode}'), None)
        assert response['statusCode'] == 301
        assert '\r' not in response['headers']['Location']
        assert '\n' not in response['headers']['Location']
