"""Unit tests for ShortURLRedisDAO.

Test coverage includes:

1. Initialization
   - Expiration must be a positive integer number of minutes.

2. Insertion behavior
   - SET NX EX stores new mappings and never overwrites existing ones.
   - Invalid URLs and invalid types are refused.
   - Redis connectivity issues surface as DataStoreError.

3. Retrieval behavior
   - GET + PTTL in one transaction build a complete ShortURLModel.
   - Missing shortcodes raise ShortURLNotFoundError.
   - Redis connectivity issues surface as DataStoreError.
"""

import re
from datetime import datetime, timedelta, UTC

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from urlshort.models import ShortURLModel
from urlshort.dao.redis import ShortURLRedisDAO
from urlshort.dao.exceptions import DataStoreError, ShortURLNotFoundError


EXPIRATION_MINUTES = 1440


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a ShortURLRedisDAO instance with a mocked Redis client."""
    return ShortURLRedisDAO(expiration_minutes=EXPIRATION_MINUTES, redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Initialization
# -------------------------------


def test_initialize_dao(dao, redis_client):
    assert dao.redis is redis_client
    assert dao.expiration_minutes == EXPIRATION_MINUTES
    assert dao.keys.link_url_key('abc123') == 'testapp:test:links:abc123:url'
    redis_client.ping.assert_called_once()


@pytest.mark.parametrize('expiration_minutes', [0, -5, 1.5, '60', None, True])
def test_initialize_dao_with_invalid_expiration(redis_client, expiration_minutes):
    with pytest.raises(ValueError, match='Expiration must be a positive integer'):
        ShortURLRedisDAO(expiration_minutes=expiration_minutes, redis_client=redis_client)


# -------------------------------
# 2. Insertion behavior
# -------------------------------


def test_insert_short_url(dao, redis_client):
    """Ensure new mappings are stored with SET NX and a TTL in seconds."""
    short_url = ShortURLModel(target='https://example.com/test', shortcode='abc123')

    assert dao.insert(short_url) is True
    redis_client.set.assert_called_once_with(
        'testapp:test:links:abc123:url',
        'https://example.com/test',
        nx=True,
        ex=EXPIRATION_MINUTES * 60,
    )


def test_insert_short_url_which_already_exists(dao, redis_client):
    """SET NX answers None when the key exists: report it, don't raise."""
    redis_client.set.return_value = None
    short_url = ShortURLModel(target='https://example.com/duplicate', shortcode='abc123')

    assert dao.insert(short_url) is False
    redis_client.set.assert_called_once()


def test_insert_short_url_with_invalid_url(dao, redis_client):
    short_url = ShortURLModel(target='not-a-url', shortcode='abc123')

    with pytest.raises(ValueError, match="Refusing to store invalid URL 'not-a-url'"):
        dao.insert(short_url)
    redis_client.set.assert_not_called()


def test_insert_short_url_with_invalid_type(dao):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_insert_short_url_with_redis_connection_error(dao, redis_client):
    """Ensure Redis connection errors during insert raise DataStoreError."""
    short_url = ShortURLModel(target='https://example.com/failure', shortcode='abc123')

    redis_client.set.side_effect = redis.exceptions.ConnectionError('Connection error')
    redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.insert(short_url)


def test_insert_short_url_with_redis_timeout(dao, redis_client):
    """Timeouts are reported apart from refused connections."""
    short_url = ShortURLModel(target='https://example.com/slow', shortcode='abc123')
    redis_client.set.side_effect = redis.exceptions.TimeoutError('Timeout reading from socket')

    with pytest.raises(DataStoreError, match=re.escape('Redis at redis.test:6379/0 timed out.')):
        dao.insert(short_url)


# -------------------------------
# 3. Retrieval behavior
# -------------------------------


@freeze_time('2026-10-18 12:00:00')
def test_get_short_url(dao, redis_client):
    """Ensure valid shortcode retrieval returns a complete ShortURLModel."""
    redis_client.execute.return_value = ['https://example.com/test', 60_000]

    short_url = dao.get('abc123')

    assert short_url == ShortURLModel(
        target='https://example.com/test',
        shortcode='abc123',
        expires_at=datetime(2026, 10, 18, 12, 1, tzinfo=UTC),
    )
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.get.assert_called_once_with('testapp:test:links:abc123:url')
    redis_client.pttl.assert_called_once_with('testapp:test:links:abc123:url')


def test_get_short_url_without_expiry(dao, redis_client):
    """Keys written without a TTL (PTTL -1) have no expiry."""
    redis_client.execute.return_value = ['https://example.com/test', -1]

    assert dao.get('abc123').expires_at is None


def test_get_short_url_which_does_not_exist(dao, redis_client):
    """Ensure missing shortcodes raise ShortURLNotFoundError."""
    redis_client.execute.return_value = [None, -2]

    with pytest.raises(ShortURLNotFoundError, match="Short URL with code 'abc123' not found"):
        dao.get('abc123')


def test_get_short_url_with_invalid_type(dao):
    """Ensure invalid shortcode types raise TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


def test_get_short_url_with_redis_connection_error(dao, redis_client):
    """Ensure Redis connection errors during get raise DataStoreError."""
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection Error')
    redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.get('abc123')


def test_expires_at_is_in_the_future(dao, redis_client):
    redis_client.execute.return_value = ['https://example.com/test', EXPIRATION_MINUTES * 60 * 1000]

    expires_at = dao.get('abc123').expires_at
    assert datetime.now(UTC) < expires_at <= datetime.now(UTC) + timedelta(minutes=EXPIRATION_MINUTES)
