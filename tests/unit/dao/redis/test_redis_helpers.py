"""Unit tests for handle_redis_connection_error decorator.

Test coverage includes:
    1. Normal function execution
    2. Connection error and timeout handling
    3. Other errors propagate unmodified
    4. Function metadata preservation
"""

import pytest
import redis
from unittest.mock import MagicMock

from urlshort.dao.redis.helpers import handle_redis_connection_error
from urlshort.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}
        self.error = error

    @handle_redis_connection_error
    def ping(self):
        """Ping Redis."""
        if self.error is not None:
            raise self.error
        return 'OK'


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


def test_decorator_transforms_redis_connection_error():
    """Ensure Redis ConnectionError is caught and re-raised as DataStoreError."""
    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(redis.exceptions.ConnectionError('refused')).ping()
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_decorator_transforms_redis_timeout_error():
    with pytest.raises(DataStoreError, match='Redis at localhost:6379/0 timed out.'):
        DummyDAO(redis.exceptions.TimeoutError('timed out')).ping()


def test_decorator_propagates_other_errors():
    with pytest.raises(redis.exceptions.ResponseError):
        DummyDAO(redis.exceptions.ResponseError('WRONGTYPE')).ping()


def test_decorator_preserves_metadata():
    assert DummyDAO.ping.__name__ == 'ping'
    assert DummyDAO.ping.__doc__ == 'Ping Redis.'
