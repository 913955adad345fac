"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO. Every
mapping is a single string key with a TTL, so Redis itself removes expired
short URLs.

Redis commands:
    insert -> SET <prefix>:links:<shortcode>:url <target> NX EX <minutes * 60>
    get    -> GET <prefix>:links:<shortcode>:url + PTTL (one transaction)

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from urlshort.models import ShortURLModel
    >>> from urlshort.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(expiration_minutes=60, prefix="urlshort:dev")

    >>> dao.insert(ShortURLModel(target="https://example.com/page", shortcode="aZ3k9Q"))
    True
    >>> dao.get("aZ3k9Q").target
    'https://example.com/page'
"""

import logging
from datetime import datetime, timedelta, UTC

from beartype import beartype

from urlshort.models import ShortURLModel
from urlshort.dao.base import ShortURLBaseDAO
from urlshort.dao.redis.mixins import RedisClientMixin
from urlshort.dao.redis.helpers import handle_redis_connection_error
from urlshort.dao.exceptions import ShortURLNotFoundError
from urlshort.utils.helpers import is_valid_url


logger = logging.getLogger(__name__)


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        expiration_minutes (int):
            TTL applied to every inserted mapping.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> bool:
            Store a mapping unless the shortcode exists (SET NX).
            Raises DataStoreError on connectivity issues with Redis.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping and its expiry by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist or expired.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, expiration_minutes: int, **kwargs):
        """Initialize the DAO

        Args:
            expiration_minutes (int):
                Positive number of minutes a mapping lives after insertion.
            **kwargs:
                Redis connection parameters, see RedisClientMixin.

        Raises:
            ValueError:
                If expiration_minutes is not a positive integer.
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if isinstance(expiration_minutes, bool) or not isinstance(expiration_minutes, int) or expiration_minutes <= 0:
            raise ValueError(f'Expiration must be a positive integer number of minutes (given value: {expiration_minutes!r}).')

        self.expiration_minutes = expiration_minutes
        super().__init__(**kwargs)

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> bool:
        """Store a short URL mapping in Redis if its shortcode is free

        SET NX makes the existence check and the write a single atomic
        command, so two concurrent requests that drew the same shortcode
        can't overwrite each other: the first one wins, the second one is
        told the key was taken.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            bool: True if stored, False if the shortcode already exists.

        Raises:
            ValueError:
                If the target is not an absolute URL.
            DataStoreError:
                If a Redis connection issue or timeout occurs.

        Example:
            >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='aZ3k9Q'))
            True
        """
        if not is_valid_url(short_url.target):
            raise ValueError(f"Refusing to store invalid URL '{short_url.target}'.")

        link_url_key = self.keys.link_url_key(short_url.shortcode)
        created = self.redis.set(link_url_key, short_url.target, nx=True, ex=self.expiration_minutes * 60)

        if not created:
            logger.debug('Shortcode %s already exists. Leaving stored URL untouched.', short_url.shortcode)
        return bool(created)

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Fetches the target URL and its remaining TTL in a single Redis
        transaction, then derives the expiry datetime.

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance if found.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis (or expired).
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('aZ3k9Q')
            ShortURLModel(target='https://example.com', shortcode='aZ3k9Q', ...)
        """
        link_url_key = self.keys.link_url_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_url_key)
            pipe.pttl(link_url_key)
            target, ttl_ms = pipe.execute()

        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        # PTTL is -1 for keys without expiry (written by something else than insert())
        expires_at = datetime.now(UTC) + timedelta(milliseconds=ttl_ms) if ttl_ms is not None and ttl_ms >= 0 else None
        return ShortURLModel(target=target, shortcode=shortcode, expires_at=expires_at)
