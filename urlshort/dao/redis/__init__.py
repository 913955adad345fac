from urlshort.dao.redis.redis_key_schema import RedisKeySchema
from urlshort.dao.redis.mixins import RedisClientMixin
from urlshort.dao.redis.short_url_redis_dao import ShortURLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
]
