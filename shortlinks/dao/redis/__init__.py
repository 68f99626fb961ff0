from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.short_link_redis_dao import ShortLinkRedisDAO
from shortlinks.dao.redis.short_id_length_redis_dao import ShortIdLengthRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortLinkRedisDAO',
    'ShortIdLengthRedisDAO',
]
