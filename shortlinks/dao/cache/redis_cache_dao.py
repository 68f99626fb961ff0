"""Redis-backed short link cache

Entries are plain string keys with a TTL, so eviction is left to Redis:

    cache:<prefix>:links:<short_id>  -> <target url>  EX <ttl>

The connectivity healthcheck is deferred to init(), which the manager calls
lazily before the first lookup.

Example:
    >>> cache = RedisCacheDAO(ttl=TTL.HOT, prefix='shortlinks:dev')
    >>> cache.init()
    >>> cache.set('aZ3k', 'https://example.com')
    >>> cache.get('aZ3k')
    'https://example.com'
"""

from beartype import beartype

from shortlinks.constants import TTL
from shortlinks.dao.base import CacheBaseDAO
from shortlinks.dao.cache.cache_key_schema import CacheKeySchema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error


class RedisCacheDAO(RedisClientMixin, CacheBaseDAO):
    def __init__(self, ttl: int = TTL.WARM, **kwargs):
        """
        Args:
            ttl (int):
                Entry time-to-live in seconds. Defaults to TTL.WARM (24 hours).
            **kwargs:
                Redis connection parameters, see RedisClientMixin.
        """
        super().__init__(**kwargs, healthcheck=False)
        self.keys = CacheKeySchema(prefix=kwargs.get('prefix'))
        self.ttl = ttl
        self._initialized = False

    def init(self) -> None:
        if not self._initialized:
            self._healthcheck()
            self._initialized = True

    @handle_redis_connection_error
    @beartype
    def get(self, short_id: str) -> str | None:
        return self.redis.get(self.keys.link_key(short_id))

    @handle_redis_connection_error
    @beartype
    def set(self, short_id: str, target_url: str) -> None:
        self.redis.set(self.keys.link_key(short_id), target_url, ex=self.ttl)

    @handle_redis_connection_error
    @beartype
    def delete(self, short_id: str) -> None:
        self.redis.delete(self.keys.link_key(short_id))
