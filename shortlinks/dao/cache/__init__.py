from shortlinks.dao.cache.cache_key_schema import CacheKeySchema
from shortlinks.dao.cache.redis_cache_dao import RedisCacheDAO
from shortlinks.dao.cache.memory_cache_dao import MemoryCacheDAO


__all__ = [
    'CacheKeySchema',
    'RedisCacheDAO',
    'MemoryCacheDAO',
]
