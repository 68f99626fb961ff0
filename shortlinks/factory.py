"""Compose a ShortLinksManager from application configuration

Expected configuration section (see shortlinks.utils.config):

    {
        "backend": "redis",                 # or "memory"
        "redis": {"host": "...", "port": 6379, "db": 0, "password": "..."},
        "manager": {
            "short_id_length": 4,
            "max_attempts": 3,
            "batch_size": 50,
            "should_update_last_access_on_get": true,
            "invalidate_cache_on_clean": true
        },
        "caches": [
            {"type": "memory", "max_size": 1024},
            {"type": "redis", "ttl": 3600}
        ]
    }

With the Redis backend, the short ID length is resumed from (and escalations
persisted to) ShortIdLengthRedisDAO; "short_id_length" is only the initial
value. Redis caches without their own "redis" block share the backend's client.

Example:
    >>> from shortlinks.factory import build_manager
    >>> manager = build_manager()  # loads the 'shortlinks' AppConfig section
    >>> manager.create_short_link('https://example.com')
    'aZ3k'
"""

import logging
from dataclasses import fields
from typing import Any

import redis

from shortlinks.constants import Defaults, TTL
from shortlinks.dao.base import CacheBaseDAO, ShortLinkBaseDAO
from shortlinks.dao.cache import MemoryCacheDAO, RedisCacheDAO
from shortlinks.dao.memory import ShortLinkMemoryDAO
from shortlinks.dao.redis import ShortIdLengthRedisDAO, ShortLinkRedisDAO
from shortlinks.exceptions import BadConfigurationError
from shortlinks.manager import ManagerOptions, ShortLinksManager, create_manager
from shortlinks.utils.config import app_prefix, load_config


logger = logging.getLogger(__name__)

OPTION_NAMES = frozenset(field.name for field in fields(ManagerOptions))


def build_manager(section: str = 'shortlinks', config: dict[str, Any] | None = None) -> ShortLinksManager:
    """Build a ShortLinksManager from a configuration section

    Args:
        section (str):
            AppConfig section to load when `config` is not given.
        config (dict | None):
            Already loaded configuration section.

    Raises:
        BadConfigurationError:
            If the backend, a cache type or a manager option is unknown.
        DataStoreError:
            If Redis is unreachable.
    """
    if config is None:
        config = load_config(section)

    manager_config = dict(config.get('manager') or {})
    default_length = manager_config.pop('short_id_length', Defaults.SHORT_ID_LENGTH)
    unknown = set(manager_config) - OPTION_NAMES
    if unknown:
        raise BadConfigurationError(f'Unknown manager options: {", ".join(sorted(unknown))}')
    options = ManagerOptions(**manager_config)

    prefix = app_prefix()
    backend_name = config.get('backend', 'redis')
    backend: ShortLinkBaseDAO

    if backend_name == 'redis':
        backend = ShortLinkRedisDAO(**_redis_config(config), prefix=prefix)
        length_dao = ShortIdLengthRedisDAO(redis_client=backend.redis, prefix=prefix, healthcheck=False)
        short_id_length = length_dao.get(default=default_length)
        on_short_id_length_updated = length_dao.update
    elif backend_name == 'memory':
        backend = ShortLinkMemoryDAO()
        short_id_length = default_length
        on_short_id_length_updated = None
    else:
        raise BadConfigurationError(f"Unknown short links backend '{backend_name}'.")

    shared_client = backend.redis if isinstance(backend, ShortLinkRedisDAO) else None
    caches = [_build_cache(cache_config, prefix, shared_client) for cache_config in config.get('caches') or []]

    logger.debug(
        'Building short links manager.',
        extra={'backend': backend_name, 'caches': [type(cache).__name__ for cache in caches], 'shortIdLength': short_id_length},
    )
    return create_manager(
        backend=backend,
        caches=caches,
        short_id_length=short_id_length,
        on_short_id_length_updated=on_short_id_length_updated,
        options=options,
    )


def _redis_config(config: dict[str, Any]) -> dict[str, Any]:
    try:
        return {f'redis_{k}': v for k, v in config['redis'].items()}
    except (KeyError, AttributeError) as e:
        raise BadConfigurationError("Missing 'redis' connection parameters.") from e


def _build_cache(cache_config: dict[str, Any], prefix: str | None, shared_client: redis.Redis | None) -> CacheBaseDAO:
    cache_type = cache_config.get('type')

    if cache_type == 'memory':
        return MemoryCacheDAO(max_size=cache_config.get('max_size', Defaults.MEMORY_CACHE_SIZE))

    if cache_type == 'redis':
        ttl = cache_config.get('ttl', TTL.WARM)
        if 'redis' in cache_config:
            return RedisCacheDAO(ttl=ttl, **_redis_config(cache_config), prefix=prefix)
        if shared_client is None:
            raise BadConfigurationError("Redis cache requires 'redis' connection parameters.")
        return RedisCacheDAO(ttl=ttl, redis_client=shared_client, prefix=prefix)

    raise BadConfigurationError(f"Unknown cache type '{cache_type}'.")
