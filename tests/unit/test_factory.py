"""Unit tests for build_manager() in factory.py

Test coverage includes:

1. Backend selection
   - Ensures the Redis backend is built from the 'redis' block with the app prefix.
   - Ensures the short ID length is resumed from Redis and escalations persisted there.
   - Ensures the memory backend needs no connection parameters.
   - Confirms unknown backends or missing Redis parameters raise BadConfigurationError.

2. Cache tiers
   - Ensures caches are built in configured order.
   - Ensures Redis caches share the backend client unless given their own.
   - Confirms unknown cache types raise BadConfigurationError.

3. Manager options
   - Ensures options are passed through to ManagerOptions.
   - Confirms unknown options raise BadConfigurationError.

4. Configuration loading
   - Ensures the AppConfig section is loaded when no config is given.
"""

from unittest.mock import MagicMock, patch

import pytest

from shortlinks import factory
from shortlinks.constants import TTL
from shortlinks.dao.cache import MemoryCacheDAO, RedisCacheDAO
from shortlinks.dao.memory import ShortLinkMemoryDAO
from shortlinks.dao.redis import ShortLinkRedisDAO
from shortlinks.exceptions import BadConfigurationError
from shortlinks.manager import ManagerOptions


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv('APP_NAME', 'shortlinks')
    monkeypatch.setenv('APP_ENV', 'test')


@pytest.fixture
def redis_mock():
    """Patch redis.Redis so every DAO gets the same mocked client."""
    with patch('shortlinks.dao.redis.mixins.redis.Redis') as redis_cls:
        redis_cls.return_value.zscore.return_value = None
        yield redis_cls


@pytest.fixture
def redis_config():
    return {
        'backend': 'redis',
        'redis': {'host': 'redis.test', 'port': 6379, 'db': 0},
    }


# -------------------------------
# 1. Backend selection
# -------------------------------


def test_build_redis_backend(redis_mock, redis_config):
    manager = factory.build_manager(config=redis_config)

    assert isinstance(manager.backend, ShortLinkRedisDAO)
    assert manager.backend.keys.prefix == 'shortlinks:test'
    assert manager.short_id_length == 4
    redis_mock.assert_called_once_with(host='redis.test', port=6379, db=0, decode_responses=True, username=None, password=None)
    redis_mock.return_value.ping.assert_called_once()


def test_redis_backend_resumes_persisted_length(redis_mock, redis_config):
    redis_mock.return_value.zscore.return_value = 6.0

    manager = factory.build_manager(config=redis_config)

    assert manager.short_id_length == 6
    redis_mock.return_value.zscore.assert_called_once_with('shortlinks:test:config:short_id_length', 'short_id_length')


def test_redis_backend_persists_escalations(redis_mock, redis_config):
    redis_client = redis_mock.return_value
    redis_client.pipeline.return_value.__enter__.return_value.execute.return_value = (1, 5.0)

    manager = factory.build_manager(config=redis_config)
    manager.on_short_id_length_updated(5)

    redis_client.pipeline.return_value.__enter__.return_value.zadd.assert_called_once_with(
        'shortlinks:test:config:short_id_length', {'short_id_length': 5}, gt=True
    )


def test_build_memory_backend():
    manager = factory.build_manager(config={'backend': 'memory', 'manager': {'short_id_length': 3}})

    assert isinstance(manager.backend, ShortLinkMemoryDAO)
    assert manager.short_id_length == 3
    assert manager.on_short_id_length_updated is None


def test_unknown_backend():
    with pytest.raises(BadConfigurationError, match="Unknown short links backend 'dynamodb'."):
        factory.build_manager(config={'backend': 'dynamodb'})


def test_redis_backend_without_connection_parameters():
    with pytest.raises(BadConfigurationError, match="Missing 'redis' connection parameters."):
        factory.build_manager(config={'backend': 'redis'})


# -------------------------------
# 2. Cache tiers
# -------------------------------


def test_build_caches_in_order(redis_mock, redis_config):
    redis_config['caches'] = [{'type': 'memory', 'max_size': 16}, {'type': 'redis', 'ttl': TTL.HOT}]

    manager = factory.build_manager(config=redis_config)

    memory_cache, redis_cache = manager.caches
    assert isinstance(memory_cache, MemoryCacheDAO)
    assert memory_cache.max_size == 16
    assert isinstance(redis_cache, RedisCacheDAO)
    assert redis_cache.ttl == TTL.HOT
    assert redis_cache.redis is manager.backend.redis
    assert redis_cache.keys.prefix == 'cache:shortlinks:test'


def test_redis_cache_with_own_connection(redis_mock):
    config = {
        'backend': 'memory',
        'caches': [{'type': 'redis', 'redis': {'host': 'cache.test', 'port': 6380, 'db': 1}}],
    }

    manager = factory.build_manager(config=config)

    (redis_cache,) = manager.caches
    assert redis_cache.ttl == TTL.WARM
    redis_mock.assert_called_once_with(host='cache.test', port=6380, db=1, decode_responses=True, username=None, password=None)
    redis_mock.return_value.ping.assert_not_called()


def test_redis_cache_without_connection():
    config = {'backend': 'memory', 'caches': [{'type': 'redis'}]}

    with pytest.raises(BadConfigurationError, match="Redis cache requires 'redis' connection parameters."):
        factory.build_manager(config=config)


def test_unknown_cache_type():
    with pytest.raises(BadConfigurationError, match="Unknown cache type 'memcached'."):
        factory.build_manager(config={'backend': 'memory', 'caches': [{'type': 'memcached'}]})


# -------------------------------
# 3. Manager options
# -------------------------------


def test_manager_options():
    config = {
        'backend': 'memory',
        'manager': {'max_attempts': 5, 'batch_size': 10, 'should_update_last_access_on_get': False},
    }

    manager = factory.build_manager(config=config)

    assert manager.options == ManagerOptions(max_attempts=5, batch_size=10, should_update_last_access_on_get=False)


def test_unknown_manager_options():
    with pytest.raises(BadConfigurationError, match='Unknown manager options: retries'):
        factory.build_manager(config={'backend': 'memory', 'manager': {'retries': 5}})


# -------------------------------
# 4. Configuration loading
# -------------------------------


def test_build_manager_loads_config(monkeypatch):
    load_config = MagicMock(return_value={'backend': 'memory'})
    monkeypatch.setattr(factory, 'load_config', load_config)

    manager = factory.build_manager()

    load_config.assert_called_once_with('shortlinks')
    assert isinstance(manager.backend, ShortLinkMemoryDAO)
