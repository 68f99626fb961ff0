"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Key generation
   - Ensures link, last access index and short ID length keys are generated correctly.

2. Prefix behavior
   - Confirms keys are not prefixed when no prefix is provided.
   - Confirms keys are correctly prefixed when a valid prefix is provided.

3. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Key generation
# -------------------------------


@pytest.mark.parametrize(
    'short_id, expected',
    [
        ('abc1', 'links:abc1'),
        ('XyZ789', 'links:XyZ789'),
    ],
)
def test_link_key(short_id, expected):
    """Ensure link_key() generates valid Redis keys."""
    assert RedisKeySchema().link_key(short_id) == expected


def test_last_accessed_key():
    assert RedisKeySchema().last_accessed_key() == 'links:last_accessed'


def test_short_id_length_key():
    assert RedisKeySchema().short_id_length_key() == 'config:short_id_length'


# -------------------------------
# 2. Prefix behavior
# -------------------------------


def test_default_prefix_is_none():
    assert RedisKeySchema().prefix is None


@pytest.mark.parametrize('prefix', ['shortlinks:dev', 'app:prod', ''])
def test_custom_prefix(prefix):
    """Ensure every key is namespaced under the given prefix."""
    keys = RedisKeySchema(prefix=prefix)

    assert keys.link_key('abc1') == f'{prefix}:links:abc1'
    assert keys.last_accessed_key() == f'{prefix}:links:last_accessed'
    assert keys.short_id_length_key() == f'{prefix}:config:short_id_length'


# -------------------------------
# 3. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, 1.5, ['app'], {'app': 'dev'}])
def test_invalid_prefix_type(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
