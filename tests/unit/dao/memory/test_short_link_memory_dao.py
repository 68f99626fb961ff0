"""Unit tests for the ShortLinkMemoryDAO

Test coverage includes:

1. Insertion and retrieval
   - Ensures created links resolve and carry creation/last access times.
   - Confirms taken short IDs raise ShortLinkAlreadyExistsError.
   - Confirms missing links raise ShortLinkNotFoundError from get().

2. Existence checks
   - Ensures existing short IDs are reported in input order.

3. Last access bookkeeping
   - Ensures updates never move time backwards and ignore unknown IDs.

4. Pruning
   - Ensures only links accessed strictly before the cutoff are deleted.
"""

from datetime import datetime, timedelta, UTC

import pytest
from freezegun import freeze_time

from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from shortlinks.dao.memory import ShortLinkMemoryDAO


NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def dao():
    return ShortLinkMemoryDAO()


# -------------------------------
# 1. Insertion and retrieval
# -------------------------------


@freeze_time(NOW)
def test_create_short_link(dao):
    dao.create_short_link('abc1', 'https://example.com/test')

    link = dao.get('abc1')
    assert dao.get_target_url('abc1') == 'https://example.com/test'
    assert link.created_at == NOW
    assert link.last_accessed_at == NOW
    assert len(dao) == 1


def test_create_short_link_already_exists(dao):
    dao.create_short_link('abc1', 'https://example.com/first')

    with pytest.raises(ShortLinkAlreadyExistsError):
        dao.create_short_link('abc1', 'https://example.com/second')

    assert dao.get_target_url('abc1') == 'https://example.com/first'


def test_get_missing(dao):
    assert dao.get_target_url('nope') is None
    with pytest.raises(ShortLinkNotFoundError, match="Short link with ID 'nope' not found."):
        dao.get('nope')


# -------------------------------
# 2. Existence checks
# -------------------------------


def test_check_short_ids_exist(dao):
    dao.create_short_link('bbbb', 'https://example.com/b')
    dao.create_short_link('aaaa', 'https://example.com/a')

    assert dao.check_short_ids_exist(['aaaa', 'zzzz', 'bbbb']) == ['aaaa', 'bbbb']
    assert dao.check_short_ids_exist([]) == []


# -------------------------------
# 3. Last access bookkeeping
# -------------------------------


@freeze_time(NOW)
def test_update_last_access_time(dao):
    dao.create_short_link('abc1', 'https://example.com/test')
    later = NOW + timedelta(hours=1)

    dao.update_last_access_time('abc1', later)

    assert dao.get('abc1').last_accessed_at == later


@freeze_time(NOW)
def test_update_last_access_time_never_moves_backwards(dao):
    dao.create_short_link('abc1', 'https://example.com/test')

    dao.update_last_access_time('abc1', NOW - timedelta(days=3))

    assert dao.get('abc1').last_accessed_at == NOW


def test_update_last_access_time_ignores_unknown_ids(dao):
    dao.update_last_access_time('nope')

    assert len(dao) == 0


# -------------------------------
# 4. Pruning
# -------------------------------


def test_clean_unused_links(dao):
    with freeze_time(NOW - timedelta(days=35)):
        dao.create_short_link('old1', 'https://example.com/old')
    with freeze_time(NOW - timedelta(days=1)):
        dao.create_short_link('new1', 'https://example.com/new')

    with freeze_time(NOW):
        deleted = dao.clean_unused_links(30)

    assert deleted == ['old1']
    assert dao.get_target_url('old1') is None
    assert dao.get_target_url('new1') == 'https://example.com/new'


def test_clean_unused_links_keeps_link_touched_recently(dao):
    with freeze_time(NOW - timedelta(days=35)):
        dao.create_short_link('abc1', 'https://example.com/test')
    dao.update_last_access_time('abc1', NOW - timedelta(days=2))

    with freeze_time(NOW):
        assert dao.clean_unused_links(30) == []
