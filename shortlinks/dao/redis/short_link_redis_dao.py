"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO, the
storage backend consumed by the ShortLinksManager.

Key layout (see RedisKeySchema):
    <prefix>:links:<short_id>        -> HASH {target_url, created_at}
    <prefix>:links:last_accessed     -> ZSET {<short_id>: <last access POSIX timestamp>}

The sorted set doubles as the last access index, so pruning stale links is a
single range query instead of a full keyspace scan.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving short links in a Redis datastore.

Example:
    >>> dao = ShortLinkRedisDAO(prefix="shortlinks:dev")
    >>> dao.create_short_link('aZ3k', 'https://example.com/page')
    >>> dao.get_target_url('aZ3k')
    'https://example.com/page'
    >>> dao.check_short_ids_exist(['aZ3k', 'b7Qx'])
    ['aZ3k']
    >>> dao.clean_unused_links(30)
    []
"""

from datetime import datetime, UTC

from beartype import beartype

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error
from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from shortlinks.utils.helpers import days_ago


# Claim the short ID, store the mapping and index its last access in one
# atomic step. Returns 0 if the short ID is taken.
#   KEYS: link key, last access index key
#   ARGV: short ID, target URL, creation time (ISO 8601), creation POSIX timestamp
CREATE_LINK_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'target_url', ARGV[2], 'created_at', ARGV[3])
redis.call('ZADD', KEYS[2], ARGV[4], ARGV[1])
return 1
"""


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get_target_url(short_id: str) -> str | None
        get(short_id: str) -> ShortLinkModel
        create_short_link(short_id: str, target_url: str) -> None
        check_short_ids_exist(short_ids: list[str]) -> list[str]
        update_last_access_time(short_id: str, at: datetime | None = None) -> None
        clean_unused_links(max_age_days: int | float) -> list[str]

        All methods raise DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._create_link = self.redis.register_script(CREATE_LINK_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def get_target_url(self, short_id: str) -> str | None:
        return self.redis.hget(self.keys.link_key(short_id), 'target_url')

    @handle_redis_connection_error
    @beartype
    def get(self, short_id: str) -> ShortLinkModel:
        """Retrieve a stored short link record by short ID

        Fetches the mapping hash and its last access score in a single
        Redis transaction.

        Raises:
            ShortLinkNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hgetall(self.keys.link_key(short_id))
            pipe.zscore(self.keys.last_accessed_key(), short_id)
            fields, last_accessed = pipe.execute()

        if not fields or 'target_url' not in fields:
            raise ShortLinkNotFoundError(f"Short link with ID '{short_id}' not found.")

        created_at = fields.get('created_at')
        return ShortLinkModel(
            short_id=short_id,
            target_url=fields['target_url'],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            last_accessed_at=datetime.fromtimestamp(float(last_accessed), tz=UTC) if last_accessed is not None else None,
        )

    @handle_redis_connection_error
    @beartype
    def create_short_link(self, short_id: str, target_url: str) -> None:
        """Insert a short link mapping into Redis

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same short ID already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.create_short_link('aZ3k', 'https://example.com')
        """
        link_key = self.keys.link_key(short_id)
        now = datetime.now(UTC)

        # NOTE: the script either writes the hash and its index entry together or
        #       nothing at all. A concurrent writer which picked the same
        #       candidate loses here instead of overwriting the mapping.
        created = self._create_link(
            keys=[link_key, self.keys.last_accessed_key()],
            args=[short_id, target_url, now.isoformat(), now.timestamp()],
        )
        if not created:
            raise ShortLinkAlreadyExistsError(f"Short link with ID '{short_id}' already exists.")

    @handle_redis_connection_error
    @beartype
    def check_short_ids_exist(self, short_ids: list[str]) -> list[str]:
        """Return the subset of short IDs which already exist (in input order)

        All EXISTS commands are sent in a single pipelined round trip.
        """
        if not short_ids:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for short_id in short_ids:
                pipe.exists(self.keys.link_key(short_id))
            results = pipe.execute()

        return [short_id for short_id, exists in zip(short_ids, results) if exists]

    @handle_redis_connection_error
    @beartype
    def update_last_access_time(self, short_id: str, at: datetime | None = None) -> None:
        """Bump the last access score of an existing short link

        ZADD XX only updates members already in the index, so a link pruned
        in the meantime is never resurrected. GT keeps the score monotonic.
        """
        at = at or datetime.now(UTC)
        self.redis.zadd(self.keys.last_accessed_key(), {short_id: at.timestamp()}, xx=True, gt=True)

    @handle_redis_connection_error
    @beartype
    def clean_unused_links(self, max_age_days: int | float) -> list[str]:
        """Delete short links last accessed strictly before now - max_age_days

        Returns:
            list[str]: short IDs of the deleted links.

        NOTE: a link touched between the range query and the deletion is still
              deleted. This is accepted since it was stale a moment earlier.
        """
        cutoff = days_ago(max_age_days).timestamp()
        last_accessed_key = self.keys.last_accessed_key()

        # '(' makes the upper bound exclusive
        stale = self.redis.zrangebyscore(last_accessed_key, '-inf', f'({cutoff}')
        if not stale:
            return []

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(*(self.keys.link_key(short_id) for short_id in stale))
            pipe.zrem(last_accessed_key, *stale)
            pipe.execute()

        return list(stale)
