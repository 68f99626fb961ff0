"""Persist the current short ID length in Redis.

The ShortLinksManager grows its short ID length whenever the namespace at the
current length saturates and notifies a callback with the new length. This
DAO is meant to be that callback's persistence layer, so that new processes
resume at the escalated length.

Concurrent managers may escalate redundantly and report their new lengths out
of order. The stored value is therefore only ever raised ("set if greater"),
using ZADD GT on a single-member sorted set, so that a slower caller's smaller
value can't clobber a larger one.

Example:
    >>> dao = ShortIdLengthRedisDAO(prefix='shortlinks:dev')
    >>> dao.get(default=4)
    4
    >>> dao.update(5)
    5
    >>> dao.update(4)
    5
"""

from beartype import beartype

from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error


class ShortIdLengthRedisDAO(RedisClientMixin):
    MEMBER = 'short_id_length'

    @handle_redis_connection_error
    @beartype
    def get(self, default: int | None = None) -> int | None:
        length = self.redis.zscore(self.keys.short_id_length_key(), self.MEMBER)
        return default if length is None else int(length)

    @handle_redis_connection_error
    @beartype
    def update(self, length: int) -> int:
        """Raise the stored length to `length` unless it's already larger

        Returns:
            int: the stored length after the update.
        """
        key = self.keys.short_id_length_key()
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.zadd(key, {self.MEMBER: length}, gt=True)
            pipe.zscore(key, self.MEMBER)
            _, stored = pipe.execute()
        return int(stored)
