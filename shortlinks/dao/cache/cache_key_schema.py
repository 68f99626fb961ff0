import functools
from collections.abc import Callable


__all__ = ['CacheKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        return f'{self.prefix}:{func(self, *args, **kwargs)}'

    return wrapper


class CacheKeySchema:
    """Provide standardized Redis keys for cached short links.

    Keys always live under the 'cache' namespace (optionally followed by an
    app prefix, e.g. "cache:shortlinks:prod"), so a cache sharing a Redis
    database with ShortLinkRedisDAO never collides with its link hashes.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = f'cache:{prefix}' if prefix is not None else 'cache'

    @prefix_key
    def link_key(self, short_id: str) -> str:
        return f'links:{short_id}'
