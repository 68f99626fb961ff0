"""Abstract base class for short link caches.

A cache is an optional fast path in front of the backend holding
short ID -> target URL entries. Any number of caches may be stacked in
front of a backend; the ShortLinksManager consults them in order.

Eviction (TTL, LRU, ...) is each implementation's own responsibility.
"""

from abc import ABC, abstractmethod


class CacheBaseDAO(ABC):
    """Interface for short link caches.

    Methods:
        init() -> None:
            Optional setup, called lazily before the first lookup. Must be idempotent.

        get(short_id: str) -> str | None:
            Cached target URL, None on cache miss.

        set(short_id: str, target_url: str) -> None:
            Store an entry.

        delete(short_id: str) -> None:
            Remove an entry. Optional; raises NotImplementedError by default.
    """

    def init(self) -> None:  # noqa: B027
        return None

    @abstractmethod
    def get(self, short_id: str) -> str | None:
        pass

    @abstractmethod
    def set(self, short_id: str, target_url: str) -> None:
        pass

    def delete(self, short_id: str) -> None:
        raise NotImplementedError(f'{type(self).__name__} does not support deletion.')
