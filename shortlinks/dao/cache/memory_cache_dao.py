import threading
from collections import OrderedDict

from shortlinks.constants import Defaults
from shortlinks.dao.base import CacheBaseDAO


class MemoryCacheDAO(CacheBaseDAO):
    """In-process LRU cache of short links.

    Holds at most `max_size` entries; the least recently used entry is
    evicted first. Meant as a first tier in front of a shared cache.
    """

    def __init__(self, max_size: int = Defaults.MEMORY_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f'Cache size must be a positive integer (given value: {max_size}).')

        self.max_size = max_size
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, short_id: str) -> bool:
        return short_id in self._entries

    def get(self, short_id: str) -> str | None:
        with self._lock:
            target_url = self._entries.get(short_id)
            if target_url is not None:
                self._entries.move_to_end(short_id)
            return target_url

    def set(self, short_id: str, target_url: str) -> None:
        with self._lock:
            self._entries[short_id] = target_url
            self._entries.move_to_end(short_id)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def delete(self, short_id: str) -> None:
        with self._lock:
            self._entries.pop(short_id, None)
