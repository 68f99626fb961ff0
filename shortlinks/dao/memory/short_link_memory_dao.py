"""In-process implementation of ShortLinkBaseDAO.

Keeps every short link in a dictionary guarded by a lock. Nothing survives a
restart, which makes this backend suitable for local development and tests
only. Semantics match ShortLinkRedisDAO:
    - create_short_link() fails fast on an existing short ID;
    - update_last_access_time() ignores unknown IDs and never moves time backwards;
    - clean_unused_links() deletes links accessed strictly before the cutoff.
"""

import threading
from dataclasses import replace
from datetime import datetime, UTC

from shortlinks.models import ShortLinkModel
from shortlinks.dao.base import ShortLinkBaseDAO
from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from shortlinks.utils.helpers import days_ago


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    def __init__(self):
        self._links: dict[str, ShortLinkModel] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._links)

    def get_target_url(self, short_id: str) -> str | None:
        link = self._links.get(short_id)
        return link.target_url if link is not None else None

    def get(self, short_id: str) -> ShortLinkModel:
        try:
            return self._links[short_id]
        except KeyError:
            raise ShortLinkNotFoundError(f"Short link with ID '{short_id}' not found.") from None

    def create_short_link(self, short_id: str, target_url: str) -> None:
        now = datetime.now(UTC)
        with self._lock:
            if short_id in self._links:
                raise ShortLinkAlreadyExistsError(f"Short link with ID '{short_id}' already exists.")
            self._links[short_id] = ShortLinkModel(
                short_id=short_id,
                target_url=target_url,
                created_at=now,
                last_accessed_at=now,
            )

    def check_short_ids_exist(self, short_ids: list[str]) -> list[str]:
        return [short_id for short_id in short_ids if short_id in self._links]

    def update_last_access_time(self, short_id: str, at: datetime | None = None) -> None:
        at = at or datetime.now(UTC)
        with self._lock:
            link = self._links.get(short_id)
            if link is None or (link.last_accessed_at is not None and link.last_accessed_at >= at):
                return
            self._links[short_id] = replace(link, last_accessed_at=at)

    def clean_unused_links(self, max_age_days: int | float) -> list[str]:
        cutoff = days_ago(max_age_days)
        with self._lock:
            stale = [short_id for short_id, link in self._links.items() if link.last_accessed_at < cutoff]
            for short_id in stale:
                del self._links[short_id]
        return stale
