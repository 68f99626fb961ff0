"""Short links manager

Orchestrates short link creation and lookup on top of a storage backend
(ShortLinkBaseDAO) and zero or more cache tiers (CacheBaseDAO).

Creation:
    - Generate a batch of distinct candidate short IDs at the current length.
    - Ask the backend which of them already exist and pick the first free one.
    - If the whole batch is taken, the namespace at this length is considered
      saturated: grow the length by one, notify `on_short_id_length_updated`
      and retry. Give up with ExhaustionError after `max_attempts` batches.
    - Persist the mapping and write it through to every cache tier.

Lookup (cache-aside):
    - Query caches in order and stop at the first hit.
    - Fall back to the backend when every tier misses.
    - On success, bump the last access time (unless disabled) and write the
      value to every cache tier. Misses are never cached.

Example:
    >>> from shortlinks.dao.memory import ShortLinkMemoryDAO
    >>> from shortlinks.dao.cache import MemoryCacheDAO
    >>> manager = create_manager(backend=ShortLinkMemoryDAO(), caches=[MemoryCacheDAO()], short_id_length=4)
    >>> short_id = manager.create_short_link('https://example.com')
    >>> manager.get_target_url(short_id)
    'https://example.com'
    >>> manager.get_target_url('nope') is None
    True
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from beartype import beartype

from shortlinks.constants import Defaults
from shortlinks.dao.base import CacheBaseDAO, ShortLinkBaseDAO
from shortlinks.dao.exceptions import DAOError
from shortlinks.exceptions import BadConfigurationError, ExhaustionError
from shortlinks.manager.id_generator import generate_unique_ids


logger = logging.getLogger(__name__)

ShortIdLengthCallback = Callable[[int], Any]


@dataclass(frozen=True)
class ManagerOptions:
    """Behavioral options of ShortLinksManager.

    Attributes:
        should_update_last_access_on_get (bool):
            Bump the backend's last access time on every successful lookup.
        max_attempts (int):
            Candidate batches tried by create_short_link() before giving up.
        batch_size (int):
            Candidates generated and checked against the backend per attempt.
        invalidate_cache_on_clean (bool):
            Delete pruned short IDs from every cache tier supporting deletion.
    """

    should_update_last_access_on_get: bool = True
    max_attempts: int = Defaults.MAX_ATTEMPTS
    batch_size: int = Defaults.BATCH_SIZE
    invalidate_cache_on_clean: bool = True

    def __post_init__(self):
        if self.max_attempts < 1:
            raise BadConfigurationError(f'max_attempts must be a positive integer (given value: {self.max_attempts}).')
        if self.batch_size < 1:
            raise BadConfigurationError(f'batch_size must be a positive integer (given value: {self.batch_size}).')


class ShortLinksManager:
    """Create and resolve short links through a backend and layered caches.

    Attributes:
        backend (ShortLinkBaseDAO):
            Durable short ID -> target URL store.
        caches (list[CacheBaseDAO]):
            Cache tiers, consulted first to last.
        short_id_length (int):
            Current short ID length. Only ever grows.
        on_short_id_length_updated (ShortIdLengthCallback | None):
            Notified with the new length on every escalation. Persisting it
            durably (with a "set if greater" policy) is the callee's job.
        options (ManagerOptions):
            Behavioral options.
    """

    def __init__(
        self,
        backend: ShortLinkBaseDAO,
        caches: Sequence[CacheBaseDAO] | None = None,
        short_id_length: int = Defaults.SHORT_ID_LENGTH,
        on_short_id_length_updated: ShortIdLengthCallback | None = None,
        options: ManagerOptions | None = None,
    ):
        if short_id_length < 1:
            raise BadConfigurationError(f'short_id_length must be a positive integer (given value: {short_id_length}).')

        self.backend = backend
        self.caches = list(caches or [])
        self.short_id_length = short_id_length
        self.on_short_id_length_updated = on_short_id_length_updated
        self.options = options or ManagerOptions()
        self._initialized_caches: set[int] = set()

    @beartype
    def create_short_link(self, target_url: str) -> str:
        """Generate a free short ID and map it to the target URL

        Args:
            target_url (str):
                Redirect destination.

        Returns:
            str: the new short ID.

        Raises:
            ExhaustionError:
                If no free short ID was found within max_attempts batches.
            ShortLinkAlreadyExistsError:
                If another writer claimed the chosen short ID in the meantime.
            DataStoreError:
                If the backend or a cache fails.
        """
        length = self.short_id_length
        short_id = None

        for attempt in range(1, self.options.max_attempts + 1):
            candidates = generate_unique_ids(self.options.batch_size, length)
            existing = set(self.backend.check_short_ids_exist(candidates))
            short_id = next((candidate for candidate in candidates if candidate not in existing), None)
            if short_id is not None:
                break

            length += 1
            self._escalate_short_id_length(length, attempt)

        if short_id is None:
            logger.warning(
                'Unable to find a free short ID.',
                extra={'attempts': self.options.max_attempts, 'shortIdLength': length},
            )
            raise ExhaustionError(
                f'Unable to create a short link after {self.options.max_attempts} attempts '
                f'(short ID length reached {length}). The short ID space may be exhausted.'
            )

        self.backend.create_short_link(short_id, target_url)
        for cache in self.caches:
            cache.set(short_id, target_url)

        logger.debug('Created short link.', extra={'shortId': short_id})
        return short_id

    @beartype
    def get_target_url(self, short_id: str) -> str | None:
        """Resolve a short ID to its target URL

        Returns:
            str | None: the target URL, or None if the short ID doesn't exist.

        Raises:
            DataStoreError:
                If the backend or a cache fails.
        """
        target_url = None

        for tier, cache in enumerate(self.caches):
            self._init_cache(cache)
            target_url = cache.get(short_id)
            if target_url is not None:
                logger.debug('Cache hit.', extra={'shortId': short_id, 'cacheTier': tier})
                break

        if target_url is None:
            target_url = self.backend.get_target_url(short_id)

        if target_url is None:
            logger.debug('Short link not found.', extra={'shortId': short_id})
            return None

        if self.options.should_update_last_access_on_get:
            self.backend.update_last_access_time(short_id)

        for cache in self.caches:
            cache.set(short_id, target_url)

        return target_url

    @beartype
    def update_short_link_last_access_time(self, short_id: str, time: datetime | None = None) -> None:
        """Keep a short link alive without resolving it

        Args:
            short_id (str):
                Short ID of the link.
            time (datetime | None):
                Last access time. Defaults to now.
        """
        self.backend.update_last_access_time(short_id, time)

    @beartype
    def clean_unused_links(self, max_age_days: int | float) -> list[str]:
        """Delete links not accessed within max_age_days

        Pruned short IDs are removed from every cache tier supporting deletion
        (unless disabled via ManagerOptions.invalidate_cache_on_clean). Each
        deletion is attempted independently; failures are logged, the links
        are already gone from the backend.

        Returns:
            list[str]: short IDs deleted by the backend.

        Raises:
            DataStoreError:
                If the backend fails.
        """
        deleted = list(self.backend.clean_unused_links(max_age_days) or [])
        logger.info('Pruned unused short links.', extra={'maxAgeDays': max_age_days, 'deletedCount': len(deleted)})

        if deleted and self.options.invalidate_cache_on_clean:
            for cache in self.caches:
                self._invalidate(cache, deleted)

        return deleted

    def _escalate_short_id_length(self, length: int, attempt: int) -> None:
        # Concurrent escalations may race; keep the larger value
        self.short_id_length = max(self.short_id_length, length)
        logger.info(
            'Short ID namespace saturated. Escalating short ID length.',
            extra={'shortIdLength': length, 'attempt': attempt},
        )
        if self.on_short_id_length_updated is not None:
            self.on_short_id_length_updated(length)

    def _init_cache(self, cache: CacheBaseDAO) -> None:
        if id(cache) not in self._initialized_caches:
            cache.init()
            self._initialized_caches.add(id(cache))

    def _invalidate(self, cache: CacheBaseDAO, short_ids: list[str]) -> None:
        failed = 0
        for short_id in short_ids:
            try:
                cache.delete(short_id)
            except NotImplementedError:
                logger.debug('Cache does not support deletion.', extra={'cache': type(cache).__name__})
                return
            except DAOError:
                failed += 1
                logger.warning(
                    'Failed to invalidate pruned short link in cache.',
                    extra={'cache': type(cache).__name__, 'shortId': short_id},
                    exc_info=True,
                )

        if failed:
            logger.warning(
                'Failed to invalidate pruned short links in cache.',
                extra={'cache': type(cache).__name__, 'failedCount': failed},
            )


def create_manager(
    backend: ShortLinkBaseDAO,
    caches: Sequence[CacheBaseDAO] | None = None,
    short_id_length: int = Defaults.SHORT_ID_LENGTH,
    on_short_id_length_updated: ShortIdLengthCallback | None = None,
    options: ManagerOptions | None = None,
) -> ShortLinksManager:
    """Run the backend's one-time setup and build a ShortLinksManager"""
    backend.init()
    return ShortLinksManager(
        backend=backend,
        caches=caches,
        short_id_length=short_id_length,
        on_short_id_length_updated=on_short_id_length_updated,
        options=options,
    )
