"""Abstract base class for short link data access objects (DAOs).

This class establishes the contract the ShortLinksManager consumes from its
storage backend, regardless of the underlying storage mechanism (e.g. Redis,
in-process memory, SQL).

Responsibilities:
    - Persist append-only short ID -> target URL mappings.
    - Answer batched existence checks for candidate short IDs.
    - Track the last access time of every mapping and prune stale ones.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.dao.redis import ShortLinkRedisDAO
        >>> dao = ShortLinkRedisDAO(prefix='shortlinks:dev')
        >>> dao.check_short_ids_exist(['aZ3k', 'b7Qx'])
        []
        >>> dao.create_short_link('aZ3k', 'https://example.com/blog/article-123')
        >>> dao.get_target_url('aZ3k')
        'https://example.com/blog/article-123'
        >>> dao.get_target_url('nope') is None
        True
"""

from abc import ABC, abstractmethod
from datetime import datetime

from shortlinks.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        init() -> None:
            Optional one-time setup. Called once when the manager is created.

        get_target_url(short_id: str) -> str | None:
            Target URL for the short ID, None if it doesn't exist.

        get(short_id: str) -> ShortLinkModel:
            Full record. Raises ShortLinkNotFoundError if it doesn't exist.

        create_short_link(short_id: str, target_url: str) -> None:
            Persist a new mapping. Raises ShortLinkAlreadyExistsError on conflict.

        check_short_ids_exist(short_ids: list[str]) -> list[str]:
            Subset of the given short IDs which already exist.

        update_last_access_time(short_id: str, at: datetime | None = None) -> None:
            Bump the last access time of an existing mapping.

        clean_unused_links(max_age_days: float) -> list[str]:
            Delete mappings not accessed within max_age_days and return their short IDs.

    Subclassing:
        Datastore-specific implementations must extend this class and implement
        all abstract methods. Every method raises DataStoreError on connectivity
        or storage failures.

    NOTE:
        - "Not found" is never an error for get_target_url() and
          check_short_ids_exist(); absence is a normal return value.
    """

    def init(self) -> None:  # noqa: B027
        """Optional one-time setup, e.g. schema creation"""
        return None

    @abstractmethod
    def get_target_url(self, short_id: str) -> str | None:
        """Retrieve the target URL mapped to a short ID.

        Args:
            short_id (str):
                Short ID to resolve.

        Returns:
            str | None: target URL, or None if the short ID doesn't exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_id: str) -> ShortLinkModel:
        """Retrieve the full short link record.

        Args:
            short_id (str):
                Short ID of the record.

        Returns:
            ShortLinkModel: the stored record.

        Raises:
            ShortLinkNotFoundError:
                If no record with the given short ID exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def create_short_link(self, short_id: str, target_url: str) -> None:
        """Persist a new short ID -> target URL mapping.

        Implementations must fail fast on a uniqueness conflict and never
        overwrite an existing mapping.

        Args:
            short_id (str):
                Free short ID.
            target_url (str):
                Redirect destination.

        Raises:
            ShortLinkAlreadyExistsError:
                If the short ID is already taken.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def check_short_ids_exist(self, short_ids: list[str]) -> list[str]:
        """Return the subset of short IDs which already exist.

        Args:
            short_ids (list[str]):
                Candidate short IDs.

        Returns:
            list[str]: existing short IDs (empty if none exist).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update_last_access_time(self, short_id: str, at: datetime | None = None) -> None:
        """Update the last access time of a short link.

        Missing short IDs are ignored. The stored time never moves backwards.

        Args:
            short_id (str):
                Short ID of the record.
            at (datetime | None):
                Access time. Defaults to now (UTC).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def clean_unused_links(self, max_age_days: float) -> list[str]:
        """Delete every short link last accessed more than max_age_days ago.

        Args:
            max_age_days (float):
                Number of days a record is kept after its last access.

        Returns:
            list[str]: short IDs of the deleted records.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
