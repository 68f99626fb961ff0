"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a short link record is not found in the data store.

    ShortLinkAlreadyExistsError:
        Raised when attempting to create a short link whose short ID is taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from shortlinks.dao.exceptions import ShortLinkAlreadyExistsError
    >>> raise ShortLinkAlreadyExistsError("Short link with ID 'aZ3k' already exists.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.ShortLinkAlreadyExistsError: Short link with ID 'aZ3k' already exists.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link record is not found in the data store."""

    pass


class ShortLinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to create a short link that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
