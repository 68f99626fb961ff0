from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a short link mapping as stored by a backend.

    Attributes:
        short_id (str):
            Unique identifier drawn from the Base62 alphabet. Immutable once created.
        target_url (str):
            Redirect destination. Immutable once created.
        created_at (Optional[datetime]):
            Moment the mapping was persisted (UTC).
        last_accessed_at (Optional[datetime]):
            Last successful lookup or touch (UTC). Never moves backwards.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = ShortLinkModel(
        ...     short_id='aZ3k',
        ...     target_url='https://example.com/article/123',
        ...     created_at=datetime.now(UTC),
        ...     last_accessed_at=datetime.now(UTC),
        ... )
        >>> link.short_id
        'aZ3k'
        >>> link.target_url
        'https://example.com/article/123'
    """

    short_id: str
    target_url: str
    created_at: datetime | None = None
    last_accessed_at: datetime | None = None
