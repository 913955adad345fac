from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The short identifier representing the shortened URL.
        expires_at (Optional[datetime]):
            Time-To-Live(TTL) as Python datetime, after which the short URL
            is no longer valid or persisted. None until the data store
            reports it.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="aZ3k9Q",
        ...     expires_at=datetime.now(UTC) + timedelta(minutes=60)
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.shortcode
        'aZ3k9Q'
    """

    target: str
    shortcode: str
    expires_at: Optional[datetime] = None
