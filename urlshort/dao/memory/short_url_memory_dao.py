"""In-process implementation of ShortURLBaseDAO

Keeps mappings in a dictionary guarded by a lock. Expired entries are treated
as absent on read and evicted lazily, mirroring how Redis expires keys. Every
insertion also sweeps out all expired entries so the dictionary stays bounded
by the links created within one expiration window.

Meant for local runs, demos and tests: nothing survives the process, and two
Lambda containers never share mappings.

Example:
    >>> dao = ShortURLMemoryDAO(expiration_minutes=1)
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='aZ3k9Q'))
    True
    >>> dao.get('aZ3k9Q').target
    'https://example.com'
"""

import logging
import threading
from datetime import datetime, timedelta, UTC

from beartype import beartype

from urlshort.models import ShortURLModel
from urlshort.dao.base import ShortURLBaseDAO
from urlshort.dao.exceptions import ShortURLNotFoundError
from urlshort.utils.helpers import is_valid_url


logger = logging.getLogger(__name__)


class ShortURLMemoryDAO(ShortURLBaseDAO):
    def __init__(self, expiration_minutes: int):
        if isinstance(expiration_minutes, bool) or not isinstance(expiration_minutes, int) or expiration_minutes <= 0:
            raise ValueError(f'Expiration must be a positive integer number of minutes (given value: {expiration_minutes!r}).')

        self.expiration_minutes = expiration_minutes
        self._links: dict[str, ShortURLModel] = {}
        self._lock = threading.Lock()

    def _live(self, shortcode: str, now: datetime) -> ShortURLModel | None:
        # Caller must hold the lock
        short_url = self._links.get(shortcode)
        if short_url is not None and short_url.expires_at <= now:
            del self._links[shortcode]
            return None
        return short_url

    def _sweep(self, now: datetime) -> None:
        # Caller must hold the lock
        expired = [shortcode for shortcode, short_url in self._links.items() if short_url.expires_at <= now]
        for shortcode in expired:
            del self._links[shortcode]
        if expired:
            logger.debug('Evicted %d expired short URLs.', len(expired))

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> bool:
        if not is_valid_url(short_url.target):
            raise ValueError(f"Refusing to store invalid URL '{short_url.target}'.")

        now = datetime.now(UTC)
        with self._lock:
            self._sweep(now)
            if short_url.shortcode in self._links:
                logger.debug('Shortcode %s already exists. Leaving stored URL untouched.', short_url.shortcode)
                return False
            self._links[short_url.shortcode] = ShortURLModel(
                target=short_url.target,
                shortcode=short_url.shortcode,
                expires_at=now + timedelta(minutes=self.expiration_minutes),
            )
        return True

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self._lock:
            short_url = self._live(shortcode, datetime.now(UTC))
        if short_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return short_url
