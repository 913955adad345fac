"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes the storage contract consumed by the shorten_url and
redirect_url lambdas, regardless of the underlying storage mechanism (e.g.,
Redis, an in-process dictionary, a relational database).

Responsibilities:
    - Save short URL mappings with "set if absent" semantics.
    - Retrieve short URL mappings, reporting missing/expired keys distinctly.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshort.models import ShortURLModel
        >>> from urlshort.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(expiration_minutes=60, ...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ... )
        >>> dao.insert(short_url)
        True
        >>> dao.insert(ShortURLModel(target="https://other.com", shortcode="a1b2c3"))
        False

        >>> retrieved = dao.get("a1b2c3")
        >>> print(retrieved.target)
        https://example.com/blog/article-123
"""

from abc import ABC, abstractmethod

from urlshort.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> bool:
            Store a new mapping unless the shortcode is already taken.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist or expired.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLMemoryDAO) must extend this class and implement all
        abstract methods. The expiration horizon is fixed when the DAO is
        constructed.

    NOTE:
        - Mappings expire automatically. The DAO does not provide an
          interface to manually delete entries.
        - The set-if-absent check must be atomic on the data store side;
          callers do no locking of their own.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> bool:
        """Store a short URL mapping if its shortcode is free ("set if absent").

        An existing mapping for the same shortcode is never overwritten. That
        case is not an error: the call succeeds and returns False.

        Args:
            short_url (ShortURLModel):
                The mapping to store. Its target must already be a valid URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the mapping was stored, False if the shortcode was taken.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a short URL mapping by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the mapping to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The stored mapping, with `expires_at` populated.

        Raises:
            ShortURLNotFoundError:
                If no live mapping with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
