"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, DynamoDB, PostgreSQL).

Every short URL is persisted as two records:
    - a forward record (target URL -> shortcode), used to deduplicate targets;
    - a reverse record (shortcode -> target URL), used to resolve redirects.

Implementations must write both records as a single atomic unit.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import ShortURLModel
        >>> from linkshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ... )
        >>> dao.insert(short_url)

        >>> dao.get("a1b2c3").target
        'https://example.com/blog/article-123'

        >>> dao.find("https://example.com/blog/article-123").shortcode
        'a1b2c3'
"""

from abc import ABC, abstractmethod

from linkshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Atomically insert the forward and reverse records of a ShortURLModel.
            Raises ShortURLAlreadyExistsError if the shortcode is taken.
            Raises TargetAlreadyShortenedError if the target already has a shortcode.
            Raises ConcurrentWriteError if a concurrent write interfered.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel by shortcode (reverse record).
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        find(target: str, **kwargs) -> ShortURLModel | None:
            Retrieve a ShortURLModel by target URL (forward record).
            Returns None if the target was never shortened.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO) must
        extend this class and implement all abstract methods.

    NOTE:
        - Mappings never expire and are never mutated. The DAO does not
          provide an interface to update or delete entries.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists.

            TargetAlreadyShortenedError:
                If the target URL is already mapped to a shortcode.

            ConcurrentWriteError:
                If the records were modified while the insert was in flight.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find(self, target: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its target URL.

        Args:
            target (str):
                The original long URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
