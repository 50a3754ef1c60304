"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Insert forward and reverse records of a short URL in one transaction;
    - Retrieve short URLs by shortcode (reverse record) or by target (forward record);
    - Provide error handling and raise appropriate DAO exceptions.

Redis layout (prefix omitted):
    urls:<shortcode>         HASH  url       -> <target url>
    urls:target:<target>     HASH  shortcode -> <shortcode>

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from linkshortener.models import ShortURLModel
    >>> from linkshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="abc123"
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> dao.get("abc123").target
    'https://example.com/page'
    >>> dao.find("https://example.com/page").shortcode
    'abc123'
"""

import redis
from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import (
    ConcurrentWriteError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    TargetAlreadyShortenedError,
)


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Insert the forward and reverse records in a single optimistic transaction.
            Raises ShortURLAlreadyExistsError when the shortcode is taken.
            Raises TargetAlreadyShortenedError when the target already has a shortcode.
            Raises ConcurrentWriteError when a watched key changed before commit.
            Raises DataStoreError on connectivity issues with Redis.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        find(target: str, **kwargs) -> ShortURLModel | None:
            Retrieve a short URL mapping by target URL, None if absent.
            Raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> dao = ShortURLRedisDAO(redis_host="localhost", prefix="shortener:test")
        >>> short_url = ShortURLModel(target="https://example.com", shortcode="abc123")
        >>> dao.insert(short_url)
        <ShortURLRedisDAO>
        >>> dao.get("abc123").target
        'https://example.com'
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        Both keys are WATCHed while their current state is checked, then the two
        HSET commands are queued in a MULTI/EXEC block. If another client writes
        either key in between, EXEC is aborted and nothing is written.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            TargetAlreadyShortenedError:
                If the target URL is already mapped. The existing shortcode is
                available on the exception's `shortcode` attribute.
            ConcurrentWriteError:
                If a watched key was modified before the transaction committed.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.

        Example:
            >>> short_url = ShortURLModel(
            ...     target='https://example.com',
            ...     shortcode='abc123'
            ... )
            >>> dao.insert(short_url)
            <ShortURLRedisDAO>
        """
        link_url_key = self.keys.link_url_key(short_url.shortcode)
        target_key = self.keys.target_key(short_url.target)

        # NOTE: Without WATCH, two concurrent requests for the same target could
        #       both miss the forward record and store two different shortcodes:
        #
        #       (lambda 1): HGET urls:target:<url> shortcode   => nil
        #       (lambda 2): HGET urls:target:<url> shortcode   => nil
        #       (lambda 1): HSET urls:target:<url> shortcode abc123
        #       (lambda 2): HSET urls:target:<url> shortcode xyz789  => abc123 is orphaned
        #
        #       With WATCH, lambda 2's EXEC fails and it retries from the lookup.
        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_url_key, target_key)

                existing_shortcode = pipe.hget(target_key, 'shortcode')
                if existing_shortcode is not None:
                    raise TargetAlreadyShortenedError(
                        f"Target '{short_url.target}' is already shortened to '{existing_shortcode}'.",
                        shortcode=existing_shortcode,
                    )
                if pipe.exists(link_url_key):
                    raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")

                pipe.multi()
                pipe.hset(link_url_key, mapping={'url': short_url.target})
                pipe.hset(target_key, mapping={'shortcode': short_url.shortcode})
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ConcurrentWriteError(f"Short URL with code '{short_url.shortcode}' was modified concurrently.") from e
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(target='https://example.com', shortcode='abc123')
        """
        target = self.redis.hget(self.keys.link_url_key(shortcode), 'url')
        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return ShortURLModel(target=target, shortcode=shortcode)

    @handle_redis_connection_error
    @beartype
    def find(self, target: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a stored short URL mapping by its target URL

        Args:
            target (str):
                The original long URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel | None:
                The retrieved ShortURLModel instance, None if the target was never shortened.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.find('https://example.com')
            ShortURLModel(target='https://example.com', shortcode='abc123')
            >>> dao.find('https://never-seen.com') is None
            True
        """
        shortcode = self.redis.hget(self.keys.target_key(target), 'shortcode')
        if shortcode is None:
            return None

        return ShortURLModel(target=target, shortcode=shortcode)
