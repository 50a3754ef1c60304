"""Shortener service: translate between long URLs and shortcodes

The service is stateless; all state lives behind the DAO handed to its
constructor. Every long URL maps to exactly one shortcode: shortening the
same URL twice returns the same shortcode.

Classes:
    ShortenerService:
        shorten(target) -> shortcode, resolve(shortcode) -> target.

Example:
    >>> from linkshortener.dao.redis import ShortURLRedisDAO
    >>> service = ShortenerService(ShortURLRedisDAO(prefix='linkshortener:dev'), domain='sho.rt')
    >>> shortcode = service.shorten('https://example.com')
    >>> service.shorten('https://example.com') == shortcode
    True
    >>> service.resolve(shortcode)
    'https://example.com'
"""

import functools
import logging
from typing import Any
from collections.abc import Callable

from linkshortener.constants import Shortcode
from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import (
    ConcurrentWriteError,
    DataStoreError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    TargetAlreadyShortenedError,
)
from linkshortener.exceptions import (
    AllocationExhaustedError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from linkshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


def translate_datastore_error(method: Callable[..., Any]) -> Callable[..., Any]:
    """Re-raise DAO DataStoreError as the service-level StoreUnavailableError"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DataStoreError as e:
            raise StoreUnavailableError(str(e)) from e

    return wrapper


class ShortenerService:
    """Allocate, deduplicate and resolve shortcodes on top of a ShortURL DAO.

    Attributes:
        dao (ShortURLBaseDAO):
            Data access object holding forward and reverse records.
        domain (str | None):
            The service's own domain. Long URLs containing it are rejected
            to prevent redirect loops. None disables the check.
        shortcode_length (int):
            Length of newly generated shortcodes.
        max_attempts (int):
            Allocation attempts before raising AllocationExhaustedError.
        generator (Callable[..., str]):
            Shortcode generator, called as generator(length=shortcode_length).
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        domain: str | None = None,
        shortcode_length: int = Shortcode.DEFAULT_LENGTH,
        max_attempts: int = Shortcode.DEFAULT_MAX_ATTEMPTS,
        generator: Callable[..., str] = generate_shortcode,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.domain = domain.lower() if domain else None
        self.shortcode_length = shortcode_length
        self.max_attempts = max_attempts
        self.generator = generator

    def validate(self, target: Any) -> str:
        """Check a long URL can be shortened

        Args:
            target (Any):
                Candidate long URL, usually straight out of a JSON body.

        Returns:
            str: the validated long URL

        Raises:
            InvalidInputError:
                kind='missing-url' if target is None or empty,
                kind='invalid-url' if target is not a string,
                kind='domain-loop' if target contains the service's domain.
        """
        if target is None or target == '':
            raise InvalidInputError('missing url', kind='missing-url')
        if not isinstance(target, str):
            raise InvalidInputError('url must be a string', kind='invalid-url')
        if not target.strip():
            raise InvalidInputError('missing url', kind='missing-url')
        if self.domain and self.domain in target.lower():
            raise InvalidInputError(f'url must not point to {self.domain}', kind='domain-loop')
        return target

    @translate_datastore_error
    def shorten(self, target: Any) -> str:
        """Return the shortcode of a long URL, allocating one if needed

        Procedure (repeated up to `max_attempts` times):
        - Step 1: Return the existing shortcode if the target was shortened before
        - Step 2: Generate a candidate shortcode
        - Step 3: Atomically store forward and reverse records
            * shortcode taken -> try another candidate
            * target shortened concurrently -> return the winner's shortcode
            * concurrent write -> start over from step 1

        Args:
            target (Any):
                Long URL to shorten.

        Returns:
            str: shortcode (newly allocated or reused)

        Raises:
            InvalidInputError:
                If the target fails validation. Nothing is written.
            AllocationExhaustedError:
                If no free shortcode was found within `max_attempts`.
            StoreUnavailableError:
                If the data store can't be reached.
        """
        target = self.validate(target)

        for attempt in range(1, self.max_attempts + 1):
            # 1- Deduplicate
            existing = self.dao.find(target)
            if existing is not None:
                logger.debug('Target already shortened.', extra={'shortcode': existing.shortcode})
                return existing.shortcode

            # 2- Generate candidate
            shortcode = self.generator(length=self.shortcode_length)

            # 3- Commit both records
            try:
                self.dao.insert(ShortURLModel(target=target, shortcode=shortcode))
            except TargetAlreadyShortenedError as e:
                logger.debug('Target shortened by a concurrent request.', extra={'shortcode': e.shortcode})
                return e.shortcode
            except ShortURLAlreadyExistsError:
                logger.info('Shortcode collision. Retrying.', extra={'shortcode': shortcode, 'attempt': attempt})
            except ConcurrentWriteError:
                logger.info('Concurrent write detected. Retrying.', extra={'shortcode': shortcode, 'attempt': attempt})
            else:
                logger.debug('Allocated new shortcode.', extra={'shortcode': shortcode, 'attempt': attempt})
                return shortcode

        logger.error(
            'Failed to allocate a shortcode. Shortcode space may be saturated or the generator degenerate.',
            extra={'max_attempts': self.max_attempts, 'shortcode_length': self.shortcode_length},
        )
        raise AllocationExhaustedError(f'No free shortcode found after {self.max_attempts} attempts.')

    @translate_datastore_error
    def resolve(self, shortcode: str) -> str:
        """Return the long URL a shortcode points to

        Args:
            shortcode (str):
                Shortcode extracted from the request path.

        Returns:
            str: the long URL

        Raises:
            NotFoundError:
                If the shortcode has no mapping.
            StoreUnavailableError:
                If the data store can't be reached.
        """
        if not shortcode:
            raise NotFoundError('empty shortcode')

        try:
            return self.dao.get(shortcode=shortcode).target
        except ShortURLNotFoundError as e:
            raise NotFoundError(f"shortcode '{shortcode}' not found") from e
