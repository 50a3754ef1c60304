"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    TargetAlreadyShortenedError:
        Raised when attempting to insert a ShortURLModel whose target URL
        already has a shortcode. Carries the existing shortcode.

    ConcurrentWriteError:
        Raised when a concurrent writer touched the records while an insert
        was in flight. The insert wrote nothing and may be retried.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from linkshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    pass


class TargetAlreadyShortenedError(DAOError):
    """Exception raised when the target URL of a new ShortURLModel is already mapped to a shortcode."""

    def __init__(self, message: str = '', shortcode: str | None = None):
        super().__init__(message)
        self.shortcode = shortcode


class ConcurrentWriteError(DAOError):
    """Exception raised when a watched key changed before the transaction could commit."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
