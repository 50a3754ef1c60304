class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class ShortenerError(LinkShortenerError):
    """Base exception for errors raised by the shortener service."""

    error_code = 'shortener:shortener_error'


class InvalidInputError(ShortenerError):
    """Raised when a long URL is missing, malformed or disallowed.

    The `kind` attribute narrows down the cause:
        - 'missing-url': no URL (or an empty one) was given
        - 'invalid-url': the URL is not a string
        - 'domain-loop': the URL points back at the service's own domain
    """

    error_code = 'shortener:invalid_input_error'

    def __init__(self, message: str = '', kind: str = 'invalid-url'):
        super().__init__(message)
        self.kind = kind


class NotFoundError(ShortenerError):
    """Raised when a shortcode has no mapping."""

    error_code = 'shortener:not_found_error'


class AllocationExhaustedError(ShortenerError):
    """Raised when no free shortcode was found within the attempt budget."""

    error_code = 'shortener:allocation_exhausted_error'


class StoreUnavailableError(ShortenerError):
    """Raised when the underlying key-value store can't be reached."""

    error_code = 'shortener:store_unavailable_error'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing.

    Subclasses KeyError, mirroring a failed os.environ lookup.
    """

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
