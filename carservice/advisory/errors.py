"""Advisory provider exceptions."""


class AdvisoryError(Exception):
    """Base class for advisory provider failures."""


class RateLimitedError(AdvisoryError):
    """The provider is throttling requests (HTTP 429). Retry later."""

    def __init__(self, message: str = "Advisory provider rate limit exceeded", retry_after=None):
        super().__init__(message)
        self.retry_after = retry_after


class ProviderUnavailableError(AdvisoryError):
    """The provider could not be reached at all."""


class PayloadError(ValueError):
    """A stored advisory payload could not be decoded."""
