"""Exception hierarchy for the Hill Country events client."""

from __future__ import annotations


class HillCountryError(Exception):
    """Base exception for all Hill Country events errors."""


class ConfigError(HillCountryError):
    """Client configuration is missing or invalid."""


class InvalidEventError(HillCountryError):
    """An event record could not be parsed into an ``Event``.

    Raised at the store boundary. Calendar helpers recover from it locally
    and drop the offending record.
    """


class ApiConnectionError(HillCountryError):
    """API is unreachable (network error, DNS, timeout)."""


class ApiResponseError(HillCountryError):
    """API returned an unexpected error response.

    Attributes:
        status_code: HTTP status code, if available.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EventNotFoundError(ApiResponseError):
    """API returned 404 for a single event lookup."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Event not found: {slug}", status_code=404)
        self.slug = slug


class RateLimitError(ApiResponseError):
    """API returned 429 Too Many Requests.

    Attributes:
        retry_after: Seconds to wait before retrying, if provided by the server.
    """

    def __init__(
        self,
        message: str = "Rate limited",
        *,
        status_code: int = 429,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after
