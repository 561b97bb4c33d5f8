"""Exception hierarchy for Resilient Fetch.

Provides structured error handling with one exception type per
classified failure mode. Every error raised by a request carries an
``ErrorKind`` tag and a message that is safe to log or display directly.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tags for the classified error variants."""

    MALFORMED_URL = "malformed_url"
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    FORBIDDEN_BY_POLICY = "forbidden_by_policy"
    UNKNOWN = "unknown"


class ResilientFetchError(Exception):
    """Base exception for all Resilient Fetch errors.

    All custom exceptions inherit from this base class for easy catching.
    """

    pass


class ConfigurationError(ResilientFetchError):
    """Configuration errors (invalid request options, bad settings)."""

    pass


class FetcherError(ResilientFetchError):
    """Base class for classified request failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedURLError(FetcherError):
    """URL is not a well-formed absolute URL. Never retried."""

    kind = ErrorKind.MALFORMED_URL

    def __init__(self, url: str):
        super().__init__(f"Invalid URL: {url} - Please check the URL format.")
        self.url = url


class RequestTimeoutError(FetcherError):
    """The final attempt was cancelled by its deadline."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, deadline_ms: int):
        super().__init__(f"Request timed out after {deadline_ms} ms")
        self.deadline_ms = deadline_ms


class NetworkError(FetcherError):
    """Connection refused, DNS resolution failure or similar."""

    kind = ErrorKind.NETWORK

    def __init__(self):
        super().__init__(
            "Network error: Failed to fetch, DNS resolution issue, or network problem."
        )


class HttpStatusError(FetcherError):
    """The server kept answering with a non-2xx status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status: int, reason: str):
        super().__init__(f"HTTP Error: {status} - {reason}")
        self.status = status
        self.reason = reason


class ForbiddenByPolicyError(FetcherError):
    """Access blocked by a cross-origin policy."""

    kind = ErrorKind.FORBIDDEN_BY_POLICY

    def __init__(self):
        super().__init__("CORS error: Access to this resource is blocked.")


class UnknownFetchError(FetcherError):
    """Catch-all carrying the raw fault message."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, raw_message: Optional[str]):
        super().__init__(raw_message or "Unknown error")
        self.raw_message = raw_message
