"""Map attempt faults to classified errors.

classify() is pure and never raises. Checks run in a fixed order and the
first match wins: abort, network failure, cross-origin policy, HTTP
status, then a catch-all. Structured fault codes are preferred; message
substring matching only applies to faults that carry no code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import (
    FetcherError,
    ForbiddenByPolicyError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    UnknownFetchError,
)


class FaultKind(str, Enum):
    """Where an attempt failed."""

    ABORTED = "aborted"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


@dataclass(frozen=True)
class Fault:
    """Unclassified failure of one attempt."""

    kind: FaultKind
    message: str
    deadline_ms: Optional[int] = None
    status_code: Optional[int] = None
    reason: str = ""
    code: Optional[str] = None


HTTP_REASONS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal Server Error",
}

NETWORK_CODES = frozenset({"dns", "connection", "network"})
NETWORK_PHRASES = ("Failed to fetch", "NetworkError", "Could not resolve host")

POLICY_CODES = frozenset({"cors"})
POLICY_PHRASES = ("CORS",)


def _matches(fault: Fault, codes, phrases) -> bool:
    if fault.code is not None:
        return fault.code in codes
    message = fault.message or ""
    return any(phrase in message for phrase in phrases)


def reason_for(status_code: int, fallback: str = "") -> str:
    """Fixed reason text for common codes, the transport's text otherwise."""
    return HTTP_REASONS.get(status_code, fallback)


def classify(fault: Fault) -> FetcherError:
    """Turn a fault into the error surfaced to the caller."""
    if fault.kind is FaultKind.ABORTED:
        return RequestTimeoutError(fault.deadline_ms)

    if _matches(fault, NETWORK_CODES, NETWORK_PHRASES):
        return NetworkError()

    if _matches(fault, POLICY_CODES, POLICY_PHRASES):
        return ForbiddenByPolicyError()

    if fault.kind is FaultKind.HTTP_STATUS and fault.status_code is not None:
        return HttpStatusError(
            fault.status_code, reason_for(fault.status_code, fault.reason)
        )

    return UnknownFetchError(fault.message)
