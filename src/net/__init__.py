"""Network utilities for HTTP requests with retry logic."""

from .classifier import Fault, FaultKind, classify
from .fetcher import AttemptState, Fetcher, RequestConfig, execute
from .transport import (
    CancellationSignal,
    RequestsTransport,
    Transport,
    TransportFault,
    TransportResponse,
)
from .urls import ensure_scheme, is_valid_url

__all__ = [
    "execute",
    "Fetcher",
    "RequestConfig",
    "AttemptState",
    "classify",
    "Fault",
    "FaultKind",
    "CancellationSignal",
    "Transport",
    "RequestsTransport",
    "TransportFault",
    "TransportResponse",
    "ensure_scheme",
    "is_valid_url",
]
