"""Resilient single-request fetcher.

This module drives one logical HTTP GET through a bounded sequence of
attempts:
- Per-attempt deadline of timeout_ms * 2**attempt
- Fixed delay between attempts
- Any fault (abort, transport failure, non-2xx status) is retried until
  the budget runs out, then classified exactly once
- JSON bodies are decoded, everything else is returned as text
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from core.logging import get_logger
from errors import ConfigurationError, MalformedURLError
from result import Result, failure, success

from .classifier import Fault, FaultKind, classify
from .transport import (
    CancellationSignal,
    RequestsTransport,
    Transport,
    TransportFault,
    TransportResponse,
)
from .urls import is_valid_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestConfig:
    """Options for one call. Immutable for the duration of the call."""

    timeout_ms: int = 1000
    max_retries: int = 2
    retry_delay_ms: int = 200
    verbose_logging: bool = False

    def __post_init__(self):
        for name in ("timeout_ms", "max_retries", "retry_delay_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.max_retries < 0:
            raise ConfigurationError(
                f"max_retries must be non-negative, got {self.max_retries}"
            )
        if self.retry_delay_ms < 0:
            raise ConfigurationError(
                f"retry_delay_ms must be non-negative, got {self.retry_delay_ms}"
            )

    @classmethod
    def from_settings(cls, settings=None) -> "RequestConfig":
        """Build a config from FetcherSettings (the global instance if None)."""
        if settings is None:
            from config.settings import settings
        return cls(
            timeout_ms=settings.timeout_ms,
            max_retries=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms,
            verbose_logging=settings.verbose_logging,
        )

    def deadline_for(self, attempt: int) -> int:
        """Deadline in milliseconds for a 0-indexed attempt."""
        return self.timeout_ms * (2**attempt)


@dataclass
class AttemptState:
    """Per-call attempt bookkeeping. Never shared between calls."""

    retries_used: int = 0
    start_time: float = field(default_factory=time.monotonic)
    attempt_durations_ms: List[float] = field(default_factory=list)


def is_json_content(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return "application/json" in media_type or media_type.endswith("+json")


def decode_body(response: TransportResponse) -> Result:
    """Decode a successful response as JSON or text."""
    if is_json_content(response.content_type):
        try:
            return success(json.loads(response.text))
        except ValueError as error:
            return failure(
                Fault(FaultKind.DECODE, f"Invalid JSON response body: {error}")
            )
    return success(response.text)


class Fetcher:
    """Runs requests against a transport with retries and classification.

    Args:
        transport: Single-request transport (RequestsTransport if None)
        sleep: Called with the retry delay in seconds between attempts

    A Fetcher that creates its own RequestsTransport closes it in close()
    or on leaving a ``with`` block. Transports passed in are left open.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else RequestsTransport()
        self.sleep = sleep

    def close(self) -> None:
        if self._owns_transport:
            close = getattr(self.transport, "close", None)
            if close is not None:
                close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def execute(self, url: str, config: Optional[RequestConfig] = None) -> Any:
        """Fetch url and return the decoded body.

        Raises:
            MalformedURLError: url is not an absolute URL (no attempt is made)
            FetcherError: the classified fault once retries are exhausted
        """
        if config is None:
            config = RequestConfig.from_settings()

        if not is_valid_url(url):
            raise MalformedURLError(url)

        level = "INFO" if config.verbose_logging else "DEBUG"
        state = AttemptState()
        try:
            return self._run(url, config, state, level)
        finally:
            total_ms = (time.monotonic() - state.start_time) * 1000
            logger.log(
                level,
                "Request to {} finished after {} attempt(s) in {:.0f} ms (per attempt: {})",
                url,
                len(state.attempt_durations_ms),
                total_ms,
                ", ".join(f"{d:.0f} ms" for d in state.attempt_durations_ms),
            )

    def _run(self, url: str, config: RequestConfig, state: AttemptState, level: str) -> Any:
        while True:
            deadline_ms = config.deadline_for(state.retries_used)
            outcome = self._attempt(url, deadline_ms, state, level)
            if outcome["ok"]:
                break

            fault: Fault = outcome["error"]
            if state.retries_used >= config.max_retries:
                raise classify(fault)

            state.retries_used += 1
            logger.log(
                level,
                "Retrying after {} ({}), attempt {} of {}",
                fault.kind.value,
                fault.message,
                state.retries_used,
                config.max_retries,
            )
            self.sleep(config.retry_delay_ms / 1000)

        decoded = decode_body(outcome["value"])
        if not decoded["ok"]:
            raise classify(decoded["error"])
        return decoded["value"]

    def _attempt(
        self, url: str, deadline_ms: int, state: AttemptState, level: str
    ) -> Result:
        signal = CancellationSignal(deadline_ms)
        started = time.monotonic()
        try:
            response = self.transport.request(url, signal)
        except TransportFault as error:
            if error.aborted:
                outcome = failure(
                    Fault(FaultKind.ABORTED, error.message, deadline_ms=deadline_ms)
                )
            else:
                outcome = failure(
                    Fault(FaultKind.TRANSPORT, error.message, code=error.code)
                )
        except Exception as error:
            # Opaque transport failure: no code, classified by its message
            outcome = failure(Fault(FaultKind.TRANSPORT, str(error)))
        else:
            if response.ok:
                outcome = success(response)
            else:
                outcome = failure(
                    Fault(
                        FaultKind.HTTP_STATUS,
                        f"HTTP {response.status_code} {response.reason}".strip(),
                        status_code=response.status_code,
                        reason=response.reason,
                        code="http_status",
                    )
                )

        duration_ms = (time.monotonic() - started) * 1000
        state.attempt_durations_ms.append(duration_ms)
        logger.log(
            level,
            "Attempt {} took {:.0f} ms (deadline {} ms)",
            state.retries_used + 1,
            duration_ms,
            deadline_ms,
        )
        return outcome


def execute(
    url: str,
    config: Optional[RequestConfig] = None,
    *,
    transport: Optional[Transport] = None,
) -> Any:
    """Fetch url with retries, per-attempt timeout backoff and classified errors.

    Args:
        url: Absolute URL to fetch
        config: Request options (built from settings if None)
        transport: Single-request transport (a fresh RequestsTransport,
            closed afterwards, if None)

    Returns:
        Parsed JSON for JSON responses, text otherwise

    Raises:
        FetcherError: MalformedURLError, RequestTimeoutError, NetworkError,
            HttpStatusError, ForbiddenByPolicyError or UnknownFetchError
    """
    with Fetcher(transport) as fetcher:
        return fetcher.execute(url, config)
