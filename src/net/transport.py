"""Single-request transport used by the fetcher.

A transport performs exactly one HTTP request given a URL and a
cancellation signal. It returns a TransportResponse for any HTTP answer
(including non-2xx statuses) and raises TransportFault for failures below
HTTP: aborts, refused connections, DNS errors.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Protocol

import requests
from requests.structures import CaseInsensitiveDict


class CancellationSignal:
    """Deadline for a single attempt.

    The signal fires once ``deadline_ms`` milliseconds have passed since it
    was created. Transports read ``remaining()`` to bound their own waits and
    check ``fired`` before handing back a response.
    """

    def __init__(self, deadline_ms: int, clock: Callable[[], float] = time.monotonic):
        self.deadline_ms = deadline_ms
        self._clock = clock
        self._started = clock()

    @property
    def elapsed_ms(self) -> float:
        return (self._clock() - self._started) * 1000

    @property
    def fired(self) -> bool:
        return self.elapsed_ms >= self.deadline_ms

    def remaining(self) -> float:
        """Seconds left before the signal fires (never negative)."""
        return max(0.0, (self.deadline_ms - self.elapsed_ms) / 1000)


class TransportFault(Exception):
    """Failure below the HTTP layer.

    Args:
        message: Free-form description from the underlying library
        code: Structured fault code (``dns``, ``connection``, ``cors``, ...)
            when the transport can tell; None for opaque failures
        aborted: True when the attempt was cancelled by its signal
    """

    def __init__(self, message: str, *, code: Optional[str] = None, aborted: bool = False):
        super().__init__(message)
        self.message = message
        self.code = code
        self.aborted = aborted


@dataclass(frozen=True)
class TransportResponse:
    """Materialized HTTP response."""

    status_code: int
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""
    encoding: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "") or ""

    @property
    def text(self) -> str:
        """Decode the body using the declared charset, falling back to UTF-8."""
        if not self.body:
            return ""
        encoding = self.encoding or _charset_from(self.content_type) or "utf-8"
        try:
            return self.body.decode(encoding)
        except (LookupError, UnicodeDecodeError):
            return self.body.decode("utf-8", errors="replace")


def _charset_from(content_type: str) -> Optional[str]:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip("\"' ")
    return None


class Transport(Protocol):
    """Capability: perform one HTTP request."""

    def request(self, url: str, signal: CancellationSignal) -> TransportResponse:
        ...


class RequestsTransport:
    """Transport backed by a requests.Session.

    The attempt deadline is passed to requests as the connect and read
    timeout. requests bounds each socket operation separately, so the body
    is read in chunks and the signal is checked after every chunk.

    Use as a context manager (or call close()) to release the session.
    """

    chunk_size = 8192

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
    ):
        if user_agent is None:
            from config.settings import settings

            user_agent = settings.user_agent
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.headers = {"User-Agent": user_agent}

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def request(self, url: str, signal: CancellationSignal) -> TransportResponse:
        timeout = signal.remaining()
        if timeout <= 0:
            raise _aborted()

        try:
            response = self.session.get(
                url, headers=self.headers, timeout=timeout, stream=True
            )
        except requests.Timeout as error:
            raise _aborted(str(error)) from error
        except requests.ConnectionError as error:
            raise TransportFault(str(error), code=_connection_code(error)) from error
        except requests.RequestException as error:
            raise TransportFault(str(error)) from error

        try:
            body = self._read_body(response, signal)
        finally:
            response.close()

        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            headers=CaseInsensitiveDict(response.headers),
            body=body,
        )

    def _read_body(self, response: requests.Response, signal: CancellationSignal) -> bytes:
        content = b""
        try:
            for chunk in response.iter_content(chunk_size=self.chunk_size):
                content += chunk
                if signal.fired:
                    raise _aborted()
        except requests.RequestException as error:
            # requests reports read timeouts inside iter_content as ConnectionError
            if signal.fired or isinstance(error, requests.Timeout):
                raise _aborted(str(error)) from error
            if isinstance(error, requests.ConnectionError):
                raise TransportFault(str(error), code="connection") from error
            raise TransportFault(str(error)) from error

        if signal.fired:
            raise _aborted()
        return content


def _aborted(message: str = "The operation was aborted.") -> TransportFault:
    return TransportFault(message, code="aborted", aborted=True)


def _connection_code(error: requests.ConnectionError) -> str:
    message = str(error)
    if "NameResolutionError" in message or "Name or service not known" in message:
        return "dns"
    return "connection"
