"""Shared fixtures: scripted transports and a loguru capture sink."""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from net.transport import TransportFault, TransportResponse  # noqa: E402


class ScriptedTransport:
    """Transport that replays a list of outcomes and records every call.

    Each outcome is a TransportResponse to return or a TransportFault to
    raise. The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    @property
    def deadlines(self):
        return [signal.deadline_ms for _, signal in self.calls]

    def request(self, url, signal):
        self.calls.append((url, signal))
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _json_response(body: str, status: int = 200) -> TransportResponse:
    return TransportResponse(
        status_code=status,
        reason="OK",
        headers={"Content-Type": "application/json; charset=utf-8"},
        body=body.encode("utf-8"),
    )


def _text_response(body: str, status: int = 200, reason: str = "OK") -> TransportResponse:
    return TransportResponse(
        status_code=status,
        reason=reason,
        headers={"Content-Type": "text/plain"},
        body=body.encode("utf-8"),
    )


def _aborted() -> TransportFault:
    return TransportFault("The operation was aborted.", code="aborted", aborted=True)


@pytest.fixture
def scripted():
    """Factory for ScriptedTransport instances."""
    return ScriptedTransport


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    records = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def json_response():
    return _json_response


@pytest.fixture
def text_response():
    return _text_response


@pytest.fixture
def aborted():
    return _aborted
