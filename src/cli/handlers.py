"""CLI command handlers.

Each handler is a plain function that takes parameters and returns a
Result, keeping the click command a thin dispatcher.
"""

from typing import Optional

from errors import FetcherError
from net import RequestConfig, Transport, ensure_scheme, execute
from result import Result, try_operation


def handle_fetch(
    url: str,
    config: Optional[RequestConfig] = None,
    *,
    transport: Optional[Transport] = None,
) -> Result:
    """Handle the fetch command.

    Args:
        url: URL as typed by the user; a scheme is added when missing
        config: Request options
        transport: Transport override (tests)

    Returns:
        Result containing the decoded body, or the classified FetcherError
    """
    target = ensure_scheme(url.strip())
    return try_operation(
        lambda: execute(target, config, transport=transport), FetcherError
    )
