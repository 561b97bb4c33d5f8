from .common import (
    exit_with_message,
    render_body,
    resolve_output_path,
    write_output,
)

from .handlers import handle_fetch

__all__ = [
    "exit_with_message",
    "render_body",
    "resolve_output_path",
    "write_output",
    "handle_fetch",
]
