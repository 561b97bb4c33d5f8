from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any


def _json_dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_body(body: Any) -> str:
    """Text bodies verbatim, decoded JSON pretty-printed."""
    if isinstance(body, str):
        return body
    return _json_dump(body)


def resolve_output_path(path_value: str | Path | None) -> Path | None:
    if path_value is None:
        return None
    return Path(path_value).expanduser().resolve()


def write_output(body: Any, out_path: str | Path | None = None) -> Path | None:
    """Write the rendered body to out_path, or stdout when no path is given."""
    rendered = render_body(body)
    out_resolved = resolve_output_path(out_path)

    if out_resolved is None:
        sys.stdout.write(rendered)
        if not rendered.endswith(os.linesep):
            sys.stdout.write(os.linesep)
        sys.stdout.flush()
        return None

    out_resolved.parent.mkdir(parents=True, exist_ok=True)
    out_resolved.write_text(rendered, encoding="utf-8")
    return out_resolved


def exit_with_message(message: str, *, code: int = 0) -> None:
    stream = sys.stderr if code else sys.stdout
    stream.write(message + os.linesep)
    stream.flush()
    raise SystemExit(code)
