"""URL helpers: absolute-URL validation and default-scheme prepending."""

import re
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)
_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def is_valid_url(url: str) -> bool:
    """Return True if url parses as a well-formed absolute URL."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def ensure_scheme(url: str, default_scheme: Optional[str] = None) -> str:
    """Prepend a default scheme when url has no http:// or https:// prefix.

    Args:
        url: URL as typed by a user, e.g. "example.com"
        default_scheme: Scheme to prepend (settings.default_scheme if None)

    Returns:
        The URL with a scheme
    """
    if _HTTP_SCHEME.match(url):
        return url
    if default_scheme is None:
        from config.settings import settings

        default_scheme = settings.default_scheme
    return f"{default_scheme}://{url}"
