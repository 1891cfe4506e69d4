"""
Sanitization helpers shared by the request schemas.

Free‑text fields are cleaned at the transport boundary: surrounding
whitespace is removed, HTML tags are stripped and the remaining markup
characters are escaped.  The services still use parameterized queries
for everything and do not rely on this cleaning.
"""

import html
import re
from typing import Any, Optional

from mentor_app_api.app.core.identifiers import is_valid_identifier

_TAG_RE = re.compile(r"<[^>]*>")


def clean_text(value: Any) -> Any:
    """Strip tags and escape markup in a string; other values pass through.

    Raises ``ValueError`` for text that cannot be stored as UTF-8, such
    as lone surrogates coming from ``\\ud800`` style JSON escapes.
    """
    if not isinstance(value, str):
        return value
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError("must be valid UTF-8 text") from e
    return html.escape(_TAG_RE.sub("", value).strip(), quote=False)


def clean_optional_text(value: Any) -> Optional[Any]:
    """Like ``clean_text`` but maps blank strings to ``None``."""
    cleaned = clean_text(value)
    if isinstance(cleaned, str) and not cleaned:
        return None
    return cleaned


def require_identifier(value: Any, label: str = "identifier") -> str:
    """Return ``value`` if it is a well formed identifier, else raise ``ValueError``."""
    if not is_valid_identifier(value):
        raise ValueError(f"{label} must be 10 lowercase hexadecimal characters")
    return value
