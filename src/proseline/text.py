"""Text normalization shared by the context buffer and rendered fragments.

The raw source and every fragment pulled out of the rendered stream go through
the same normalization, so a fragment can be located in the source by plain
substring search. Normalization never adds or removes newlines: the original
line count is preserved.

Example:
    >>> prep_text("Caf\\u0065\\u0301\\u00a0time\\r\\nnext")
    'Café time\\nnext'
"""

from __future__ import annotations

import re
import unicodedata

# Zero-width and bidi override characters (invisible in rendered output)
_INVISIBLE_PATTERN = re.compile(
    "[\u200b\u200c\u200d\u200e\u200f\u202a\u202b\u202c\u202d\u202e\u2060\ufeff]+"
)

# Unicode space separators other than the plain space
_SPACE_PATTERN = re.compile("[\u00a0\u1680\u2000-\u200a\u202f\u205f\u3000]")

_WHITESPACE_RUN = re.compile(r"\s+")


def prep_text(text: str) -> str:
    """Normalize text for source/fragment matching.

    - CRLF and lone CR become LF
    - Unicode is NFC-composed
    - Zero-width and bidi control characters are removed
    - Non-breaking and other Unicode spaces become a plain space

    Args:
        text: Raw source or fragment text

    Returns:
        Normalized text with the same number of lines
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = unicodedata.normalize("NFC", text)
    text = _INVISIBLE_PATTERN.sub("", text)
    return _SPACE_PATTERN.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def decode_source(raw: bytes) -> str:
    """Decode raw document bytes for the context buffer.

    Undecodable bytes are replaced rather than rejected: a bad byte only
    costs position accuracy near it.
    """
    return raw.decode("utf-8", errors="replace").removeprefix("\ufeff")
