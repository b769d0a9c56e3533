"""Supported markup formats and their file extensions."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from proseline.errors import UnsupportedFormatError


class Format(Enum):
    """Markup formats with a registered adapter."""

    HTML = "html"
    MARKDOWN = "markdown"
    RST = "rst"
    ASCIIDOC = "asciidoc"


DEFAULT_EXTENSIONS: Mapping[str, Format] = MappingProxyType(
    {
        ".html": Format.HTML,
        ".htm": Format.HTML,
        ".xhtml": Format.HTML,
        ".md": Format.MARKDOWN,
        ".markdown": Format.MARKDOWN,
        ".mdown": Format.MARKDOWN,
        ".mkd": Format.MARKDOWN,
        ".mkdn": Format.MARKDOWN,
        ".rst": Format.RST,
        ".rest": Format.RST,
        ".adoc": Format.ASCIIDOC,
        ".asciidoc": Format.ASCIIDOC,
        ".asc": Format.ASCIIDOC,
    }
)


def normalize_extension(ext: str) -> str:
    """Return ``ext`` lowercased with a single leading dot."""
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def detect_format(ext: str, extensions: Mapping[str, Format] | None = None) -> Format:
    """Map a file extension to its Format.

    Args:
        ext: Extension with or without the leading dot (".md", "rst")
        extensions: Extension table to consult (defaults to DEFAULT_EXTENSIONS)

    Raises:
        UnsupportedFormatError: If the extension is not in the table
    """
    table = DEFAULT_EXTENSIONS if extensions is None else extensions
    fmt = table.get(normalize_extension(ext))
    if fmt is None:
        raise UnsupportedFormatError(ext)
    return fmt
