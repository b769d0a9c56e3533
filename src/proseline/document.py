"""Document value passed through one lint pass."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from proseline.errors import DocumentReadError, UnsupportedFormatError
from proseline.formats import Format, detect_format, normalize_extension


@dataclass(frozen=True, slots=True)
class Document:
    """A document to extract blocks from.

    Immutable; owned by the caller for the duration of one lint pass.

    Attributes:
        path: Source path (used in error messages and by handlers)
        ext: Declared real extension, e.g. ".md". May differ from the path
            suffix when the caller associates extensions with formats.
        raw: Raw document bytes

    """

    path: str
    ext: str
    raw: bytes

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], *, ext: str | None = None) -> Document:
        """Read a document from disk.

        Args:
            path: File to read
            ext: Declared extension (defaults to the path suffix)

        Raises:
            DocumentReadError: If the file cannot be read
        """
        p = Path(path)
        try:
            raw = p.read_bytes()
        except OSError as e:
            raise DocumentReadError(str(p), e.strerror or str(e)) from e
        return cls(path=str(p), ext=normalize_extension(ext if ext is not None else p.suffix), raw=raw)

    @classmethod
    def from_text(cls, text: str, ext: str, *, path: str = "<string>") -> Document:
        """Build an in-memory document from text."""
        return cls(path=path, ext=normalize_extension(ext), raw=text.encode("utf-8"))

    def format(self, extensions: Mapping[str, Format] | None = None) -> Format:
        """Resolve this document's Format from its declared extension.

        Raises:
            UnsupportedFormatError: If no format is associated with ``ext``
        """
        try:
            return detect_format(self.ext, extensions)
        except UnsupportedFormatError as e:
            raise UnsupportedFormatError(self.ext, path=self.path) from e
