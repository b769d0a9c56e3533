"""Tests for documents and format detection."""

from pathlib import Path

import pytest

from proseline.document import Document
from proseline.errors import DocumentReadError, UnsupportedFormatError
from proseline.formats import Format, detect_format, normalize_extension


class TestDetectFormat:
    @pytest.mark.parametrize(
        ("ext", "fmt"),
        [
            (".html", Format.HTML),
            (".htm", Format.HTML),
            (".md", Format.MARKDOWN),
            (".markdown", Format.MARKDOWN),
            (".rst", Format.RST),
            (".adoc", Format.ASCIIDOC),
            (".asciidoc", Format.ASCIIDOC),
        ],
    )
    def test_defaults(self, ext: str, fmt: Format) -> None:
        assert detect_format(ext) is fmt

    def test_case_and_dot_insensitive(self) -> None:
        assert detect_format("MD") is Format.MARKDOWN

    def test_unknown(self) -> None:
        with pytest.raises(UnsupportedFormatError):
            detect_format(".txt")

    def test_custom_table(self) -> None:
        assert detect_format(".txt", {".txt": Format.RST}) is Format.RST

    def test_normalize_extension(self) -> None:
        assert normalize_extension(" Md ") == ".md"
        assert normalize_extension("") == ""


class TestDocument:
    def test_from_text(self) -> None:
        doc = Document.from_text("# Hi", "md")
        assert doc.ext == ".md"
        assert doc.raw == b"# Hi"
        assert doc.path == "<string>"
        assert doc.format() is Format.MARKDOWN

    def test_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "Guide.RST"
        path.write_bytes(b"Title\n=====\n")
        doc = Document.from_path(path)
        assert doc.ext == ".rst"
        assert doc.raw == b"Title\n=====\n"
        assert doc.path == str(path)

    def test_from_path_declared_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "README"
        path.write_bytes(b"text")
        assert Document.from_path(path, ext=".md").format() is Format.MARKDOWN

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentReadError) as exc_info:
            Document.from_path(tmp_path / "missing.md")
        assert exc_info.value.path.endswith("missing.md")

    def test_unsupported_format_names_path(self) -> None:
        doc = Document.from_text("x", ".txt", path="notes.txt")
        with pytest.raises(UnsupportedFormatError) as exc_info:
            doc.format()
        assert exc_info.value.path == "notes.txt"

    def test_immutable(self) -> None:
        doc = Document.from_text("x", ".md")
        with pytest.raises(AttributeError):
            doc.raw = b"y"  # type: ignore[misc]
