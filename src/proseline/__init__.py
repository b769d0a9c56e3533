"""
proseline: positioned prose extraction from markup documents

Extracts linting-ready plain text (headings, list items, prose) from HTML,
Markdown, reStructuredText and AsciiDoc, tagging each block with its line in
the original source even though the text is found by walking rendered HTML.

Quick Start:
    >>> from proseline import extract_blocks
    >>> for block in extract_blocks("# Title\\n\\nSome **bold** text.\\n"):
    ...     print(block)
    1: [heading] Title
    3: [prose] Some bold text.

    >>> # Or drive a pass with your own handler
    >>> from proseline import Document, Extractor
    >>> from proseline.handlers import BlockCollector
    >>> collector = BlockCollector()
    >>> Extractor().lint(Document.from_text("<p>Hello</p>", ".html"), collector)
    True

External renderers:
    reStructuredText needs ``rst2html`` (docutils) and AsciiDoc needs
    ``asciidoctor`` on PATH. Both commands are configurable through
    ExtractConfig.
"""

from proseline.adapters import FormatAdapter, create_adapter
from proseline.blocks import Block, BlockKind
from proseline.config import (
    ExtractConfig,
    extract_config_context,
    get_extract_config,
    reset_extract_config,
    set_extract_config,
)
from proseline.context import ContextTracker
from proseline.document import Document
from proseline.errors import (
    DocumentReadError,
    ProselineError,
    RendererError,
    UnsupportedFormatError,
)
from proseline.extractor import Extractor
from proseline.formats import Format, detect_format, normalize_extension
from proseline.handlers import BlockCollector, BlockHandler
from proseline.text import prep_text
from proseline.tokens import Token, TokenType, tokenize
from proseline.walker import TokenWalker

__version__ = "0.1.0"


def extract_blocks(
    source: str | bytes,
    *,
    ext: str = ".md",
    config: ExtractConfig | None = None,
) -> list[Block]:
    """Extract blocks from in-memory source.

    Args:
        source: Document text or raw bytes
        ext: Declared extension selecting the format
        config: Extraction config (uses the ambient config if None)

    Returns:
        Blocks in dispatch order

    Raises:
        ProselineError: If the document cannot be rendered
    """
    raw = source.encode("utf-8") if isinstance(source, str) else source
    document = Document(path="<string>", ext=normalize_extension(ext), raw=raw)
    collector = BlockCollector()
    Extractor(config=config).extract(document, collector)
    return collector.blocks


__all__ = [  # noqa: RUF022 grouped by category
    # Version
    "__version__",
    # Core API
    "extract_blocks",
    "Extractor",
    "Document",
    "Block",
    "BlockKind",
    # Dispatch
    "BlockHandler",
    "BlockCollector",
    # Components
    "ContextTracker",
    "TokenWalker",
    "Token",
    "TokenType",
    "tokenize",
    "prep_text",
    # Formats
    "Format",
    "FormatAdapter",
    "create_adapter",
    "detect_format",
    # Configuration (ContextVar-based)
    "ExtractConfig",
    "get_extract_config",
    "set_extract_config",
    "reset_extract_config",
    "extract_config_context",
    # Errors
    "ProselineError",
    "DocumentReadError",
    "RendererError",
    "UnsupportedFormatError",
]
