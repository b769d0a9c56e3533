"""Extractor: run one lint pass over one document.

A pass renders the document with its format adapter, seeds a context tracker
from the normalized raw source, and walks the rendered stream, dispatching
blocks to a handler:

    raw bytes -> adapter -> rendered stream -> tokens -> walker -> handler

Rendering completes before walking starts, so a renderer failure aborts the
pass before any block is dispatched.

Thread Safety:
    Each pass builds its own adapter, tracker and walker. One Extractor can
    serve concurrent passes from several threads.

"""

from __future__ import annotations

import os

from proseline.adapters import create_adapter
from proseline.adapters.command import CommandRunner
from proseline.config import ExtractConfig, get_extract_config
from proseline.context import ContextTracker
from proseline.document import Document
from proseline.errors import ProselineError
from proseline.handlers import BlockHandler
from proseline.text import decode_source, prep_text
from proseline.tokens import tokenize
from proseline.utils.logger import get_logger
from proseline.walker import TokenWalker

logger = get_logger(__name__)


class Extractor:
    """Extracts classified, positioned text blocks from markup documents.

    Usage:
        >>> from proseline.handlers import BlockCollector
        >>> collector = BlockCollector()
        >>> Extractor().extract(Document.from_text("# Hi", ".md"), collector)
        1
        >>> collector.blocks[0].kind
        <BlockKind.HEADING: 'heading'>

    """

    __slots__ = ("_config", "_runner")

    def __init__(
        self,
        *,
        config: ExtractConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            config: Extraction config (uses the ambient config if None)
            runner: External command runner for rst/AsciiDoc (defaults to
                proseline.adapters.run_command)
        """
        self._config = config or get_extract_config()
        self._runner = runner

    @property
    def config(self) -> ExtractConfig:
        return self._config

    def extract(self, document: Document, handler: BlockHandler, *, line_offset: int = 0) -> int:
        """Run a lint pass, raising on failure.

        Args:
            document: Document to extract from
            handler: Receiver of dispatched blocks
            line_offset: Added to every line number

        Returns:
            Number of blocks dispatched

        Raises:
            UnsupportedFormatError: If the document's extension has no adapter
            RendererError: If an external renderer fails
        """
        fmt = document.format(self._config.extensions)
        adapter = create_adapter(fmt, config=self._config, runner=self._runner)
        stream = adapter.render(document.raw)

        tracker = ContextTracker(prep_text(decode_source(document.raw)), line_offset=line_offset)
        walker = TokenWalker(
            tracker,
            handler,
            document,
            config=self._config,
            link_target_first=adapter.link_target_first,
            verbatim=adapter.verbatim,
        )
        count = walker.walk(tokenize(stream))
        logger.debug("%s: dispatched %d blocks", document.path, count)
        return count

    def lint(self, document: Document, handler: BlockHandler, *, line_offset: int = 0) -> bool:
        """Run a lint pass, reporting failure once instead of raising.

        Returns:
            True if the pass completed, False if it was aborted
        """
        try:
            self.extract(document, handler, line_offset=line_offset)
        except ProselineError as e:
            self._report(document, handler, e)
            return False
        return True

    def lint_path(
        self,
        path: str | os.PathLike[str],
        handler: BlockHandler,
        *,
        ext: str | None = None,
    ) -> bool:
        """Read a document from disk and lint it.

        An unreadable file is reported through ``handler.on_error`` like any
        other pass failure.
        """
        try:
            document = Document.from_path(path, ext=ext)
        except ProselineError as e:
            self._report(Document(path=os.fspath(path), ext=ext or "", raw=b""), handler, e)
            return False
        return self.lint(document, handler)

    @staticmethod
    def _report(document: Document, handler: BlockHandler, error: ProselineError) -> None:
        logger.error("lint pass aborted for %s: %s", document.path, error)
        handler.on_error(document, error)
