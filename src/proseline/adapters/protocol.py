"""FormatAdapter protocol: stable interface for markup renderers.

An adapter turns a document's raw bytes into a renderable HTML byte stream.
The raw bytes are kept by the caller for position tracking.

Example:
    from proseline.adapters.protocol import FormatAdapter

    def rendered(adapter: FormatAdapter, document: Document) -> bytes:
        return adapter.render(document.raw)

"""

from typing import Protocol

from proseline.formats import Format


class FormatAdapter(Protocol):
    """Protocol for format adapters.

    Attributes:
        format: The markup format this adapter renders
        link_target_first: The source syntax writes a link's target before
            its text (HTML, AsciiDoc) rather than after it (Markdown, rST)
        verbatim: The rendered stream is the source itself, so rendered-only
            elements such as <head> are part of the source

    Contract:
        - MUST preserve the document order of the source in its output
        - MUST raise RendererError (never return partial output) on failure

    """

    format: Format
    link_target_first: bool
    verbatim: bool

    def render(self, raw: bytes) -> bytes:
        """Render raw document bytes to an HTML byte stream."""
        ...
