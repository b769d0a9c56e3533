"""Format adapters for proseline.

Each supported markup format has an adapter that renders raw document bytes
to an HTML byte stream:

- html: pass-through
- markdown: in process, via mistune
- rst: external ``rst2html`` process
- asciidoc: external ``asciidoctor`` process

Usage:
    >>> from proseline.adapters import create_adapter
    >>> from proseline.formats import Format
    >>> adapter = create_adapter(Format.MARKDOWN)
    >>> adapter.render(b"# Hi")
    b'<h1>Hi</h1>\\n'

Thread Safety:
    Adapters are created per lint pass. External command runners keep all
    state local to the call.
"""

from __future__ import annotations

from collections.abc import Callable

from proseline.adapters.asciidoc import AsciidocAdapter
from proseline.adapters.command import CommandRunner, run_command
from proseline.adapters.html import HtmlAdapter
from proseline.adapters.markdown import MarkdownAdapter
from proseline.adapters.protocol import FormatAdapter
from proseline.adapters.rst import RstAdapter, rewrite_code_directives
from proseline.config import ExtractConfig, get_extract_config
from proseline.formats import Format

AdapterFactory = Callable[[ExtractConfig, CommandRunner], FormatAdapter]

BUILTIN_ADAPTERS: dict[Format, AdapterFactory] = {
    Format.HTML: lambda config, runner: HtmlAdapter(),
    Format.MARKDOWN: lambda config, runner: MarkdownAdapter(config=config),
    Format.RST: lambda config, runner: RstAdapter(config=config, runner=runner),
    Format.ASCIIDOC: lambda config, runner: AsciidocAdapter(config=config, runner=runner),
}


def create_adapter(
    fmt: Format,
    *,
    config: ExtractConfig | None = None,
    runner: CommandRunner | None = None,
) -> FormatAdapter:
    """Create the adapter for a format.

    Args:
        fmt: Markup format
        config: Extraction config (uses the ambient config if None)
        runner: External command runner (defaults to run_command)

    Raises:
        KeyError: If no adapter is registered for ``fmt``
    """
    if fmt not in BUILTIN_ADAPTERS:
        available = ", ".join(sorted(f.value for f in BUILTIN_ADAPTERS))
        raise KeyError(f"No adapter for format: {fmt!r}. Available: {available}")
    return BUILTIN_ADAPTERS[fmt](config or get_extract_config(), runner or run_command)


__all__ = [
    "AsciidocAdapter",
    "BUILTIN_ADAPTERS",
    "CommandRunner",
    "FormatAdapter",
    "HtmlAdapter",
    "MarkdownAdapter",
    "RstAdapter",
    "create_adapter",
    "rewrite_code_directives",
    "run_command",
]
