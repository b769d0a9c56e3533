"""reStructuredText adapter: pipes the document through rst2html."""

from __future__ import annotations

import re

from proseline.adapters.command import CommandRunner, run_command
from proseline.config import ExtractConfig, get_extract_config
from proseline.formats import Format

# Sphinx-only code and raw directives become plain literal-block markers;
# rst2html renders their bodies as <pre>.
CODE_DIRECTIVE = re.compile(rb"\.\. (?:raw|code(?:-block)?):: (\w+)")


def rewrite_code_directives(raw: bytes) -> bytes:
    """Replace ``.. code-block:: lang`` style directives with ``::``.

    Example:
        >>> rewrite_code_directives(b".. code-block:: python\\n\\n   x = 1\\n")
        b'::\\n\\n   x = 1\\n'
    """
    return CODE_DIRECTIVE.sub(b"::", raw)


class RstAdapter:
    """Renders reStructuredText with an external rst2html process."""

    __slots__ = ("_argv", "_runner")

    format = Format.RST
    link_target_first = False
    verbatim = False

    def __init__(
        self,
        *,
        config: ExtractConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        config = config or get_extract_config()
        self._argv = (*config.rst_command, *config.rst_args)
        self._runner = runner or run_command

    @property
    def argv(self) -> tuple[str, ...]:
        return self._argv

    def render(self, raw: bytes) -> bytes:
        return self._runner(self._argv, rewrite_code_directives(raw))
