"""AsciiDoc adapter: pipes the document through Asciidoctor."""

from __future__ import annotations

from proseline.adapters.command import CommandRunner, run_command
from proseline.config import ExtractConfig, get_extract_config
from proseline.formats import Format


class AsciidocAdapter:
    """Renders AsciiDoc with an external Asciidoctor process.

    The default flags drop the header and footer, silence warnings and run in
    secure safe mode, which disables ``include::`` directives.
    """

    __slots__ = ("_argv", "_runner")

    format = Format.ASCIIDOC
    link_target_first = True
    verbatim = False

    def __init__(
        self,
        *,
        config: ExtractConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        config = config or get_extract_config()
        self._argv = (*config.asciidoc_command, *config.asciidoc_args)
        self._runner = runner or run_command

    @property
    def argv(self) -> tuple[str, ...]:
        return self._argv

    def render(self, raw: bytes) -> bytes:
        return self._runner(self._argv, raw)
