"""Exception classes for proseline.

Every failure that aborts a lint pass derives from ProselineError, so callers
can report a document's failure with a single except clause.
"""

from __future__ import annotations

from collections.abc import Sequence


class ProselineError(Exception):
    """Base exception for all proseline errors.

    Subclass this for specific error categories.
    """

    pass


class DocumentReadError(ProselineError):
    """Raw document bytes could not be read.

    Raised before any rendering happens; the pass dispatches nothing.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialize read error.

        Args:
            path: Path of the unreadable document
            reason: Description of the underlying failure
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: cannot read document: {reason}")


class UnsupportedFormatError(ProselineError):
    """No format adapter is registered for a document extension."""

    def __init__(self, ext: str, path: str | None = None) -> None:
        self.ext = ext
        self.path = path
        location = f"{path}: " if path else ""
        super().__init__(f"{location}unsupported markup extension {ext!r}")


class RendererError(ProselineError):
    """External renderer could not be spawned or exited with failure.

    The document's pass aborts; blocks are never dispatched from a
    partially rendered stream.
    """

    def __init__(
        self,
        command: Sequence[str],
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize renderer error.

        Args:
            command: Argument vector of the failed process
            message: Description of the failure
            returncode: Exit status, or None when the process never started
            stderr: Captured standard error output (may be empty)
        """
        self.command = tuple(command)
        self.message = message
        self.returncode = returncode
        self.stderr = stderr

        program = self.command[0] if self.command else "<empty command>"
        status = f" (exit status {returncode})" if returncode is not None else ""
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{program}{status}: {message}{detail}")
