"""Scoped external command execution for renderer processes.

Renderers for reStructuredText and AsciiDoc run as child processes: the
document is piped to stdin and the rendered HTML read from stdout. The process
handle is released on every exit path, including spawn failure.

There is no retry and no timeout. A hung renderer stalls only the pass that
started it.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence

from proseline.errors import RendererError
from proseline.utils.logger import get_logger

logger = get_logger(__name__)

CommandRunner = Callable[[Sequence[str], bytes], bytes]
"""Signature of a command runner: (argv, stdin bytes) -> stdout bytes."""


def run_command(argv: Sequence[str], stdin: bytes) -> bytes:
    """Run ``argv`` with ``stdin`` piped in and return captured stdout.

    Args:
        argv: Program and arguments
        stdin: Bytes written to the process's standard input

    Returns:
        Everything the process wrote to standard output

    Raises:
        RendererError: If the process cannot be spawned or exits nonzero
    """
    logger.debug("running renderer: %s", " ".join(argv))
    try:
        proc = subprocess.Popen(
            list(argv),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        raise RendererError(argv, f"cannot start renderer: {e}") from e

    with proc:
        stdout, stderr = proc.communicate(stdin)

    if proc.returncode != 0:
        raise RendererError(
            argv,
            "renderer failed",
            returncode=proc.returncode,
            stderr=stderr.decode("utf-8", errors="replace"),
        )
    return stdout
