"""Package logging for proseline.

Every module logs through a standard library logger under the "proseline"
namespace, so one ``logging.getLogger("proseline")`` call configures the
whole package. The library never installs handlers.

What is logged:
    - DEBUG: renderer command lines, rendered streams cut short by invalid
      UTF-8 or malformed markup, blocks dispatched per pass
    - ERROR: one record per aborted lint pass, naming the document

Example:
    >>> import logging
    >>> logging.getLogger("proseline").setLevel(logging.DEBUG)
    >>> get_logger("proseline.adapters.command").name
    'proseline.adapters.command'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the proseline logger for a module.

    Args:
        name: Module name (``__name__``) or a short component name

    Example:
        >>> get_logger("extractor").name
        'proseline.extractor'
    """
    if not (name == "proseline" or name.startswith("proseline.")):
        name = f"proseline.{name}"
    return logging.getLogger(name)
