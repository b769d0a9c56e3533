"""Utility modules for proseline.

Provides:
- logger: get_logger for namespaced logging
"""

from proseline.utils.logger import get_logger

__all__ = [
    "get_logger",
]
