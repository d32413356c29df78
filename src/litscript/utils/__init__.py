"""Utility modules for litscript.

Provides:
- logger: get_logger for namespaced logging
- text: blank-line trimming helpers
"""

from litscript.utils.logger import get_logger
from litscript.utils.text import strip_quotes, trim_blank_lines

__all__ = [
    "get_logger",
    "strip_quotes",
    "trim_blank_lines",
]
