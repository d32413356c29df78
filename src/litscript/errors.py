"""Exception classes and diagnostics for litscript.

Exceptions abort a parse. Diagnostics (SourceError) are collected from the
tokenizer and travel with the finished document instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from litscript.location import SourceLocation


class LiterateError(Exception):
    """Base exception for all litscript errors.

    Subclass this for specific error categories.
    """

    pass


class TokenizationError(LiterateError):
    """The tokenizer did not return exactly one unit for a script file."""

    def __init__(self, unit_count: int, source_file: str | None = None) -> None:
        """Initialize tokenization error.

        Args:
            unit_count: Number of tokenized units actually returned
            source_file: Path to the script (optional)
        """
        self.unit_count = unit_count
        self.source_file = source_file

        location = f"{source_file}: " if source_file else ""
        super().__init__(
            f"{location}expected exactly one tokenized unit, got {unit_count}"
        )


class DirectiveError(LiterateError):
    """A directive used keys that are not understood.

    The message lists every key:value pair of the offending directive so
    all of them can be fixed at once.
    """

    def __init__(self, options: Mapping[str, str], message: str = "Unknown commands") -> None:
        """Initialize directive error.

        Args:
            options: Every key/value pair of the offending directive
            message: Short description of the problem
        """
        self.options = dict(options)
        pairs = ", ".join(f"{key}:{value}" for key, value in self.options.items())
        super().__init__(f"{message}: {pairs}")


@dataclass(frozen=True, slots=True)
class SourceError:
    """A tokenizer diagnostic.

    Diagnostics never abort a parse; they are attached to the resulting
    document for the caller to report.

    Attributes:
        message: Human readable description
        location: Where the problem starts
        severity: "error" or "warning"

    """

    message: str
    location: SourceLocation
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return f"{self.location} {self.severity}: {self.message}"
