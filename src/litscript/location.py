"""Source location tracking for tokens and diagnostics.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a token or diagnostic in a script file.

    All positions are 1-indexed (lineno and col_offset start at 1).
    ``end_col_offset`` is exclusive.

    Examples:
            >>> loc = SourceLocation(3, 5, source_file="intro.fsx")
            >>> str(loc)
            'intro.fsx:3:5'

    """

    lineno: int
    col_offset: int
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.fsx:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location for synthetic tokens."""
        return cls(lineno=0, col_offset=0)
