"""Protocols for litscript's collaborators.

The pipeline only depends on these shapes. The defaults are
litscript.lexer.ScriptTokenizer and litscript.markdown.PatitasMarkdownParser.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from litscript.errors import SourceError
    from litscript.markdown import MarkdownResult
    from litscript.tokens import Snippet


class Tokenizer(Protocol):
    """Turns script text into tokenized units plus diagnostics.

    A script file must come back as exactly one unit.

    """

    def tokenize(
        self,
        content: str,
        source_file: str | None = None,
        defined_symbols: frozenset[str] = frozenset(),
    ) -> tuple[Sequence[Snippet], list[SourceError]]:
        """Tokenize a whole script.

        Args:
            content: Script source text
            source_file: Optional path for locations
            defined_symbols: Preprocessor symbols to treat as defined

        Returns:
            (units, diagnostics)
        """
        ...


class MarkdownParser(Protocol):
    """Parses the text of one documentation comment.

    Thread Safety:
        Implementations must not keep state between calls.

    """

    def parse(self, text: str) -> MarkdownResult:
        """Parse comment text into block nodes and a link table."""
        ...
