"""Token, Line and Snippet definitions for tokenized scripts.

A tokenizer turns script text into Snippet units: ordered Lines, each an
ordered tuple of Tokens. The block classifier only looks at token kinds
and text, so any tokenizer that produces these shapes can feed it.

Thread Safety:
All types are frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from litscript.location import SourceLocation


class TokenKind(Enum):
    """Token kinds produced by a tokenizer.

    Only COMMENT and WHITESPACE drive classification; every other kind
    is treated as ordinary code.

    """

    COMMENT = auto()  # (* ... *) or // ...
    WHITESPACE = auto()  # Runs of spaces and tabs
    DEFAULT = auto()  # Any other code text
    STRING = auto()  # "..." literal
    PREPROCESSOR = auto()  # #if / #else / #endif
    INACTIVE = auto()  # Code in a disabled #if branch


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit of a script line.

    Attributes:
        kind: The token kind
        text: Literal source text of the token
        location: Where the token starts

    """

    kind: TokenKind
    text: str
    location: SourceLocation = field(default_factory=SourceLocation.unknown, compare=False)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.name}, {val!r}, {self.location.lineno}:{self.location.col_offset})"

    @property
    def is_whitespace(self) -> bool:
        """Whether the token only separates other tokens.

        A DEFAULT token holding nothing but whitespace counts too, so
        tokenizers that do not emit WHITESPACE still classify correctly.
        """
        if self.kind is TokenKind.WHITESPACE:
            return True
        return self.kind is TokenKind.DEFAULT and self.text.strip() == ""

    @property
    def is_comment(self) -> bool:
        """Whether the token is a comment."""
        return self.kind is TokenKind.COMMENT


@dataclass(frozen=True, slots=True)
class Line:
    """One physical source line as an ordered tuple of tokens.

    An empty source line is a Line with no tokens.

    """

    tokens: tuple[Token, ...] = ()

    @property
    def text(self) -> str:
        """Reconstruct the source text of the line."""
        return "".join(token.text for token in self.tokens)

    @property
    def is_blank(self) -> bool:
        """Whether the line has no tokens other than whitespace."""
        return all(token.is_whitespace for token in self.tokens)


@dataclass(frozen=True, slots=True)
class Snippet:
    """One tokenized unit returned by a tokenizer.

    Attributes:
        title: Optional name of the unit (None for a whole file)
        lines: Tokenized lines in source order

    """

    title: str | None
    lines: tuple[Line, ...]


def comment_text(line: Line) -> str | None:
    """Return the concatenated comment text of a comment-only line.

    A comment-only line starts with a comment token and holds nothing but
    comment tokens and whitespace after that. Whitespace is skipped in the
    result. A line with no tokens yields an empty string.

    Args:
        line: Tokenized line

    Returns:
        Concatenated comment text, or None if the line holds anything else

    Examples:
        >>> comment_text(Line((Token(TokenKind.COMMENT, "(* a *)"),)))
        '(* a *)'
        >>> comment_text(Line((Token(TokenKind.DEFAULT, "let"),))) is None
        True
    """
    parts: list[str] = []
    for index, token in enumerate(line.tokens):
        if token.is_comment:
            parts.append(token.text)
        elif token.is_whitespace and index > 0:
            continue
        else:
            return None
    return "".join(parts)


__all__ = [
    "Line",
    "Snippet",
    "Token",
    "TokenKind",
    "comment_text",
]
