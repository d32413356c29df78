"""Line-oriented lexer for ML-style scripts.

Splits script text into physical lines and each line into typed tokens.
Block comments nest and may span lines; the lexer carries its mode from
one line to the next, so every line of a multi-line comment becomes a
single COMMENT token.

No regex in the hot path. Every line is scanned once, left to right.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Literal

from litscript.errors import SourceError
from litscript.lexer.modes import (
    COMMENT_CLOSE,
    COMMENT_OPEN,
    LINE_COMMENT,
    MULTIPLY_OPERATOR,
    PP_ELSE,
    PP_ENDIF,
    PP_IF,
    WHITESPACE_CHARS,
    LexerMode,
)
from litscript.location import SourceLocation
from litscript.tokens import Line, Snippet, Token, TokenKind


@dataclass(slots=True)
class _Conditional:
    """One open #if frame."""

    enclosing: bool  # Whether the surrounding code is active
    condition: bool
    location: SourceLocation
    in_else: bool = False

    @property
    def active(self) -> bool:
        return self.enclosing and (self.condition != self.in_else)


class ScriptLexer:
    """State-machine lexer producing one Line per physical source line.

    Usage:
            >>> lexer = ScriptLexer("let x = 1 // one")
            >>> [t.kind.name for t in next(lexer.tokenize()).tokens]
            ['DEFAULT', 'WHITESPACE', 'DEFAULT', 'WHITESPACE', 'DEFAULT', 'WHITESPACE', 'DEFAULT', 'WHITESPACE', 'COMMENT']

    Diagnostics are complete once tokenize() has been exhausted.

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_defined_symbols",
        "_mode",
        "_depth",  # Block comment nesting depth
        "_comment_start",
        "_conditionals",
        "_diagnostics",
        "_lineno",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        defined_symbols: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Script source text
            source_file: Optional source file path for locations
            defined_symbols: Symbols that are true in #if conditions
        """
        self._source = source
        self._source_file = source_file
        self._defined_symbols = defined_symbols
        self._mode = LexerMode.CODE
        self._depth = 0
        self._comment_start = SourceLocation.unknown()
        self._conditionals: list[_Conditional] = []
        self._diagnostics: list[SourceError] = []
        self._lineno = 0

    @property
    def diagnostics(self) -> list[SourceError]:
        """Problems found so far (copy)."""
        return list(self._diagnostics)

    def tokenize(self) -> Iterator[Line]:
        """Tokenize source into lines.

        Lines are split on "\\n" only, so joining the token texts of every
        line with "\\n" reproduces the source exactly.

        Yields:
            Line objects one at a time
        """
        for lineno, text in enumerate(self._source.split("\n"), start=1):
            self._lineno = lineno
            yield self._tokenize_line(text)
        self._finish()

    # =========================================================================
    # Line dispatch
    # =========================================================================

    def _tokenize_line(self, text: str) -> Line:
        if self._mode is LexerMode.CODE:
            stripped = text.strip()
            keyword = _preprocessor_keyword(stripped)
            if keyword is not None:
                return self._preprocessor_line(text, keyword, stripped)
            if not self._active:
                if not text:
                    return Line()
                return Line((self._token(TokenKind.INACTIVE, text, 0),))

        tokens: list[Token] = []
        pos = 0
        if self._mode is LexerMode.COMMENT:
            pos = self._scan_comment(text, 0)
            if pos > 0:
                tokens.append(self._token(TokenKind.COMMENT, text[:pos], 0))
        tokens.extend(self._scan_code(text, pos))
        return Line(tuple(tokens))

    @property
    def _active(self) -> bool:
        return all(frame.active for frame in self._conditionals)

    def _finish(self) -> None:
        if self._mode is LexerMode.COMMENT:
            self._report("unterminated comment", self._comment_start)
        for frame in self._conditionals:
            self._report("#if without matching #endif", frame.location)

    # =========================================================================
    # Scanners
    # =========================================================================

    def _scan_code(self, text: str, pos: int) -> list[Token]:
        """Tokenize text[pos:] starting in CODE mode."""
        tokens: list[Token] = []
        n = len(text)
        i = pos
        while i < n:
            if text[i] in WHITESPACE_CHARS:
                j = i
                while j < n and text[j] in WHITESPACE_CHARS:
                    j += 1
                tokens.append(self._token(TokenKind.WHITESPACE, text[i:j], i))
            elif text.startswith(LINE_COMMENT, i):
                j = n
                tokens.append(self._token(TokenKind.COMMENT, text[i:], i))
            elif _opens_comment(text, i):
                self._mode = LexerMode.COMMENT
                self._depth = 1
                self._comment_start = self._location(i)
                j = self._scan_comment(text, i + len(COMMENT_OPEN))
                tokens.append(self._token(TokenKind.COMMENT, text[i:j], i))
            elif text[i] == '"':
                j = _string_end(text, i)
                if j == -1:
                    self._report("unterminated string", self._location(i))
                    j = n
                tokens.append(self._token(TokenKind.STRING, text[i:j], i))
            elif length := _char_literal_length(text, i):
                j = i + length
                tokens.append(self._token(TokenKind.DEFAULT, text[i:j], i))
            else:
                j = _default_end(text, i)
                tokens.append(self._token(TokenKind.DEFAULT, text[i:j], i))
            i = j
        return tokens

    def _scan_comment(self, text: str, pos: int) -> int:
        """Advance through a block comment.

        Returns:
            Index just past the closing "*)", or len(text) if the comment
            continues on the next line.
        """
        end, self._depth = scan_block_comment(text, pos, self._depth)
        if self._depth == 0:
            self._mode = LexerMode.CODE
        return end

    def _preprocessor_line(self, text: str, keyword: str, stripped: str) -> Line:
        indent = len(text) - len(text.lstrip())
        location = self._location(indent)

        if keyword == PP_IF:
            expression = stripped[len(PP_IF) :].strip()
            if not expression:
                self._report("#if without a condition", location, "warning")
            self._conditionals.append(
                _Conditional(
                    enclosing=self._active,
                    condition=self._evaluate(expression),
                    location=location,
                )
            )
        elif not self._conditionals:
            self._report(f"{keyword} without matching #if", location)
        elif keyword == PP_ELSE:
            self._conditionals[-1].in_else = True
        else:
            self._conditionals.pop()

        tokens: list[Token] = []
        if indent:
            tokens.append(self._token(TokenKind.WHITESPACE, text[:indent], 0))
        tokens.append(self._token(TokenKind.PREPROCESSOR, text[indent:], indent))
        return Line(tuple(tokens))

    def _evaluate(self, expression: str) -> bool:
        """Evaluate an #if condition (supports !, && and ||)."""
        if not expression:
            return False
        return any(
            all(self._symbol_value(term) for term in clause.split("&&"))
            for clause in expression.split("||")
        )

    def _symbol_value(self, term: str) -> bool:
        term = term.strip().strip("()").strip()
        negated = term.startswith("!")
        name = term.lstrip("!").strip()
        return (name in self._defined_symbols) != negated

    # =========================================================================
    # Token construction
    # =========================================================================

    def _location(self, index: int, end: int | None = None) -> SourceLocation:
        return SourceLocation(
            lineno=self._lineno,
            col_offset=index + 1,
            end_col_offset=end + 1 if end is not None else None,
            source_file=self._source_file,
        )

    def _token(self, kind: TokenKind, text: str, index: int) -> Token:
        return Token(kind, text, self._location(index, index + len(text)))

    def _report(
        self,
        message: str,
        location: SourceLocation,
        severity: Literal["error", "warning"] = "error",
    ) -> None:
        self._diagnostics.append(SourceError(message, location, severity))


class ScriptTokenizer:
    """Default tokenizer: returns the whole script as a single unit.

    Usage:
            >>> units, errors = ScriptTokenizer().tokenize("let x = 1")
            >>> len(units), errors
            (1, [])

    """

    def tokenize(
        self,
        content: str,
        source_file: str | None = None,
        defined_symbols: frozenset[str] = frozenset(),
    ) -> tuple[Sequence[Snippet], list[SourceError]]:
        lexer = ScriptLexer(content, source_file, defined_symbols)
        lines = tuple(lexer.tokenize())
        return [Snippet(None, lines)], lexer.diagnostics


# =============================================================================
# Scanning helpers
# =============================================================================


def scan_block_comment(text: str, pos: int, depth: int) -> tuple[int, int]:
    """Scan block comment text that is ``depth`` levels deep at ``pos``.

    Nested "(*" and "*)" adjust the depth, "(*)" is skipped, and a string
    closed on the same line hides any markers inside it.

    Returns:
        (index, depth): index just past the "*)" that brings the depth to
        0, or len(text) and the remaining depth if the comment continues

    Examples:
        >>> scan_block_comment("a (* b *) c *) d", 0, 1)
        (14, 0)
        >>> scan_block_comment("a (* b", 0, 1)
        (6, 2)
    """
    n = len(text)
    i = pos
    while i < n:
        if text.startswith(COMMENT_CLOSE, i):
            i += len(COMMENT_CLOSE)
            depth -= 1
            if depth == 0:
                return i, 0
        elif text.startswith(MULTIPLY_OPERATOR, i):
            i += len(MULTIPLY_OPERATOR)
        elif text.startswith(COMMENT_OPEN, i):
            i += len(COMMENT_OPEN)
            depth += 1
        elif text[i] == '"':
            # Only strings closed on the same line hide comment markers
            end = _string_end(text, i)
            i = end if end != -1 else i + 1
        else:
            i += 1
    return n, depth


def _preprocessor_keyword(stripped: str) -> str | None:
    for keyword in (PP_IF, PP_ELSE, PP_ENDIF):
        if stripped == keyword:
            return keyword
        if stripped.startswith(keyword) and stripped[len(keyword)] in WHITESPACE_CHARS:
            return keyword
    return None


def _opens_comment(text: str, i: int) -> bool:
    return text.startswith(COMMENT_OPEN, i) and not text.startswith(MULTIPLY_OPERATOR, i)


def _string_end(text: str, i: int) -> int:
    """Index just past the string literal starting at i, or -1."""
    n = len(text)
    j = i + 1
    while j < n:
        if text[j] == "\\":
            j += 2
        elif text[j] == '"':
            return j + 1
        else:
            j += 1
    return -1


def _char_literal_length(text: str, i: int) -> int:
    """Length of a character literal like 'a' or '\\n' at i, or 0."""
    if text[i] != "'":
        return 0
    n = len(text)
    if i + 2 < n and text[i + 1] != "\\" and text[i + 2] == "'":
        return 3
    if i + 1 < n and text[i + 1] == "\\":
        close = text.find("'", i + 3)
        if close != -1 and close - i <= 8:
            return close - i + 1
    return 0


def _default_end(text: str, i: int) -> int:
    """End of a DEFAULT run starting at i (always consumes one char)."""
    n = len(text)
    j = i + 1
    while j < n:
        if (
            text[j] in WHITESPACE_CHARS
            or text[j] == '"'
            or text.startswith(LINE_COMMENT, j)
            or _opens_comment(text, j)
            or _char_literal_length(text, j)
        ):
            break
        j += 1
    return j
