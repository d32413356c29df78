"""Block classifier: groups tokenized lines into comment, snippet and command blocks.

A two-state machine walks the lines once:

- SNIPPET: collecting code lines, waiting for a documentation comment
- COMMENT: collecting a (** ... *) comment, waiting for its end

In both states a (*** key:value ***) directive line closes whatever is
open and becomes a CommandBlock.

Comment text is kept as a list of per-line fragments and joined once
when the comment is closed. The comment ends at its *closer*, the "*)"
that brings the comment nesting depth back to zero. Whatever follows the
closer, on its own line or on later comment-only lines, is not
documentation; it is handed to the following snippet.

Thread Safety:
Classifier instances are single-use. All state is instance-local.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import replace
from enum import Enum, auto

from litscript.blocks import Block, CommandBlock, CommentBlock, SnippetBlock
from litscript.commands import parse_command
from litscript.lexer import scan_block_comment
from litscript.tokens import Line, Token, TokenKind, comment_text
from litscript.utils.logger import get_logger
from litscript.utils.text import trim_blank_lines

logger = get_logger(__name__)

DOC_COMMENT_OPEN = "(**"
COMMENT_CLOSE = "*)"
LINE_COMMENT = "//"


class ClassifierState(Enum):
    """What the classifier is currently collecting."""

    SNIPPET = auto()
    COMMENT = auto()


class BlockClassifier:
    """State machine turning lines into blocks.

    Usage:
            >>> from litscript.lexer import ScriptLexer
            >>> lines = ScriptLexer("(** Hello *)\\nlet x = 1").tokenize()
            >>> list(BlockClassifier(lines).classify())
            [CommentBlock(text=' Hello '), SnippetBlock(lines=(Line(...),))]

    Classification never fails: every line ends up in some block.

    """

    __slots__ = (
        "_lines",
        "_state",
        "_snippet",  # Lines of the snippet being collected
        "_fragments",  # Comment text, one entry per line
        "_comment_lines",  # Source line of each fragment
        "_depth",  # Comment nesting depth at the end of the last fragment
        "_closer",  # (fragment index, column) of the closing "*)"
    )

    def __init__(self, lines: Iterable[Line]) -> None:
        self._lines = lines
        self._state = ClassifierState.SNIPPET
        self._snippet: list[Line] = []
        self._fragments: list[str] = []
        self._comment_lines: list[Line] = []
        self._depth = 0
        self._closer: tuple[int, int] | None = None

    def classify(self) -> Iterator[Block]:
        """Classify all lines.

        Yields:
            Blocks in source order
        """
        for line in self._lines:
            yield from self._feed(line)

        if self._state is ClassifierState.COMMENT:
            yield from self._close_comment()
        yield from self._flush_snippet()

    # =========================================================================
    # Line rules
    # =========================================================================

    def _feed(self, line: Line) -> Iterator[Block]:
        options = _command_options(line)
        if options is not None:
            if self._state is ClassifierState.COMMENT:
                yield from self._close_comment()
            yield from self._flush_snippet()
            yield CommandBlock(options)
            return

        text = comment_text(line)
        opener = _doc_comment_opener(line)

        if self._state is ClassifierState.COMMENT:
            if (
                text is not None
                and self._closer is not None
                and text.strip().startswith(LINE_COMMENT)
            ):
                # The documentation is over; a // comment starts the code
                yield from self._close_comment()
                yield from self._feed(line)
            elif opener is not None:
                yield from self._close_comment()
                yield from self._flush_snippet()
                self._start_comment(opener, line)
            elif text is not None:
                self._add_fragment(text, line)
            else:
                yield from self._close_comment()
                self._snippet.append(line)
            return

        if opener is not None:
            yield from self._flush_snippet()
            self._start_comment(opener, line)
        else:
            self._snippet.append(line)

    # =========================================================================
    # Comment accumulation
    # =========================================================================

    def _start_comment(self, text: str, line: Line) -> None:
        self._state = ClassifierState.COMMENT
        self._fragments = []
        self._comment_lines = []
        self._depth = 1
        self._closer = None
        self._add_fragment(text, line)

    def _add_fragment(self, text: str, line: Line) -> None:
        if self._closer is None:
            end, self._depth = scan_block_comment(text, 0, self._depth)
            if self._depth == 0:
                self._closer = len(self._fragments), end - len(COMMENT_CLOSE)
        self._fragments.append(text)
        self._comment_lines.append(line)

    def _cut(self) -> tuple[int, int] | None:
        """Locate the comment's closing "*)" as (fragment index, column).

        A comment that never returns to depth zero is cut at its last "*)".
        """
        if self._closer is not None:
            return self._closer
        for index in range(len(self._fragments) - 1, -1, -1):
            column = self._fragments[index].rfind(COMMENT_CLOSE)
            if column != -1:
                return index, column
        return None

    def _close_comment(self) -> Iterator[Block]:
        """Emit the comment and hand everything after its closer to the snippet."""
        cut = self._cut()
        if cut is None:
            text = "\n".join(self._fragments)
            rest: list[Line] = []
        else:
            index, column = cut
            text = "\n".join([*self._fragments[:index], self._fragments[index][:column]])
            rest = self._comment_lines[index + 1 :]

            # Fragment columns of the opening line start after "(**"
            offset = len(DOC_COMMENT_OPEN) if index == 0 else 0
            tail = _line_after(self._comment_lines[index], offset + column + len(COMMENT_CLOSE))
            if not tail.is_blank:
                rest.insert(0, tail)

        self._state = ClassifierState.SNIPPET
        self._fragments = []
        self._comment_lines = []
        self._depth = 0
        self._closer = None
        self._snippet = rest
        yield CommentBlock(text)

    # =========================================================================
    # Snippet accumulation
    # =========================================================================

    def _flush_snippet(self) -> Iterator[Block]:
        lines = trim_blank_lines(self._snippet, _is_blank)
        self._snippet = []
        if lines:
            yield SnippetBlock(lines)


def classify_lines(lines: Iterable[Line]) -> list[Block]:
    """Group tokenized lines into blocks.

    Args:
        lines: Tokenized lines of one script, in source order

    Returns:
        Comment, snippet and command blocks in source order. Snippets are
        blank-trimmed and never empty.
    """
    blocks = list(BlockClassifier(lines).classify())
    logger.debug("Classified script into %d blocks", len(blocks))
    return blocks


# =============================================================================
# Line shape helpers
# =============================================================================


def _is_blank(line: Line) -> bool:
    return line.is_blank


def _command_options(line: Line) -> Mapping[str, str] | None:
    text = comment_text(line)
    if not text:
        return None
    return parse_command(text)


def _doc_comment_opener(line: Line) -> str | None:
    """Text after "(**" if the line is a single documentation comment token.

    Trailing whitespace tokens are allowed.
    """
    tokens = list(line.tokens)
    while tokens and tokens[-1].is_whitespace:
        tokens.pop()
    if len(tokens) != 1:
        return None
    token = tokens[0]
    if token.is_comment and token.text.startswith(DOC_COMMENT_OPEN):
        return token.text[len(DOC_COMMENT_OPEN) :]
    return None


def _line_after(line: Line, column: int) -> Line:
    """Tokens of a comment-only line past ``column`` of its comment text.

    ``column`` counts characters of the concatenated comment tokens, as
    returned by comment_text. A comment token split by the column leaves
    its remainder as a DEFAULT token.
    """
    consumed = 0
    for index, token in enumerate(line.tokens):
        if not token.is_comment:
            continue
        end = consumed + len(token.text)
        if column < end:
            split = column - consumed
            location = replace(token.location, col_offset=token.location.col_offset + split)
            head = Token(TokenKind.DEFAULT, token.text[split:], location)
            return Line((head, *line.tokens[index + 1 :]))
        if column == end:
            return Line(line.tokens[index + 1 :])
        consumed = end
    return Line()


__all__ = [
    "BlockClassifier",
    "ClassifierState",
    "classify_lines",
]
