"""Markdown parsing of documentation comments, backed by Patitas.

Each comment block is parsed on its own. Patitas builds the block nodes;
link reference definitions are read from the Patitas lexer's
LINK_REFERENCE_DEF tokens, since a parsed Document does not keep them.

Thread Safety:
PatitasMarkdownParser holds only immutable settings. Patitas sets its own
configuration through a ContextVar for the duration of each parse.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from patitas import Lexer, Markdown
from patitas.nodes import Block
from patitas.tokens import TokenType

from litscript.links import LinkDefinition, normalize_label

# CommonMark: a backslash before ASCII punctuation is a literal character
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

# Block starts that end a paragraph (a definition cannot interrupt one)
_PARAGRAPH_BREAKERS = frozenset(
    {
        TokenType.BLANK_LINE,
        TokenType.ATX_HEADING,
        TokenType.THEMATIC_BREAK,
        TokenType.FENCED_CODE_START,
        TokenType.BLOCK_QUOTE_MARKER,
        TokenType.LIST_ITEM_MARKER,
        TokenType.HTML_BLOCK,
        TokenType.DIRECTIVE_OPEN,
        TokenType.FOOTNOTE_DEF,
    }
)


@dataclass(frozen=True, slots=True)
class MarkdownResult:
    """Parsed documentation comment.

    Attributes:
        blocks: Block nodes in reading order
        links: Link definitions keyed by normalized label

    """

    blocks: tuple[Block, ...]
    links: dict[str, LinkDefinition] = field(default_factory=dict)


class PatitasMarkdownParser:
    """MarkdownParser implementation using Patitas.

    Usage:
            >>> parser = PatitasMarkdownParser()
            >>> result = parser.parse("# Intro\\n\\n[docs]: https://example.org")
            >>> result.blocks[0].level, result.links["docs"].url
            (1, 'https://example.org')

    """

    __slots__ = ("_markdown", "_plugins")

    def __init__(self, plugins: tuple[str, ...] = ()) -> None:
        """Initialize the adapter.

        Args:
            plugins: Patitas plugin names (e.g. "table", "math", "all")
        """
        self._plugins = plugins
        self._markdown = Markdown(plugins=list(plugins))

    @property
    def plugins(self) -> tuple[str, ...]:
        return self._plugins

    def parse(self, text: str) -> MarkdownResult:
        doc = self._markdown.parse(text)
        return MarkdownResult(blocks=tuple(doc.children), links=collect_link_definitions(text))


def collect_link_definitions(text: str) -> dict[str, LinkDefinition]:
    """Collect the link reference definitions of one Markdown text.

    The first definition of a label wins, and a definition directly after
    a paragraph line is paragraph text, not a definition (CommonMark 4.7).
    Keep in sync with the link reference first pass in patitas.parser.Parser.parse.

    Examples:
        >>> defs = collect_link_definitions('[Home]: /index.html "Start"')
        >>> defs["home"]
        LinkDefinition(url='/index.html', title='Start')
    """
    links: dict[str, LinkDefinition] = {}
    in_paragraph = False

    for token in Lexer(text).tokenize():
        if token.type == TokenType.LINK_REFERENCE_DEF:
            if not in_paragraph:
                # Value format: label|url|title
                parts = token.value.split("|", 2)
                raw_label = parts[0]
                if len(parts) >= 2 and "[" not in raw_label.replace("\\[", ""):
                    label = normalize_label(raw_label)
                    if label and label not in links:
                        title = _unescape(parts[2]) if len(parts) > 2 else ""
                        links[label] = LinkDefinition(_unescape(parts[1]), title or None)
            in_paragraph = False
        elif token.type in (TokenType.PARAGRAPH_LINE, TokenType.INDENTED_CODE):
            in_paragraph = True
        elif token.type in _PARAGRAPH_BREAKERS:
            in_paragraph = False

    return links


def _unescape(text: str) -> str:
    return _ESCAPE_PATTERN.sub(r"\1", text)


__all__ = [
    "MarkdownResult",
    "PatitasMarkdownParser",
    "collect_link_definitions",
]
