"""
litscript: Literate script parser built on Patitas

Turns an ML-style script with (** Markdown *) documentation comments and
(*** key:value ***) directives into an ordered literate document: Markdown
prose, formatted code, hidden named code and forward references.

Quick Start:
    >>> from litscript import parse_script
    >>> doc = parse_script('''
    ... (** # Setup
    ... Define a value: *)
    ... let x = 1
    ... ''')
    >>> [type(p).__name__ for p in doc.paragraphs]
    ['Heading', 'Paragraph', 'FormattedCode']

Directives:
    (*** include: name ***)   Show the snippet defined as "name" here
    (*** define: name ***)    Bind the next snippet to "name", do not show it
    (*** hide ***)            Drop the next snippet from the document

Installation:
    pip install litscript
"""

from collections.abc import Iterable

from litscript.blocks import Block, CommandBlock, CommentBlock, SnippetBlock
from litscript.classifier import BlockClassifier, classify_lines
from litscript.commands import parse_command
from litscript.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from litscript.document import LiterateDocument
from litscript.errors import DirectiveError, LiterateError, SourceError, TokenizationError
from litscript.lexer import ScriptLexer, ScriptTokenizer
from litscript.links import LinkDefinition, LinkMergePolicy, merge_link_tables
from litscript.location import SourceLocation
from litscript.markdown import MarkdownResult, PatitasMarkdownParser
from litscript.nodes import CodeReference, FormattedCode, HiddenCode, ParagraphNode
from litscript.protocols import MarkdownParser, Tokenizer
from litscript.script import parse_script
from litscript.tokens import Line, Snippet, Token, TokenKind
from litscript.transform import DocumentTransformer, transform_blocks

__version__ = "0.1.0"


class Literate:
    """High-level script parser with a fixed configuration.

    Usage:
        >>> lit = Literate(defined_symbols={"DOCS"}, markdown_plugins=["table"])
        >>> doc = lit.parse("(** Hello *)", source_file="hello.fsx")

    Thread Safety:
        Uses ContextVar for configuration. Safe to use multiple Literate
        instances concurrently from different threads.

    """

    __slots__ = ("_config", "_tokenizer", "_markdown")

    def __init__(
        self,
        *,
        defined_symbols: Iterable[str] = (),
        markdown_plugins: Iterable[str] = (),
        link_merge_policy: LinkMergePolicy = LinkMergePolicy.LAST_WINS,
        tokenizer: Tokenizer | None = None,
        markdown: MarkdownParser | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            defined_symbols: Preprocessor symbols treated as defined
            markdown_plugins: Patitas plugins for comment text (["all"] for all)
            link_merge_policy: Duplicate link label resolution across comments
            tokenizer: Custom tokenizer (ScriptTokenizer if None)
            markdown: Custom Markdown parser (built from markdown_plugins if None)
        """
        self._config = ParseConfig(
            defined_symbols=frozenset(defined_symbols),
            link_merge_policy=link_merge_policy,
            markdown_plugins=tuple(markdown_plugins),
        )
        self._tokenizer = tokenizer or ScriptTokenizer()
        self._markdown = markdown or PatitasMarkdownParser(self._config.markdown_plugins)

    @property
    def config(self) -> ParseConfig:
        return self._config

    def parse(self, content: str, *, source_file: str | None = None) -> LiterateDocument:
        """Parse one script with this instance's configuration."""
        with parse_config_context(self._config):
            return parse_script(
                content,
                source_file=source_file,
                tokenizer=self._tokenizer,
                markdown=self._markdown,
            )

    def parse_many(self, sources: Iterable[tuple[str, str | None]]) -> list[LiterateDocument]:
        """Parse several scripts given as (content, source_file) pairs.

        Each script is parsed independently; the first fatal error aborts
        the batch.
        """
        with parse_config_context(self._config):
            return [
                parse_script(
                    content,
                    source_file=source_file,
                    tokenizer=self._tokenizer,
                    markdown=self._markdown,
                )
                for content, source_file in sources
            ]


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse_script",
    "Literate",
    "LiterateDocument",
    # Pipeline stages
    "BlockClassifier",
    "classify_lines",
    "DocumentTransformer",
    "transform_blocks",
    "parse_command",
    # Blocks
    "Block",
    "CommandBlock",
    "CommentBlock",
    "SnippetBlock",
    # Paragraph nodes
    "CodeReference",
    "FormattedCode",
    "HiddenCode",
    "ParagraphNode",
    # Links
    "LinkDefinition",
    "LinkMergePolicy",
    "merge_link_tables",
    # Collaborators
    "MarkdownParser",
    "MarkdownResult",
    "PatitasMarkdownParser",
    "ScriptLexer",
    "ScriptTokenizer",
    "Tokenizer",
    # Tokens
    "Line",
    "Snippet",
    "Token",
    "TokenKind",
    "SourceLocation",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "LiterateError",
    "DirectiveError",
    "TokenizationError",
    "SourceError",
]
