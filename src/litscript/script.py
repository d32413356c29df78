"""Script parsing pipeline: tokenize, classify, transform.

Thread Safety:
parse_script keeps all state local to the call. Configuration is read
from the ContextVar-based ParseConfig.

"""

from __future__ import annotations

from litscript.classifier import classify_lines
from litscript.config import get_parse_config
from litscript.document import LiterateDocument
from litscript.errors import TokenizationError
from litscript.lexer import ScriptTokenizer
from litscript.protocols import MarkdownParser, Tokenizer
from litscript.transform import DocumentTransformer
from litscript.utils.logger import get_logger

logger = get_logger(__name__)


def parse_script(
    content: str,
    *,
    source_file: str | None = None,
    tokenizer: Tokenizer | None = None,
    markdown: MarkdownParser | None = None,
) -> LiterateDocument:
    """Parse a literate script into a LiterateDocument.

    Args:
        content: Script source text (caller handles I/O)
        source_file: Optional source file path for locations and errors
        tokenizer: Tokenizer to use (ScriptTokenizer if None)
        markdown: Parser for comment text (Patitas if None)

    Returns:
        LiterateDocument with paragraphs, merged links, tokenized source
        and tokenizer diagnostics

    Raises:
        TokenizationError: If the tokenizer does not return exactly one unit
        DirectiveError: If a directive uses an unknown key

    Example:
        >>> doc = parse_script("(** # Setup *)\\nlet x = 1")
        >>> [type(p).__name__ for p in doc.paragraphs]
        ['Heading', 'FormattedCode']
    """
    config = get_parse_config()
    tokenizer = tokenizer or ScriptTokenizer()

    units, diagnostics = tokenizer.tokenize(content, source_file, config.defined_symbols)
    if len(units) != 1:
        raise TokenizationError(len(units), source_file)
    for diagnostic in diagnostics:
        logger.warning("%s", diagnostic)

    blocks = classify_lines(units[0].lines)
    paragraphs, links = DocumentTransformer(markdown).transform(blocks)

    return LiterateDocument(
        paragraphs=tuple(paragraphs),
        links=links,
        source=tuple(units),
        diagnostics=tuple(diagnostics),
        source_file=source_file,
    )


__all__ = ["parse_script"]
