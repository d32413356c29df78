"""Document transformer: turns classified blocks into paragraph nodes.

Walks the blocks once, in order:

- (*** include: name ***)        -> CodeReference(name)
- (*** hide ***) + snippet       -> nothing (the snippet is consumed)
- (*** define: name ***) + snippet -> HiddenCode(name, snippet)
- snippet                        -> FormattedCode(snippet)
- comment                        -> Markdown blocks, plus its link table

A directive with a key other than include, hide or define aborts the
whole transformation with a DirectiveError naming every pair of that
directive.

Thread Safety:
Transformer instances hold only immutable settings; every call to
transform() uses local accumulators.

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from litscript.blocks import Block, CommandBlock, CommentBlock, SnippetBlock
from litscript.commands import DEFINE, HIDE, INCLUDE, KNOWN_COMMANDS, format_options
from litscript.config import get_parse_config
from litscript.errors import DirectiveError
from litscript.links import LinkDefinition, LinkMergePolicy, merge_link_tables
from litscript.markdown import PatitasMarkdownParser
from litscript.nodes import CodeReference, FormattedCode, HiddenCode, ParagraphNode
from litscript.protocols import MarkdownParser
from litscript.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentTransformer:
    """Resolves directives and parses comments into one paragraph list.

    Usage:
            >>> from litscript.blocks import CommandBlock
            >>> paragraphs, links = DocumentTransformer().transform(
            ...     [CommandBlock({"include": "setup"})]
            ... )
            >>> paragraphs
            [CodeReference(name='setup')]

    Settings not given explicitly are read from the active ParseConfig.

    """

    __slots__ = ("_markdown", "_link_merge_policy")

    def __init__(
        self,
        markdown: MarkdownParser | None = None,
        link_merge_policy: LinkMergePolicy | None = None,
    ) -> None:
        config = get_parse_config()
        self._markdown = markdown or PatitasMarkdownParser(config.markdown_plugins)
        self._link_merge_policy = link_merge_policy or config.link_merge_policy

    def transform(
        self, blocks: Sequence[Block]
    ) -> tuple[list[ParagraphNode], dict[str, LinkDefinition]]:
        """Transform blocks into paragraphs and a merged link table.

        Args:
            blocks: Blocks in source order

        Returns:
            (paragraphs in source order, merged link table)

        Raises:
            DirectiveError: If a directive has a key that is not understood
        """
        paragraphs: list[ParagraphNode] = []
        tables: list[dict[str, LinkDefinition]] = []

        i = 0
        while i < len(blocks):
            block = blocks[i]
            i += 1
            match block:
                case CommandBlock(options=options):
                    following = blocks[i] if i < len(blocks) else None
                    if self._command(options, following, paragraphs):
                        i += 1
                case SnippetBlock(lines=lines):
                    if lines:
                        paragraphs.append(FormattedCode(lines))
                case CommentBlock(text=text):
                    result = self._markdown.parse(text)
                    paragraphs.extend(result.blocks)
                    tables.append(result.links)

        links = merge_link_tables(tables, self._link_merge_policy)
        logger.debug(
            "Transformed %d blocks into %d paragraphs (%d link definitions)",
            len(blocks),
            len(paragraphs),
            len(links),
        )
        return paragraphs, links

    def _command(
        self,
        options: Mapping[str, str],
        following: Block | None,
        paragraphs: list[ParagraphNode],
    ) -> bool:
        """Apply one directive.

        Returns:
            True if the following snippet was consumed
        """
        if any(key not in KNOWN_COMMANDS for key in options):
            raise DirectiveError(options)

        if INCLUDE in options:
            paragraphs.append(CodeReference(options[INCLUDE]))
            return False

        if not isinstance(following, SnippetBlock):
            logger.warning("%s is not followed by code; ignored", format_options(options))
            return False

        if HIDE not in options:
            name = options.get(DEFINE, "")
            if name:
                paragraphs.append(HiddenCode(name, following.lines))
            else:
                logger.warning("define without a name hides its snippet")
        return True


def transform_blocks(
    blocks: Sequence[Block],
    markdown: MarkdownParser | None = None,
    link_merge_policy: LinkMergePolicy | None = None,
) -> tuple[list[ParagraphNode], dict[str, LinkDefinition]]:
    """Transform blocks with a one-off DocumentTransformer.

    See DocumentTransformer.transform.
    """
    return DocumentTransformer(markdown, link_merge_policy).transform(blocks)


__all__ = [
    "DocumentTransformer",
    "transform_blocks",
]
