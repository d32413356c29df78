"""The literate document produced for one script.

Thread Safety:
LiterateDocument is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from litscript.errors import SourceError
from litscript.links import LinkDefinition
from litscript.nodes import CodeReference, HiddenCode, ParagraphNode
from litscript.tokens import Snippet


@dataclass(frozen=True, slots=True)
class LiterateDocument:
    """Paragraphs of a parsed script plus everything needed to render it.

    Attributes:
        paragraphs: Prose and code paragraphs in reading order
        links: Link definitions merged from every comment block
        source: Tokenized source units, for consumers that want raw code
        diagnostics: Tokenizer problems (never fatal)
        source_file: Path of the script, if known

    """

    paragraphs: tuple[ParagraphNode, ...]
    links: dict[str, LinkDefinition] = field(default_factory=dict)
    source: tuple[Snippet, ...] = ()
    diagnostics: tuple[SourceError, ...] = ()
    source_file: str | None = None

    def definitions(self) -> dict[str, HiddenCode]:
        """Named snippets, for resolving CodeReference paragraphs.

        When a name is defined twice the later definition is kept.
        """
        return {
            node.name: node
            for node in self.paragraphs
            if isinstance(node, HiddenCode) and node.name is not None
        }

    def references(self) -> Iterator[CodeReference]:
        """CodeReference paragraphs in reading order."""
        for node in self.paragraphs:
            if isinstance(node, CodeReference):
                yield node

    def unresolved_references(self) -> list[str]:
        """Names that are included but never defined."""
        defined = self.definitions()
        return [ref.name for ref in self.references() if ref.name not in defined]
