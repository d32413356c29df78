"""Paragraph nodes of a literate document.

A literate document is an ordered sequence of paragraphs. Prose comes
from the Markdown parser as ordinary Patitas block nodes; code gets one of
three literate nodes:

ParagraphNode
├── FormattedCode    # Visible code snippet
├── HiddenCode       # Named (define) code, not shown where it is defined
├── CodeReference    # (*** include ***) placeholder for named code
└── patitas Block    # Heading, Paragraph, List, ... from comment text

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from patitas.nodes import Block

from litscript.tokens import Line


@dataclass(frozen=True, slots=True)
class CodeReference:
    """Placeholder for the snippet bound to ``name`` by a define directive.

    Directive: (*** include: name ***)

    The name is resolved when the document is rendered; an unresolved
    reference is not a parse error.

    """

    name: str


@dataclass(frozen=True, slots=True)
class HiddenCode:
    """Snippet that is not shown at its own position.

    Directive: (*** define: name ***) followed by code

    """

    name: str | None
    lines: tuple[Line, ...]


@dataclass(frozen=True, slots=True)
class FormattedCode:
    """Ordinary visible code snippet."""

    lines: tuple[Line, ...]

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


type LiterateNode = CodeReference | HiddenCode | FormattedCode

type ParagraphNode = LiterateNode | Block


__all__ = [
    "CodeReference",
    "FormattedCode",
    "HiddenCode",
    "LiterateNode",
    "ParagraphNode",
]
