"""Blocks produced by the classifier.

A script is grouped into three kinds of blocks, in source order:

- CommentBlock: text of one documentation comment, delimiters stripped
- SnippetBlock: a contiguous run of code lines (never empty)
- CommandBlock: a decoded (*** key:value ***) directive

Thread Safety:
All blocks are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from litscript.tokens import Line


@dataclass(frozen=True, slots=True)
class CommentBlock:
    """Documentation comment, to be parsed as Markdown."""

    text: str


@dataclass(frozen=True, slots=True)
class SnippetBlock:
    """Code lines shown (or hidden) as one snippet."""

    lines: tuple[Line, ...]


@dataclass(frozen=True, slots=True)
class CommandBlock:
    """Decoded directive; keys are unique."""

    options: Mapping[str, str]


type Block = CommentBlock | SnippetBlock | CommandBlock


__all__ = [
    "Block",
    "CommandBlock",
    "CommentBlock",
    "SnippetBlock",
]
