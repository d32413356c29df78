"""Text processing utilities for litscript.

Example:
    >>> from litscript.utils.text import strip_quotes
    >>> strip_quotes('"intro"')
    'intro'
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def trim_blank_lines(lines: Sequence[T], is_blank: Callable[[T], bool]) -> tuple[T, ...]:
    """Drop blank entries from both ends of a sequence.

    Interior blank entries are kept. Works on anything with a blank
    predicate so it can be shared by raw text and tokenized lines.

    Args:
        lines: Lines in source order
        is_blank: Predicate telling whether a line counts as blank

    Returns:
        Tuple of lines with leading and trailing blanks removed

    Examples:
        >>> trim_blank_lines(["", "a", "", "b", ""], lambda s: not s)
        ('a', '', 'b')
        >>> trim_blank_lines(["", ""], lambda s: not s)
        ()
    """
    start = 0
    end = len(lines)
    while start < end and is_blank(lines[start]):
        start += 1
    while end > start and is_blank(lines[end - 1]):
        end -= 1
    return tuple(lines[start:end])


def strip_quotes(value: str) -> str:
    """Remove one pair of surrounding double quotes, if present.

    Examples:
        >>> strip_quotes('"a b"')
        'a b'
        >>> strip_quotes('"unbalanced')
        '"unbalanced'
    """
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value
