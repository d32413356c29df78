"""Link reference definitions and their merging across comment blocks.

Every documentation comment is parsed on its own, so each one yields its
own link table. The finished document carries a single table built by
merging them in source order under an explicit LinkMergePolicy.

Thread Safety:
LinkDefinition is frozen; merge_link_tables is a pure function.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum


class LinkMergePolicy(Enum):
    """Which definition is kept when several tables define the same label."""

    FIRST_WINS = "first"
    LAST_WINS = "last"


@dataclass(frozen=True, slots=True)
class LinkDefinition:
    """Target of a Markdown link reference definition.

    Markdown: [label]: url "title"

    """

    url: str
    title: str | None = None


def normalize_label(label: str) -> str:
    """Normalize a link label for matching.

    Labels match case-insensitively with internal whitespace collapsed,
    as in CommonMark.

    Examples:
        >>> normalize_label("  Foo\\n  Bar ")
        'foo bar'
    """
    return " ".join(label.split()).casefold()


def merge_link_tables(
    tables: Iterable[Mapping[str, LinkDefinition]],
    policy: LinkMergePolicy = LinkMergePolicy.LAST_WINS,
) -> dict[str, LinkDefinition]:
    """Merge per-comment link tables into one.

    Tables are visited in the order given (source order). With LAST_WINS a
    later table overrides an earlier definition of the same label; with
    FIRST_WINS the earliest definition is kept.

    Args:
        tables: Link tables in source order
        policy: Duplicate-label resolution

    Returns:
        New merged table

    Examples:
        >>> a = {"home": LinkDefinition("https://a")}
        >>> b = {"home": LinkDefinition("https://b")}
        >>> merge_link_tables([a, b])["home"].url
        'https://b'
        >>> merge_link_tables([a, b], LinkMergePolicy.FIRST_WINS)["home"].url
        'https://a'
    """
    merged: dict[str, LinkDefinition] = {}
    for table in tables:
        for key, definition in table.items():
            if policy is LinkMergePolicy.FIRST_WINS and key in merged:
                continue
            merged[key] = definition
    return merged


__all__ = [
    "LinkDefinition",
    "LinkMergePolicy",
    "merge_link_tables",
    "normalize_label",
]
