"""Property-based tests for classifier invariants using Hypothesis.

Scripts are generated from self-contained units (complete comments,
directives, code and blank lines) so the expected block shape can be
derived from the unit sequence.
"""

from collections import Counter

from hypothesis import given, settings
from hypothesis import strategies as st

from litscript.blocks import CommandBlock, CommentBlock, SnippetBlock
from litscript.classifier import classify_lines
from litscript.lexer import ScriptLexer

# Documentation units and the comment text each one must produce
DOC_TEXTS = {
    "(** doc *)": " doc ",
    "(** multi\nline docs\n*)": " multi\nline docs\n",
    "(** # Heading *)": " # Heading ",
    "(** see\n    (* nested *)\nmore *)": " see\n    (* nested *)\nmore ",
    "(** inline (* nested *) doc *)": " inline (* nested *) doc ",
    "(** a\n(* open\nclosed *)\nb *)": " a\n(* open\nclosed *)\nb ",
}
DOC_UNITS = list(DOC_TEXTS)
COMMAND_UNITS = ["(*** hide ***)", "(*** define: x ***)", "(*** include: x ***)"]
CODE_UNITS = ["let x = 1", "x + y", "(* plain *)", "// note"]
BLANK_UNITS = ["", "   "]

CODE_ONLY = st.lists(st.sampled_from(["let x = 1", "x + y", "", "  "]), max_size=30)
SCRIPTS = st.lists(
    st.sampled_from(DOC_UNITS + COMMAND_UNITS + CODE_UNITS + BLANK_UNITS), max_size=40
)


def classify(source: str) -> list:
    return classify_lines(ScriptLexer(source).tokenize())


class TestCodeOnlyInput:
    """Input without comments or directives."""

    @given(CODE_ONLY)
    @settings(max_examples=200)
    def test_single_trimmed_snippet(self, units: list[str]) -> None:
        blocks = classify("\n".join(units))
        expected = list(units)
        while expected and not expected[0].strip():
            expected.pop(0)
        while expected and not expected[-1].strip():
            expected.pop()

        if not expected:
            assert blocks == []
        else:
            (block,) = blocks
            assert isinstance(block, SnippetBlock)
            assert [line.text for line in block.lines] == expected


class TestNothingLostNothingDuplicated:
    """Every unit ends up in exactly one block of the matching kind."""

    @given(SCRIPTS)
    @settings(max_examples=300)
    def test_comment_count(self, units: list[str]) -> None:
        blocks = classify("\n".join(units))
        comments = [b for b in blocks if isinstance(b, CommentBlock)]
        assert len(comments) == sum(1 for u in units if u in DOC_UNITS)

    @given(SCRIPTS)
    @settings(max_examples=300)
    def test_command_count(self, units: list[str]) -> None:
        blocks = classify("\n".join(units))
        commands = [b for b in blocks if isinstance(b, CommandBlock)]
        assert len(commands) == sum(1 for u in units if u in COMMAND_UNITS)

    @given(SCRIPTS)
    @settings(max_examples=300)
    def test_code_lines_preserved(self, units: list[str]) -> None:
        blocks = classify("\n".join(units))
        snippet_lines = Counter(
            line.text
            for block in blocks
            if isinstance(block, SnippetBlock)
            for line in block.lines
            if not line.is_blank
        )
        assert snippet_lines == Counter(u for u in units if u in CODE_UNITS)

    @given(SCRIPTS)
    @settings(max_examples=300)
    def test_block_order_follows_units(self, units: list[str]) -> None:
        """Comments and commands appear in the same order as their units."""
        blocks = classify("\n".join(units))
        kinds = [
            "comment" if isinstance(b, CommentBlock) else "command"
            for b in blocks
            if not isinstance(b, SnippetBlock)
        ]
        expected = [
            "comment" if u in DOC_UNITS else "command"
            for u in units
            if u in DOC_UNITS or u in COMMAND_UNITS
        ]
        assert kinds == expected

    @given(SCRIPTS)
    @settings(max_examples=200)
    def test_snippets_trimmed_and_non_empty(self, units: list[str]) -> None:
        for block in classify("\n".join(units)):
            if isinstance(block, SnippetBlock):
                assert block.lines
                assert not block.lines[0].is_blank
                assert not block.lines[-1].is_blank

    @given(SCRIPTS)
    @settings(max_examples=200)
    def test_comment_text_has_no_delimiters(self, units: list[str]) -> None:
        for block in classify("\n".join(units)):
            if isinstance(block, CommentBlock):
                assert "(**" not in block.text
                assert not block.text.rstrip().endswith("*)")

    @given(SCRIPTS)
    @settings(max_examples=300)
    def test_each_doc_unit_is_one_full_comment(self, units: list[str]) -> None:
        """Nested (* ... *) comments never end the documentation early."""
        blocks = classify("\n".join(units))
        texts = [b.text for b in blocks if isinstance(b, CommentBlock)]
        assert texts == [DOC_TEXTS[u] for u in units if u in DOC_TEXTS]
