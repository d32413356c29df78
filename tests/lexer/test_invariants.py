"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from litscript.lexer import ScriptLexer
from litscript.tokens import TokenKind

ML_TEXT = st.text(alphabet="(*)/\"'\\# \t\nabc=!&|", max_size=300)


class TestLosslessTokenization:
    """Tokens always cover the source exactly."""

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_lines_reproduce_source(self, source: str) -> None:
        """Joining token texts per line and lines with newlines gives the source back."""
        lines = list(ScriptLexer(source).tokenize())
        assert "\n".join(line.text for line in lines) == source

    @given(ML_TEXT)
    @settings(max_examples=300)
    def test_lines_reproduce_ml_heavy_source(self, source: str) -> None:
        """Same, with inputs dense in comment, string and preprocessor syntax."""
        lines = list(ScriptLexer(source).tokenize())
        assert "\n".join(line.text for line in lines) == source

    @given(ML_TEXT)
    @settings(max_examples=200)
    def test_line_count_matches(self, source: str) -> None:
        lines = list(ScriptLexer(source).tokenize())
        assert len(lines) == source.count("\n") + 1

    @given(ML_TEXT)
    @settings(max_examples=200)
    def test_no_empty_tokens(self, source: str) -> None:
        for line in ScriptLexer(source).tokenize():
            for token in line.tokens:
                assert token.text, f"Empty token {token!r}"


class TestLocations:
    """Token positions are consistent with token text."""

    @given(ML_TEXT)
    @settings(max_examples=200)
    def test_columns_are_contiguous(self, source: str) -> None:
        for lineno, line in enumerate(ScriptLexer(source).tokenize(), start=1):
            col = 1
            for token in line.tokens:
                assert token.location.lineno == lineno
                assert token.location.col_offset == col
                col += len(token.text)
                assert token.location.end_col_offset == col


class TestDeterminism:
    """Tokenization is a pure function of its input."""

    @given(ML_TEXT)
    @settings(max_examples=50)
    def test_repeated_tokenization_identical(self, source: str) -> None:
        first = [line.tokens for line in ScriptLexer(source).tokenize()]
        second = [line.tokens for line in ScriptLexer(source).tokenize()]
        assert first == second


class TestPreprocessorInvariants:
    """Inactive code never produces comment tokens."""

    @given(st.text(alphabet="(*) ab\n", max_size=100))
    @settings(max_examples=100)
    def test_inactive_branch_has_no_comments(self, body: str) -> None:
        source = f"#if NEVER_DEFINED\n{body.replace('#', '')}\n#endif"
        lines = list(ScriptLexer(source).tokenize())
        for line in lines[1:-1]:
            assert all(token.kind == TokenKind.INACTIVE for token in line.tokens)
