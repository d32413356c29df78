"""Script lexer for litscript.

Turns ML-style script text into lines of typed tokens. This is the
default tokenizer; anything implementing the Tokenizer protocol can
replace it.

Architecture:
lexer/
├── __init__.py          # Re-exports ScriptLexer, ScriptTokenizer, LexerMode
├── core.py              # ScriptLexer, ScriptTokenizer, scan_block_comment
└── modes.py             # LexerMode enum, scanning constants

Usage:
    >>> from litscript.lexer import ScriptLexer
    >>> lines = list(ScriptLexer("(** Doc *)\\nlet x = 1").tokenize())
    >>> lines[0].tokens
    (Token(COMMENT, '(** Doc *)', 1:1),)

"""

from litscript.lexer.core import ScriptLexer, ScriptTokenizer, scan_block_comment
from litscript.lexer.modes import LexerMode

__all__ = ["LexerMode", "ScriptLexer", "ScriptTokenizer", "scan_block_comment"]
