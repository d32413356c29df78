"""Lexer operating modes and constants.

This module defines the finite state machine modes for the script lexer
and the character sets it scans with.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The mode carries over from one line to the next:
    - CODE: Ordinary code, scanning for comments and strings
    - COMMENT: Inside a (possibly nested) block comment

    """

    CODE = auto()
    COMMENT = auto()


# Characters that form WHITESPACE tokens ("\r" keeps CRLF input lossless)
WHITESPACE_CHARS = frozenset(" \t\r\f")

# Two-character sequences that end a DEFAULT run
COMMENT_OPEN = "(*"
COMMENT_CLOSE = "*)"
LINE_COMMENT = "//"

# (*) is the multiplication operator, not a comment opener
MULTIPLY_OPERATOR = "(*)"

# Conditional compilation keywords (checked on the stripped line)
PP_IF = "#if"
PP_ELSE = "#else"
PP_ENDIF = "#endif"
