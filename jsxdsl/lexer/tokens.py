"""
Token definitions for the DSL lexer.

This module contains the TokenType enum, the Token dataclass, and the
constant tables the lexer uses to recognize sigils and operators.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Optional, Union


class TokenType(Enum):
    """Enumeration of all token types recognized by the DSL lexer."""

    # Declaration sigils
    STATE = auto()          # @
    PROP = auto()           # :
    EFFECT = auto()         # $
    LAYOUT_EFFECT = auto()  # $$
    MEMO = auto()           # %
    EVENT = auto()          # !
    ACTION_STATE = auto()   # !!
    CALLBACK = auto()       # ^
    HANDLE = auto()         # ~
    REF = auto()            # #
    CONTEXT = auto()        # &
    SYNC = auto()           # &&
    ID = auto()             # ?

    # Type annotations
    COLON_TYPE = auto()     # ::
    PIPE = auto()           # |

    # Operators
    ASSIGN = auto()
    ARROW = auto()
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    SLASH = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    PLUS_ASSIGN = auto()

    # Punctuation
    DOT = auto()
    COMMA = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LT = auto()
    GT = auto()

    # Literals
    STRING = auto()
    NUMBER = auto()
    IDENTIFIER = auto()

    # Structural
    NEWLINE = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """Represents a single token from the lexer."""
    type: TokenType
    value: Optional[Union[str, float]]
    line: int
    column: int


# Two-character operators and sigils, matched before their one-character prefixes
TWO_CHAR_OPS = MappingProxyType({
    '::': TokenType.COLON_TYPE,
    '$$': TokenType.LAYOUT_EFFECT,
    '!!': TokenType.ACTION_STATE,
    '&&': TokenType.SYNC,
    '++': TokenType.INCREMENT,
    '+=': TokenType.PLUS_ASSIGN,
    '--': TokenType.DECREMENT,
    '=>': TokenType.ARROW,
})

# Single-character sigils, operators and punctuation
SINGLE_CHAR_OPS = MappingProxyType({
    '@': TokenType.STATE,
    ':': TokenType.PROP,
    '$': TokenType.EFFECT,
    '%': TokenType.MEMO,
    '!': TokenType.EVENT,
    '^': TokenType.CALLBACK,
    '~': TokenType.HANDLE,
    '#': TokenType.REF,
    '&': TokenType.CONTEXT,
    '?': TokenType.ID,
    '|': TokenType.PIPE,
    '=': TokenType.ASSIGN,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.SLASH,
    '.': TokenType.DOT,
    ',': TokenType.COMMA,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    '<': TokenType.LT,
    '>': TokenType.GT,
})
