"""
Lexer module for the DSL compiler.

This module provides tokenization of DSL source text.
"""

from .tokens import TokenType, Token, TWO_CHAR_OPS, SINGLE_CHAR_OPS
from .lexer import Lexer, tokenize, parse_number, format_number

__all__ = [
    'TokenType',
    'Token',
    'TWO_CHAR_OPS',
    'SINGLE_CHAR_OPS',
    'Lexer',
    'tokenize',
    'parse_number',
    'format_number',
]
