"""
Error types raised by the DSL compiler.

Every error is fatal to the compilation unit that raised it: the lexer and
parser stop at the first problem and no partial AST or output is produced.
"""

from typing import Optional


class DslError(Exception):
    """Base class for all compilation errors."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f'{self.message} at line {self.line}'
        return f'{self.message} at line {self.line}, column {self.column}'


class LexError(DslError):
    """Raised when the lexer meets a character it cannot tokenize."""
    pass


class ParseError(DslError):
    """Raised when the parser meets an unexpected token or a malformed construct."""

    def __init__(
        self,
        message: str,
        token_type: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.token_type = token_type
        super().__init__(message, line, column)


class MismatchedTagError(ParseError):
    """Raised when a closing tag does not match the element it closes."""

    def __init__(self, expected: str, actual: str, line: Optional[int] = None, column: Optional[int] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Mismatched closing tag: expected {expected} but got {actual}',
            token_type='IDENTIFIER',
            line=line,
            column=column,
        )
