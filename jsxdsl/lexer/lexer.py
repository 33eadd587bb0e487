"""
Lexer implementation for DSL source text.

The Lexer tokenizes a component definition into a flat stream of tokens
that can be consumed by the parser. Newlines are kept as tokens because
declarations are newline-terminated.
"""

from typing import List

from ..errors import LexError
from .tokens import Token, TokenType, TWO_CHAR_OPS, SINGLE_CHAR_OPS


def parse_number(text: str) -> float:
    """Parse a run of digits and dots the way JavaScript's parseFloat does.

    Only the first decimal point counts; anything from a second dot on is
    ignored (``'1.2.3'`` parses as ``1.2``).
    """
    whole, _, rest = text.partition('.')
    fraction = rest.split('.')[0]
    if fraction:
        return float(f'{whole}.{fraction}')
    return float(whole)


def format_number(value: float) -> str:
    """Render a number the way JavaScript's String() does for ordinary values."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


class Lexer:
    """
    Lexer for DSL source text.

    Converts source text into a list of tokens for parsing.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def read_string(self) -> str:
        """Read a string literal and return its contents without the quotes.

        A backslash is dropped and the character after it is taken literally.
        """
        start_line = self.line
        start_col = self.column
        quote = self.advance()
        result = ''
        while self.peek() and self.peek() != quote:
            if self.peek() == '\\':
                self.advance()
                if not self.peek():
                    break
            result += self.advance()
        if self.peek() != quote:
            raise LexError('Unterminated string literal', start_line, start_col)
        self.advance()
        return result

    def read_number(self) -> float:
        """Read a numeric literal made of digits and decimal points."""
        result = ''
        while self.peek() and self.peek() in '0123456789.':
            result += self.advance()
        return parse_number(result)

    def read_identifier(self) -> str:
        """Read an identifier."""
        result = ''
        while self.peek() and (self.peek().isascii() and (self.peek().isalnum() or self.peek() == '_')):
            result += self.advance()
        return result

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.

        Raises:
            LexError: on a character that starts no token.
        """
        while self.pos < len(self.source):
            ch = self.peek()

            if ch in ' \t\r':
                self.advance()
                continue

            start_line = self.line
            start_col = self.column

            if ch == '\n':
                self.advance()
                self.tokens.append(Token(TokenType.NEWLINE, None, start_line, start_col))
                continue

            # String literals
            if ch in '"\'':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, start_line, start_col))
                continue

            # Numbers
            if ch in '0123456789':
                number = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, number, start_line, start_col))
                continue

            # Identifiers
            if ch.isascii() and (ch.isalpha() or ch == '_'):
                value = self.read_identifier()
                self.tokens.append(Token(TokenType.IDENTIFIER, value, start_line, start_col))
                continue

            # Two-character operators and sigils
            two_char = ch + self.peek(1)
            if two_char in TWO_CHAR_OPS:
                self.advance()
                self.advance()
                self.tokens.append(Token(TWO_CHAR_OPS[two_char], None, start_line, start_col))
                continue

            # Single-character sigils, operators and punctuation
            if ch in SINGLE_CHAR_OPS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_OPS[ch], None, start_line, start_col))
                continue

            raise LexError(f'Unexpected character: {ch}', start_line, start_col)

        self.tokens.append(Token(TokenType.EOF, None, self.line, self.column))
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize ``source`` with a fresh Lexer."""
    return Lexer(source).tokenize()
