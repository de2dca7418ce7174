"""
Lexical analyzer for the basic2c BASIC dialect.

This module converts raw BASIC source into a flat token list:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips spaces, tabs and carriage returns; newlines are NEWLINE tokens
    - Discards the text of `REM` comments up to the end of the line
    - Recognizes:
        * Keywords (case-insensitive) and case-preserving identifiers
        * Numbers (integer and float, `.5` reads as `0.5`)
        * Strings (double quoted, no escape sequences)
        * Arithmetic, comparison and punctuation symbols

Leniency:
    Malformed floats such as `1.2.3` become `0.0`, and an unterminated string
    runs to the end of the input. Neither raises.

Raises:
    LexicalError: If a character matches none of the rules above.

Example:
    >>> tokenize("10 PRINT X")
    [Token(NUMBER, 10), Token(PRINT, PRINT), Token(IDENT, X), Token(EOF, EOF)]

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import logging
from dataclasses import dataclass

from basic2c.basic_constants import keyword_hashmap, symbol_hashmap
from basic2c.basic_errors import LexicalError

logger = logging.getLogger(__name__)

TokenValue = str | int | float


def _is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


class CharacterStream:
    """
    Reads a source string one character at a time, tracking 1-based line and
    column numbers for token locations and error messages.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If the stream is already exhausted.
        """
        char = self.peek()
        if not char:
            raise EOFError(
                f"CharacterStreamError: read past end of source at line {self.line}, "
                f"column {self.column}"
            )
        self.position += 1
        if char == "\n":
            self.line, self.column = self.line + 1, 1
        else:
            self.column += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        return self.source[index] if 0 <= index < len(self.source) else ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token.

    `value` holds an `int` for NUMBER, a `float` for FLOAT, the text for
    IDENT and STRING, and the canonical spelling for keywords and symbols.
    `line` and `col` locate the first character of the token.
    """

    type: str
    value: TokenValue
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"


class Lexer:
    """Lexical analyzer for BASIC source.

    A Lexer is single-use: once it has produced EOF it keeps returning EOF.
    Re-lex a source by creating a new Lexer over a new CharacterStream.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips spaces, tabs and carriage returns, but never newlines."""
        while not self.stream.end_of_file() and self.peek() in " \t\r":
            self.advance()

    def skip_comment(self) -> None:
        """Advances up to, but not including, the next newline."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def read_number(self, line: int, col: int) -> Token:
        """Reads a run of digits and dots as a NUMBER or FLOAT token."""
        num = ""
        while not self.stream.end_of_file() and (
            _is_digit(self.peek()) or self.peek() == "."
        ):
            num += self.advance()

        if "." not in num:
            try:
                return Token("NUMBER", int(num), line, col)
            except ValueError:
                # Longer than the interpreter's int string conversion limit
                logger.debug("Oversized integer at line %d, col %d read as 0", line, col)
                return Token("NUMBER", 0, line, col)

        if num.startswith("."):
            num = "0" + num
        try:
            value = float(num)
        except ValueError:
            logger.debug("Malformed float %r at line %d, col %d read as 0.0", num, line, col)
            value = 0.0
        return Token("FLOAT", value, line, col)

    def read_string(self, line: int, col: int) -> Token:
        """Reads a double-quoted string; an unterminated string runs to EOF."""
        self.advance()  # opening quote
        val = ""
        while not self.stream.end_of_file() and self.peek() != '"':
            val += self.advance()
        if not self.stream.end_of_file():
            self.advance()  # closing quote
        return Token("STRING", val, line, col)

    def read_word(self, line: int, col: int) -> Token:
        """Reads an identifier and resolves it against the keyword table."""
        ident = ""
        while not self.stream.end_of_file() and (
            self.peek().isalnum() or self.peek() == "_"
        ):
            ident += self.advance()

        keyword = keyword_hashmap.get(ident.upper())
        if keyword is None:
            return Token("IDENT", ident, line, col)
        if keyword == "REM":
            self.skip_comment()
        return Token(keyword, keyword, line, col)

    def match_operator(self) -> Token | None:
        """Matches a two-character comparison first, then a single-character symbol."""
        line, col = self.stream.line, self.stream.column
        for length in (2, 1):
            candidate = "".join(self.peek(i) for i in range(length))
            if len(candidate) == length and candidate in symbol_hashmap:
                for _ in range(length):
                    self.advance()
                return Token(symbol_hashmap[candidate], candidate, line, col)
        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexicalError: If the next character starts no known token.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.peek()

        # 1. Statement separator
        if ch == "\n":
            self.advance()
            return Token("NEWLINE", "\n", line, col)

        # 2. Number or float
        if _is_digit(ch) or ch == ".":
            return self.read_number(line, col)

        # 3. String
        if ch == '"':
            return self.read_string(line, col)

        # 4. Identifier or keyword
        if ch.isalpha():
            return self.read_word(line, col)

        # 5. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        raise LexicalError(ch, line, col)

    def tokenize(self) -> list[Token]:
        """Lexes the remaining input into a list ending with exactly one EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == "EOF":
                break
        logger.debug("Lexed %d tokens", len(tokens))
        return tokens


def tokenize(source: str) -> list[Token]:
    """Lexes a whole source string."""
    return Lexer(CharacterStream(source)).tokenize()


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
