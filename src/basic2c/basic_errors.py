"""
Structured errors raised by the basic2c pipeline.

Every phase fails on the first violation by raising a `TranslationError`
subclass; nothing in the library terminates the process. The driver decides
how to report the error and which exit status to use.

Classes:
    TranslationError: Base class, a `SyntaxError` carrying kind, token and position.
    LexicalError: An input character matched no token rule.
    BasicSyntaxError: The parser found a token it could not accept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from basic2c.basic_lexer import Token


class TranslationError(SyntaxError):
    """Base error for every failure the translator reports.

    Attributes:
        kind (str): "lexical" or "syntax".
        message (str): Human-readable description.
        token (Any): The offending token (or character, for lexical errors).
        line (int): 1-based source line, 0 when unknown.
        col (int): 1-based source column, 0 when unknown.
    """

    kind = "error"

    def __init__(self, message: str, token: Any = None, line: int = 0, col: int = 0):
        super().__init__(message)
        self.message = message
        self.token = token
        self.line = line
        self.col = col

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "token": repr(self.token) if self.token is not None else None,
            "line": self.line,
            "col": self.col,
        }


class LexicalError(TranslationError):
    """Raised when a character matches none of the lexer's rules."""

    kind = "lexical"

    def __init__(self, char: str, line: int = 0, col: int = 0):
        super().__init__(f"Unrecognized character: {char!r}", char, line, col)
        self.char = char


class BasicSyntaxError(TranslationError):
    """Raised when the parser meets a token it cannot accept.

    Attributes:
        expected (tuple[str, ...]): Token types that would have been accepted,
            empty when the parser had no single expectation.
    """

    kind = "syntax"

    def __init__(
        self,
        message: str,
        token: Token | None = None,
        expected: tuple[str, ...] = (),
    ):
        line = token.line if token is not None else 0
        col = token.col if token is not None else 0
        super().__init__(message, token, line, col)
        self.expected = expected

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["expected"] = list(self.expected)
        return payload


__all__ = ["BasicSyntaxError", "LexicalError", "TranslationError"]
