"""Diagnostic model shared by all diagram parsers."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_syntax.syntax.tokens import Token


@dataclass(frozen=True)
class ParseError:
    """A recorded parse diagnostic. Created during parsing, never mutated."""

    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"


class ParseFailure(Exception):
    """Raised inside a parser when a structural expectation fails.

    Caught at statement boundaries and turned into a ParseError located at
    the token that was current when it was raised.
    """

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(message)
        self.message = message
        self.token = token

    def to_error(self) -> ParseError:
        return ParseError(self.message, self.token.line, self.token.column)
