"""Lexical layer: token model and lexer."""

from mermaid_syntax.syntax.lexer import Lexer, scan_all
from mermaid_syntax.syntax.tokens import Token, TokenKind

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "scan_all",
]
