"""Base parser protocol and the shared token cursor.

Every grammar lexes the whole input up front and walks the resulting token
list with a single integer cursor. Backtracking is a matter of saving and
restoring that integer; tokens are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from mermaid_syntax.errors import ParseError, ParseFailure
from mermaid_syntax.ir.class_diagram import MermaidClassDiagram
from mermaid_syntax.ir.flowchart import MermaidFlowchart
from mermaid_syntax.syntax.lexer import scan_all
from mermaid_syntax.syntax.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

DiagramT = TypeVar("DiagramT", MermaidFlowchart, MermaidClassDiagram)


class Parser(Protocol):
    """Protocol that all diagram parsers must implement."""

    def parse(self, src: str) -> MermaidFlowchart | MermaidClassDiagram:
        """Parse source text into a diagram model. Never raises on bad input."""
        ...


class TokenParser(Generic[DiagramT]):
    """Recursive-descent helper over a materialized token list.

    Subclasses provide ``new_diagram``, ``parse_document`` and the set of
    keywords that start a statement (``sync_keywords``), which bounds
    error recovery.
    """

    diagram_name = "diagram"
    sync_keywords: frozenset[TokenKind] = frozenset()

    def __init__(self) -> None:
        self.tokens: list[Token] = [Token(TokenKind.EOF, "", 1, 1)]
        self.current = 0
        self.diagram: DiagramT = self.new_diagram()

    def new_diagram(self) -> DiagramT:
        raise NotImplementedError

    def parse_document(self) -> None:
        raise NotImplementedError

    def parse(self, src: str) -> DiagramT:
        """Lex and parse ``src``. Failures are recorded in ``diagram.errors``."""
        self.diagram = self.new_diagram()
        self.current = 0
        try:
            self.tokens = scan_all(src)
            self.parse_document()
        except (ParseFailure, RecursionError) as exc:
            logger.warning("Failed to parse %s: %s", self.diagram_name, exc)
            self.diagram.errors.append(ParseError(f"Failed to parse {self.diagram_name}: {exc}", 1, 1))
        return self.diagram

    # ── Cursor primitives ─────────────────────────────────────────────────────

    def peek(self) -> Token:
        return self.tokens[self.current]

    def peek_next(self) -> Token:
        return self.tokens[min(self.current + 1, len(self.tokens) - 1)]

    def previous(self) -> Token | None:
        if self.current == 0:
            return None
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def check_any(self, kinds: frozenset[TokenKind]) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind in kinds

    def advance(self) -> Token:
        """Consume and return the current token. EOF is never consumed."""
        token = self.peek()
        if not self.is_at_end():
            self.current += 1
        return token

    def match(self, kind: TokenKind) -> bool:
        if self.check(kind):
            self.advance()
            return True
        return False

    def expect(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(message)

    def error(self, message: str) -> ParseFailure:
        return ParseFailure(message, self.peek())

    def mark(self) -> int:
        return self.current

    def rewind(self, mark: int) -> None:
        self.current = mark

    def at_line_end(self) -> bool:
        return self.is_at_end() or self.peek().kind is TokenKind.NEWLINE

    def skip_newlines(self) -> None:
        while self.match(TokenKind.NEWLINE) or self.match(TokenKind.COMMENT):
            pass

    def skip_to_line_end(self) -> list[Token]:
        """Consume the rest of the current line, returning the skipped tokens."""
        skipped: list[Token] = []
        while not self.at_line_end():
            skipped.append(self.advance())
        return skipped

    # ── Error recovery ────────────────────────────────────────────────────────

    def synchronize(self) -> None:
        """Discard tokens until a statement boundary.

        Stops once the token just consumed is a NEWLINE or the upcoming token
        is a statement keyword. Takes at most one step per remaining token.
        """
        while not self.is_at_end():
            prev = self.previous()
            if prev is not None and prev.kind is TokenKind.NEWLINE:
                return
            if self.peek().kind in self.sync_keywords:
                return
            self.advance()

    def record(self, error: ParseError) -> None:
        self.diagram.errors.append(error)

    def guarded(self, statement: Callable[[], None]) -> None:
        """Run one statement; on ParseFailure record it and resynchronize."""
        try:
            statement()
        except ParseFailure as failure:
            error = failure.to_error()
            self.record(error)
            logger.debug("Recovering from %s parse error at %s", self.diagram_name, error)
            self.synchronize()

    def parse_block(self, statement: Callable[[], None], stop: TokenKind | None = None) -> None:
        """Parse guarded statements until EOF or the ``stop`` token."""
        self.skip_newlines()
        while not self.is_at_end() and not (stop is not None and self.check(stop)):
            start = self.current
            self.guarded(statement)
            self.skip_newlines()
            if self.current == start:
                self.advance()


def join_source(tokens: list[Token]) -> str:
    """Rejoin tokens from one line, with a single space wherever the source had whitespace."""
    parts: list[str] = []
    end_column: int | None = None
    for token in tokens:
        if token.kind is TokenKind.COMMENT:
            continue
        text = f'"{token.lexeme}"' if token.kind is TokenKind.STRING else token.lexeme
        if end_column is not None and token.column > end_column:
            parts.append(" ")
        parts.append(text)
        end_column = token.column + len(text)
    return "".join(parts)
