"""Class diagram parser: recursive descent over the shared token stream.

Parses Mermaid classDiagram DSL into a MermaidClassDiagram model: classes
with their members, and typed relations between classes.
"""

from __future__ import annotations

import logging

from mermaid_syntax.ir.class_diagram import MermaidClass, MermaidClassDiagram, MermaidClassMember, MermaidRelation
from mermaid_syntax.parsers.base import TokenParser
from mermaid_syntax.syntax.tokens import Token, TokenKind
from mermaid_syntax.types import RelationType, Visibility

logger = logging.getLogger(__name__)

# Every link glyph the lexer produces, keyed by token kind
_RELATIONS: dict[TokenKind, RelationType] = {
    TokenKind.INHERITANCE: RelationType.Inheritance,
    TokenKind.COMPOSITION: RelationType.Composition,
    TokenKind.AGGREGATION: RelationType.Aggregation,
    TokenKind.ARROW_CIRCLE_SOLID: RelationType.Aggregation,  # --o
    TokenKind.REALIZATION: RelationType.Realization,
    TokenKind.DEPENDENCY: RelationType.Dependency,
    TokenKind.ARROW_DOTTED: RelationType.Dependency,
    TokenKind.LINE_DOTTED: RelationType.Dependency,
    TokenKind.ARROW_OPEN_DOTTED: RelationType.Dependency,
    TokenKind.ARROW_CROSS_DOTTED: RelationType.Dependency,
    TokenKind.ARROW_SOLID: RelationType.Association,
    TokenKind.LINE_SOLID: RelationType.Association,
    TokenKind.LINK_SOLID: RelationType.Association,
    TokenKind.LINK_DASHED: RelationType.Association,
    TokenKind.ARROW_OPEN_SOLID: RelationType.Association,
    TokenKind.ARROW_CROSS_SOLID: RelationType.Association,
    TokenKind.ARROW_THICK: RelationType.Association,
    TokenKind.LINE_THICK: RelationType.Association,
    TokenKind.ARROW_INVISIBLE: RelationType.Association,
}
_RELATION_KINDS = frozenset(_RELATIONS)

# Leftover pieces of two-headed glyphs such as <|--|>
_GLYPH_FRAGMENTS = frozenset({TokenKind.PIPE, TokenKind.ASYMMETRIC_START, TokenKind.LT, TokenKind.ASTERISK})

_VISIBILITY: dict[TokenKind, Visibility] = {
    TokenKind.PLUS: Visibility.Public,
    TokenKind.MINUS: Visibility.Private,
    TokenKind.HASH: Visibility.Protected,
    TokenKind.TILDE: Visibility.Package,
}
_MARKERS = frozenset({TokenKind.PLUS, TokenKind.HASH, TokenKind.TILDE})

_PAREN_DEPTH: dict[TokenKind, int] = {
    TokenKind.LPAREN: 1,
    TokenKind.DOUBLE_LPAREN: 2,
    TokenKind.TRIPLE_LPAREN: 3,
    TokenKind.LPAREN_LBRACKET: 1,
    TokenKind.LBRACKET_LPAREN: 1,
    TokenKind.RPAREN: -1,
    TokenKind.DOUBLE_RPAREN: -2,
    TokenKind.TRIPLE_RPAREN: -3,
    TokenKind.RBRACKET_RPAREN: -1,
    TokenKind.RPAREN_RBRACKET: -1,
}


class ClassDiagramParser(TokenParser[MermaidClassDiagram]):
    """classDiagram parser."""

    diagram_name = "class diagram"
    sync_keywords = frozenset({TokenKind.CLASS_KW, TokenKind.TITLE})

    def new_diagram(self) -> MermaidClassDiagram:
        return MermaidClassDiagram()

    # ── Document ──────────────────────────────────────────────────────────────

    def parse_document(self) -> None:
        self.skip_newlines()
        if not self.match(TokenKind.CLASS_DIAGRAM):
            self.record(self.error("Expected 'classDiagram'").to_error())
        self.parse_block(self.parse_statement)
        logger.debug(
            "Parsed class diagram: %d classes, %d relations, %d errors",
            len(self.diagram.classes),
            len(self.diagram.relations),
            len(self.diagram.errors),
        )

    def parse_statement(self) -> None:
        self.skip_newlines()
        if self.is_at_end():
            return
        if self.match(TokenKind.COMMENT):
            return
        if self.check(TokenKind.TITLE):
            self.parse_title()
            return
        if self.check(TokenKind.CLASS_KW):
            self.parse_class()
            return
        if self.check(TokenKind.ANNOTATION_START):
            self.parse_annotation_statement()
            return
        if self.check(TokenKind.IDENTIFIER):
            self.parse_relationship_or_reference()
            return
        # Unknown - skip token
        self.advance()

    def parse_title(self) -> None:
        self.advance()  # 'title'
        words = [t.lexeme for t in self.skip_to_line_end() if t.kind is not TokenKind.COMMENT]
        self.diagram.title = " ".join(words).strip()

    # ── Classes and members ───────────────────────────────────────────────────

    def parse_class(self) -> None:
        self.advance()  # 'class'
        name_token = self.expect(TokenKind.IDENTIFIER, "Expected class name")
        mclass = self.diagram.get_or_create_class(name_token.lexeme, name_token.line)
        mclass.source_line = name_token.line

        self.skip_newlines()
        if self.match(TokenKind.LBRACE):
            self.parse_class_body(mclass)
            self.expect(TokenKind.RBRACE, "Expected '}'")

    def parse_class_body(self, mclass: MermaidClass) -> None:
        self.skip_newlines()
        while not self.check(TokenKind.RBRACE) and not self.check(TokenKind.CLASS_KW) and not self.is_at_end():
            start = self.mark()
            self.parse_class_member(mclass)
            if self.current == start:
                self.advance()  # not a member
            self.skip_newlines()

    def parse_class_member(self, mclass: MermaidClass) -> None:
        """Parse one member line, or as much of it as forms a member.

        Returns without consuming anything when the tokens do not start a
        member (a ``-`` that is not followed by a name).
        """
        if self.match(TokenKind.ANNOTATION_START):
            mclass.annotation = self.parse_annotation_text()
            return

        visibility = Visibility.Public
        if self.check(TokenKind.MINUS):
            # '-' is private only when a name follows; otherwise it is part of a link
            saved = self.mark()
            self.advance()
            if not self.peek().is_word():
                self.rewind(saved)
                return
            visibility = Visibility.Private
        elif self.check_any(_MARKERS):
            visibility = _VISIBILITY[self.advance().kind]

        # Type name | name; array types carry a '[]' suffix
        type_name: str | None = None
        if self.peek().is_word():
            saved = self.mark()
            word = self.advance().lexeme
            if self.check(TokenKind.LBRACKET) and self.peek_next().kind is TokenKind.RBRACKET:
                self.advance()
                self.advance()
                word += "[]"
            if self.peek().is_word():
                type_name = word
            else:
                self.rewind(saved)

        if not self.peek().is_word():
            return
        name = self.advance().lexeme

        is_method = False
        if self.match(TokenKind.LPAREN):
            is_method = True
            self.skip_parameters()
            if self.peek().is_word():
                type_name = " ".join(t.lexeme for t in self.take_member_rest())

        if self.match(TokenKind.COLON):
            parts: list[str] = []
            while not self.at_member_end():
                if self.check(TokenKind.LPAREN):
                    is_method = True
                    break
                parts.append(self.advance().lexeme)
            if parts:
                type_name = " ".join(parts).strip()

        mclass.add_member(MermaidClassMember(name=name, is_method=is_method, visibility=visibility, type_name=type_name))

        # Trailing classifiers ($, *) and anything else up to the member end
        self.take_member_rest()

    def skip_parameters(self) -> None:
        """Skip method parameters up to the matching ')'."""
        depth = 1
        while not self.at_line_end() and not self.check(TokenKind.RBRACE):
            depth += _PAREN_DEPTH.get(self.advance().kind, 0)
            if depth <= 0:
                return

    def at_member_end(self) -> bool:
        """True at end of line, '}' or the visibility marker of a following member."""
        if self.at_line_end() or self.check(TokenKind.RBRACE):
            return True
        if self.check_any(_MARKERS):
            return True
        return self.check(TokenKind.MINUS) and self.peek_next().is_word()

    def take_member_rest(self) -> list[Token]:
        taken: list[Token] = []
        while not self.at_member_end():
            taken.append(self.advance())
        return taken

    def parse_annotation_text(self) -> str:
        """Read the text of <<annotation>> after the opening '<<'."""
        parts: list[str] = []
        while not self.check(TokenKind.ANNOTATION_END) and not self.at_line_end():
            parts.append(self.advance().lexeme)
        self.match(TokenKind.ANNOTATION_END)
        return " ".join(parts)

    def parse_annotation_statement(self) -> None:
        """<<interface>> ClassName"""
        self.advance()  # '<<'
        annotation = self.parse_annotation_text()
        name_token = self.expect(TokenKind.IDENTIFIER, "Expected class name after annotation")
        self.diagram.get_or_create_class(name_token.lexeme, name_token.line).annotation = annotation

    # ── Relations ─────────────────────────────────────────────────────────────

    def parse_relationship_or_reference(self) -> None:
        from_token = self.advance()

        from_cardinality: str | None = None
        if self.check(TokenKind.STRING) and self.peek_next().kind in _RELATION_KINDS:
            from_cardinality = self.advance().lexeme

        if self.check_any(_GLYPH_FRAGMENTS) and self.peek_next().kind in _RELATION_KINDS:
            self.advance()

        if self.check_any(_RELATION_KINDS):
            self.parse_relationship(from_token, from_cardinality)
        elif self.match(TokenKind.COLON):
            # ClassName : +member
            mclass = self.diagram.get_or_create_class(from_token.lexeme, from_token.line)
            self.parse_class_member(mclass)
        else:
            self.diagram.get_or_create_class(from_token.lexeme, from_token.line)

    def parse_relationship(self, from_token: Token, from_cardinality: str | None) -> None:
        self.diagram.get_or_create_class(from_token.lexeme, from_token.line)

        arrow = self.advance()
        relation_type = _RELATIONS[arrow.kind]
        while self.check_any(_GLYPH_FRAGMENTS):
            self.advance()

        to_cardinality: str | None = None
        if self.check(TokenKind.STRING):
            to_cardinality = self.advance().lexeme

        to_token = self.expect(TokenKind.IDENTIFIER, "Expected target class name")
        self.diagram.get_or_create_class(to_token.lexeme, to_token.line)

        label: str | None = None
        if self.match(TokenKind.COLON):
            words = [t.lexeme for t in self.skip_to_line_end() if t.kind is not TokenKind.COMMENT]
            label = " ".join(words).strip()

        self.diagram.add_relation(
            MermaidRelation(
                from_name=from_token.lexeme,
                to_name=to_token.lexeme,
                relation_type=relation_type,
                label=label,
                from_cardinality=from_cardinality,
                to_cardinality=to_cardinality,
            )
        )
