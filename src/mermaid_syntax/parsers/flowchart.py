"""Flowchart parser: recursive descent over the shared token stream.

Parses Mermaid flowchart/graph DSL into a MermaidFlowchart model. A failing
statement is recorded in ``errors`` and parsing resumes at the next
statement boundary.
"""

from __future__ import annotations

import logging

from mermaid_syntax.ir.flowchart import (
    FlowchartEdge,
    FlowchartNode,
    FlowchartStyle,
    FlowchartSubgraph,
    MermaidFlowchart,
)
from mermaid_syntax.parsers.base import TokenParser, join_source
from mermaid_syntax.syntax.tokens import SHAPE_CLOSERS, Token, TokenKind
from mermaid_syntax.types import ArrowHead, Direction, EdgeStyle, NodeShape

logger = logging.getLogger(__name__)

_DIRECTIONS: dict[TokenKind, Direction] = {
    TokenKind.TD: Direction.TD,
    TokenKind.TB: Direction.TD,
    TokenKind.BT: Direction.BT,
    TokenKind.LR: Direction.LR,
    TokenKind.RL: Direction.RL,
}
_DIRECTION_KINDS = frozenset(_DIRECTIONS)

# Opening delimiter -> (shape, closing delimiter, closing lexeme)
_SHAPES: dict[TokenKind, tuple[NodeShape, TokenKind, str]] = {
    TokenKind.LBRACKET: (NodeShape.Rectangle, TokenKind.RBRACKET, "]"),
    TokenKind.LPAREN: (NodeShape.Rounded, TokenKind.RPAREN, ")"),
    TokenKind.LPAREN_LBRACKET: (NodeShape.Stadium, TokenKind.RBRACKET_RPAREN, "])"),
    TokenKind.DOUBLE_LBRACKET: (NodeShape.Subroutine, TokenKind.DOUBLE_RBRACKET, "]]"),
    TokenKind.LBRACKET_LPAREN: (NodeShape.Cylinder, TokenKind.RPAREN_RBRACKET, ")]"),
    TokenKind.LBRACE: (NodeShape.Rhombus, TokenKind.RBRACE, "}"),
    TokenKind.DOUBLE_LBRACE: (NodeShape.Hexagon, TokenKind.DOUBLE_RBRACE, "}}"),
    TokenKind.DOUBLE_LPAREN: (NodeShape.Circle, TokenKind.DOUBLE_RPAREN, "))"),
    TokenKind.TRIPLE_LPAREN: (NodeShape.DoubleCircle, TokenKind.TRIPLE_RPAREN, ")))"),
    TokenKind.ASYMMETRIC_START: (NodeShape.Asymmetric, TokenKind.RBRACKET, "]"),
    TokenKind.LBRACKET_SLASH: (NodeShape.Parallelogram, TokenKind.SLASH_RBRACKET, "/]"),
    TokenKind.LBRACKET_BACKSLASH: (NodeShape.Trapezoid, TokenKind.BACKSLASH_RBRACKET, "\\]"),
}
_SHAPE_OPENERS = frozenset(_SHAPES)

_ARROWS: dict[TokenKind, tuple[EdgeStyle, ArrowHead]] = {
    TokenKind.ARROW_SOLID: (EdgeStyle.Solid, ArrowHead.Normal),
    TokenKind.ARROW_DOTTED: (EdgeStyle.Dotted, ArrowHead.Normal),
    TokenKind.ARROW_THICK: (EdgeStyle.Thick, ArrowHead.Normal),
    TokenKind.ARROW_INVISIBLE: (EdgeStyle.Invisible, ArrowHead.NoHead),
    TokenKind.ARROW_OPEN_SOLID: (EdgeStyle.Solid, ArrowHead.Open),
    TokenKind.ARROW_OPEN_DOTTED: (EdgeStyle.Dotted, ArrowHead.Open),
    TokenKind.ARROW_CROSS_SOLID: (EdgeStyle.Solid, ArrowHead.Cross),
    TokenKind.ARROW_CROSS_DOTTED: (EdgeStyle.Dotted, ArrowHead.Cross),
    TokenKind.ARROW_CIRCLE_SOLID: (EdgeStyle.Solid, ArrowHead.Circle),
    TokenKind.LINE_SOLID: (EdgeStyle.Solid, ArrowHead.NoHead),
    TokenKind.LINE_DOTTED: (EdgeStyle.Dotted, ArrowHead.NoHead),
    TokenKind.LINE_THICK: (EdgeStyle.Thick, ArrowHead.NoHead),
}
_ARROW_KINDS = frozenset(_ARROWS)

# Link character and its count in the shortest form of each link
_LINK_LENGTH: dict[TokenKind, tuple[str, int]] = {
    TokenKind.ARROW_SOLID: ("-", 2),
    TokenKind.ARROW_OPEN_SOLID: ("-", 2),
    TokenKind.ARROW_CROSS_SOLID: ("-", 2),
    TokenKind.ARROW_CIRCLE_SOLID: ("-", 2),
    TokenKind.LINE_SOLID: ("-", 3),
    TokenKind.ARROW_DOTTED: (".", 1),
    TokenKind.ARROW_OPEN_DOTTED: (".", 1),
    TokenKind.ARROW_CROSS_DOTTED: (".", 1),
    TokenKind.LINE_DOTTED: (".", 1),
    TokenKind.ARROW_THICK: ("=", 2),
    TokenKind.LINE_THICK: ("=", 3),
    TokenKind.ARROW_INVISIBLE: ("~", 3),
}

_NO_SPACE_BEFORE = frozenset(
    {
        TokenKind.QUESTION,
        TokenKind.EXCLAMATION,
        TokenKind.COMMA,
        TokenKind.COLON,
        TokenKind.SEMICOLON,
        TokenKind.PERCENT,
    }
) | SHAPE_CLOSERS
_NO_SPACE_AFTER = frozenset({TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE})


def _min_length(arrow: Token) -> int:
    char, shortest = _LINK_LENGTH[arrow.kind]
    return max(1, arrow.lexeme.count(char) - shortest + 1)


def _needs_space(current: TokenKind, previous: TokenKind | None) -> bool:
    if current in _NO_SPACE_BEFORE:
        return False
    return previous not in _NO_SPACE_AFTER


class FlowchartParser(TokenParser[MermaidFlowchart]):
    """Flowchart/graph diagram parser."""

    diagram_name = "flowchart"
    sync_keywords = frozenset({TokenKind.SUBGRAPH, TokenKind.END, TokenKind.STYLE, TokenKind.CLASS_DEF})

    def __init__(self) -> None:
        super().__init__()
        self.open_subgraphs: list[FlowchartSubgraph] = []

    def new_diagram(self) -> MermaidFlowchart:
        return MermaidFlowchart()

    def parse(self, src: str) -> MermaidFlowchart:
        self.open_subgraphs = []
        return super().parse(src)

    # ── Document ──────────────────────────────────────────────────────────────

    def parse_document(self) -> None:
        self.skip_newlines()
        if self.match(TokenKind.FLOWCHART):
            self.skip_newlines()
            if self.check_any(_DIRECTION_KINDS):
                self.diagram.direction = _DIRECTIONS[self.advance().kind]
        else:
            self.record(self.error("Expected 'flowchart'").to_error())
        self.parse_block(self.parse_statement)
        logger.debug(
            "Parsed flowchart: %d nodes, %d edges, %d errors",
            len(self.diagram.nodes),
            len(self.diagram.edges),
            len(self.diagram.errors),
        )

    def parse_statement(self) -> None:
        self.skip_newlines()
        if self.is_at_end():
            return
        if self.match(TokenKind.COMMENT):
            return
        if self.check(TokenKind.SUBGRAPH):
            self.parse_subgraph()
            return
        if self.check(TokenKind.STYLE):
            self.parse_style()
            return
        if self.check(TokenKind.CLASS_DEF):
            self.parse_class_def()
            return
        if self.check(TokenKind.CLASS_KW):
            self.parse_class_assignment()
            return
        if self.check(TokenKind.LINK_STYLE):
            self.advance()
            self.skip_to_line_end()
            return
        if self.check(TokenKind.IDENTIFIER):
            self.parse_node_or_edge()
            return
        # Unknown - skip token
        self.advance()

    # ── Nodes and edges ───────────────────────────────────────────────────────

    def parse_node_or_edge(self) -> None:
        from_node = self.parse_node(self.advance())
        if self.check(TokenKind.LINK_SOLID):
            raise self.error("Expected arrow")
        if self.check_any(_ARROW_KINDS):
            self.parse_edge_chain(from_node)

    def parse_node(self, id_token: Token) -> FlowchartNode:
        """Resolve a node reference, parsing its shape definition if one follows."""
        if self.check_any(_SHAPE_OPENERS):
            node = self.parse_node_definition(id_token)
        else:
            node = self.diagram.get_or_create_node(id_token.lexeme, id_token.line)
        if self.open_subgraphs:
            self.open_subgraphs[-1].add_node(node.id)
        return node

    def parse_node_definition(self, id_token: Token) -> FlowchartNode:
        shape, closer, closer_text = _SHAPES[self.advance().kind]
        text, closed = self.parse_node_text(closer, closer_text)
        if not closed:
            raise self.error(f"Expected '{closer_text}'")
        return self.diagram.define_node(id_token.lexeme, text, shape, id_token.line)

    def parse_node_text(self, closer: TokenKind, closer_text: str) -> tuple[str, bool]:
        """Accumulate text up to ``closer``; returns (text, whether it was closed).

        Pipes are dropped. A longer closing delimiter that ends with
        ``closer_text`` (``)]`` inside ``[...]``) also closes the text and
        contributes its prefix.
        """
        parts: list[str] = []
        last_kind: TokenKind | None = None
        while not self.at_line_end():
            if self.match(closer):
                return "".join(parts).strip(), True
            token = self.advance()
            if token.kind is TokenKind.PIPE:
                continue
            lexeme = token.lexeme
            closes = token.kind in SHAPE_CLOSERS and lexeme.endswith(closer_text)
            if closes:
                lexeme = lexeme[: -len(closer_text)]
            if parts and _needs_space(token.kind, last_kind):
                parts.append(" ")
            parts.append(lexeme)
            last_kind = token.kind
            if closes:
                return "".join(parts).strip(), True
        return "".join(parts).strip(), False

    def parse_edge_chain(self, from_node: FlowchartNode) -> None:
        while self.check_any(_ARROW_KINDS):
            arrow = self.advance()
            edge_style, arrowhead = _ARROWS[arrow.kind]

            label: str | None = None
            if self.match(TokenKind.PIPE):
                label = self.parse_edge_label()
                self.expect(TokenKind.PIPE, "Expected '|' after edge label")

            to_token = self.expect(TokenKind.IDENTIFIER, "Expected node identifier after arrow")
            to_node = self.parse_node(to_token)

            self.diagram.add_edge(
                FlowchartEdge(
                    from_id=from_node.id,
                    to_id=to_node.id,
                    edge_style=edge_style,
                    arrowhead=arrowhead,
                    label=label or None,
                    min_length=_min_length(arrow),
                )
            )
            # A --> B --> C: the destination becomes the next source
            from_node = to_node

    def parse_edge_label(self) -> str:
        parts: list[str] = []
        while not self.check(TokenKind.PIPE) and not self.at_line_end():
            parts.append(self.advance().lexeme)
        return " ".join(parts).strip()

    # ── Subgraphs ─────────────────────────────────────────────────────────────

    def parse_subgraph(self) -> None:
        self.advance()  # 'subgraph'
        id_token = self.expect(TokenKind.IDENTIFIER, "Expected subgraph identifier")
        sg = FlowchartSubgraph(id=id_token.lexeme)

        if self.match(TokenKind.LBRACKET):
            title, closed = self.parse_node_text(TokenKind.RBRACKET, "]")
            if not closed:
                raise self.error("Expected ']'")
            sg.title = title
        elif self.check(TokenKind.STRING):
            sg.title = self.advance().lexeme
        elif not self.at_line_end():
            # subgraph Some free text
            sg.title = " ".join([id_token.lexeme] + [t.lexeme for t in self.skip_to_line_end()])

        self.skip_newlines()
        if self.match(TokenKind.DIRECTION):
            self.skip_newlines()
            if self.check_any(_DIRECTION_KINDS):
                sg.direction = _DIRECTIONS[self.advance().kind]
                sg.has_custom_direction = True

        self.open_subgraphs.append(sg)
        try:
            self.parse_block(self.parse_statement, stop=TokenKind.END)
        finally:
            self.open_subgraphs.pop()

        if self.open_subgraphs:
            self.open_subgraphs[-1].subgraphs.append(sg)
        else:
            self.diagram.subgraphs.append(sg)

        if not self.match(TokenKind.END):
            raise self.error("Expected 'end' to close subgraph")

    # ── Styling ───────────────────────────────────────────────────────────────

    def parse_style(self) -> None:
        self.advance()  # 'style'
        self.expect(TokenKind.IDENTIFIER, "Expected identifier after 'style'")
        # fill/stroke/color properties are not modelled
        self.skip_to_line_end()

    def parse_class_def(self) -> None:
        self.advance()  # 'classDef'
        class_name = self.expect(TokenKind.IDENTIFIER, "Expected class name").lexeme
        properties = join_source(self.skip_to_line_end())
        self.diagram.styles.append(FlowchartStyle(class_name=class_name, properties=properties))

    def parse_class_assignment(self) -> None:
        """class A,B className"""
        keyword = self.advance()
        node_ids = [self.expect(TokenKind.IDENTIFIER, "Expected node identifier after 'class'").lexeme]
        while self.match(TokenKind.COMMA):
            node_ids.append(self.expect(TokenKind.IDENTIFIER, "Expected node identifier after ','").lexeme)
        class_name = self.expect(TokenKind.IDENTIFIER, "Expected class name").lexeme
        for node_id in node_ids:
            node = self.diagram.get_or_create_node(node_id, keyword.line)
            if class_name not in node.classes:
                node.classes.append(class_name)
        self.skip_to_line_end()
