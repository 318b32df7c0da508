"""Token model shared by every Mermaid grammar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Keywords
    FLOWCHART = auto()  # flowchart | graph
    TD = auto()
    TB = auto()
    BT = auto()
    LR = auto()
    RL = auto()
    DIRECTION = auto()
    SUBGRAPH = auto()
    END = auto()
    STYLE = auto()
    CLASS_DEF = auto()
    LINK_STYLE = auto()
    CLASS_DIAGRAM = auto()
    CLASS_KW = auto()
    TITLE = auto()

    # Shape delimiters
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN_LBRACKET = auto()  # ([
    RBRACKET_RPAREN = auto()  # ])
    LBRACKET_LPAREN = auto()  # [(
    RPAREN_RBRACKET = auto()  # )]
    DOUBLE_LBRACKET = auto()  # [[
    DOUBLE_RBRACKET = auto()  # ]]
    DOUBLE_LBRACE = auto()  # {{
    DOUBLE_RBRACE = auto()  # }}
    DOUBLE_LPAREN = auto()  # ((
    DOUBLE_RPAREN = auto()  # ))
    TRIPLE_LPAREN = auto()  # (((
    TRIPLE_RPAREN = auto()  # )))
    ASYMMETRIC_START = auto()  # >
    LBRACKET_SLASH = auto()  # [/
    SLASH_RBRACKET = auto()  # /]
    LBRACKET_BACKSLASH = auto()  # [\
    BACKSLASH_RBRACKET = auto()  # \]

    # Arrows and lines
    ARROW_SOLID = auto()  # -->
    ARROW_DOTTED = auto()  # -.->
    ARROW_THICK = auto()  # ==>
    ARROW_INVISIBLE = auto()  # ~~~
    ARROW_OPEN_SOLID = auto()  # --)
    ARROW_OPEN_DOTTED = auto()  # -.-)
    ARROW_CROSS_SOLID = auto()  # --x
    ARROW_CROSS_DOTTED = auto()  # -.-x
    ARROW_CIRCLE_SOLID = auto()  # --o
    LINE_SOLID = auto()  # ---
    LINE_DOTTED = auto()  # -.-
    LINE_THICK = auto()  # ===
    AGGREGATION = auto()  # o--
    COMPOSITION = auto()  # *-- | --*

    # Class relation glyphs
    INHERITANCE = auto()  # <|-- | --|>
    REALIZATION = auto()  # ..|> | <|..
    DEPENDENCY = auto()  # ..> | <..
    LINK_SOLID = auto()  # --
    LINK_DASHED = auto()  # ..

    # Punctuation
    PIPE = auto()
    COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()
    PLUS = auto()
    MINUS = auto()
    HASH = auto()
    TILDE = auto()
    ASTERISK = auto()
    QUESTION = auto()
    EXCLAMATION = auto()
    PERCENT = auto()
    AMPERSAND = auto()
    DOT = auto()
    SLASH = auto()
    BACKSLASH = auto()
    EQUALS = auto()
    LT = auto()
    ANNOTATION_START = auto()  # <<
    ANNOTATION_END = auto()  # >>

    IDENTIFIER = auto()
    STRING = auto()
    COMMENT = auto()
    NEWLINE = auto()
    UNKNOWN = auto()
    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    "flowchart": TokenKind.FLOWCHART,
    "graph": TokenKind.FLOWCHART,
    "flowchart-elk": TokenKind.FLOWCHART,
    "TD": TokenKind.TD,
    "TB": TokenKind.TB,
    "BT": TokenKind.BT,
    "LR": TokenKind.LR,
    "RL": TokenKind.RL,
    "direction": TokenKind.DIRECTION,
    "subgraph": TokenKind.SUBGRAPH,
    "end": TokenKind.END,
    "style": TokenKind.STYLE,
    "classDef": TokenKind.CLASS_DEF,
    "linkStyle": TokenKind.LINK_STYLE,
    "classDiagram": TokenKind.CLASS_DIAGRAM,
    "classDiagram-v2": TokenKind.CLASS_DIAGRAM,
    "class": TokenKind.CLASS_KW,
    "title": TokenKind.TITLE,
}

SHAPE_CLOSERS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.RBRACKET,
        TokenKind.RPAREN,
        TokenKind.RBRACE,
        TokenKind.RBRACKET_RPAREN,
        TokenKind.RPAREN_RBRACKET,
        TokenKind.DOUBLE_RBRACKET,
        TokenKind.DOUBLE_RBRACE,
        TokenKind.DOUBLE_RPAREN,
        TokenKind.TRIPLE_RPAREN,
        TokenKind.SLASH_RBRACKET,
        TokenKind.BACKSLASH_RBRACKET,
    }
)


@dataclass(frozen=True)
class Token:
    """A lexical unit with its 1-based source position."""

    kind: TokenKind
    lexeme: str
    line: int
    column: int

    def is_word(self) -> bool:
        """True for identifiers and keywords, which can both name class members."""
        return self.kind is TokenKind.IDENTIFIER or KEYWORDS.get(self.lexeme) is self.kind
