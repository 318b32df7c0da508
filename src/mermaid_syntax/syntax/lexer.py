"""Lexer shared by the flowchart and class diagram parsers.

Single forward pass over the source. Whitespace inside a line is skipped,
every line break yields a NEWLINE token and the token list always ends with
exactly one EOF token. Lexing is total: a character that matches nothing
becomes an UNKNOWN token for the parser to skip or reject.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mermaid_syntax.syntax.tokens import KEYWORDS, Token, TokenKind

# ─── Patterns ────────────────────────────────────────────────────────────────

_WHITESPACE_RE = re.compile(r"[ \t\f\v]+")
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_COMMENT_RE = re.compile(r"%%([^\r\n]*)")
_STRING_RE = re.compile(r'"([^"\r\n]*)"?')
_IDENTIFIER_RE = re.compile(r"\w+(?:-\w+)*(?:~\w+~)?")

# Links and relation glyphs, most specific first
_LINK_PATTERNS: list[tuple[re.Pattern[str], TokenKind]] = [
    (re.compile(r"<\|-{2,}"), TokenKind.INHERITANCE),
    (re.compile(r"<\|\.{2,}"), TokenKind.REALIZATION),
    (re.compile(r"<\.{2,}"), TokenKind.DEPENDENCY),
    (re.compile(r"<-{2,}(?:[>*]|o(?!\w))?"), TokenKind.LINK_SOLID),
    (re.compile(r"\.{2,}\|>"), TokenKind.REALIZATION),
    (re.compile(r"\.{2,}>"), TokenKind.DEPENDENCY),
    (re.compile(r"\.{2,}"), TokenKind.LINK_DASHED),
    (re.compile(r"\*-{2,}(?:\*|o(?!\w))?(?=[\s\w\"])"), TokenKind.COMPOSITION),
    (re.compile(r"o-{2,}(?:\*|o(?!\w))?(?=[\s\w\"])"), TokenKind.AGGREGATION),
    (re.compile(r"-\.+->"), TokenKind.ARROW_DOTTED),
    (re.compile(r"-\.+-x(?!\w)"), TokenKind.ARROW_CROSS_DOTTED),
    (re.compile(r"-\.+-\)"), TokenKind.ARROW_OPEN_DOTTED),
    (re.compile(r"-\.+-"), TokenKind.LINE_DOTTED),
    (re.compile(r"-{2,}\|>"), TokenKind.INHERITANCE),
    (re.compile(r"-{2,}\*"), TokenKind.COMPOSITION),
    (re.compile(r"-{2,}>"), TokenKind.ARROW_SOLID),
    (re.compile(r"-{2,}x(?!\w)"), TokenKind.ARROW_CROSS_SOLID),
    (re.compile(r"-{2,}o(?!\w)"), TokenKind.ARROW_CIRCLE_SOLID),
    (re.compile(r"-{2,}\)"), TokenKind.ARROW_OPEN_SOLID),
    (re.compile(r"-{3,}"), TokenKind.LINE_SOLID),
    (re.compile(r"--"), TokenKind.LINK_SOLID),
    (re.compile(r"={2,}>"), TokenKind.ARROW_THICK),
    (re.compile(r"={3,}"), TokenKind.LINE_THICK),
    (re.compile(r"~{3,}"), TokenKind.ARROW_INVISIBLE),
]

# Delimiters and punctuation; three-character openers before their prefixes
_PUNCTUATION: list[tuple[str, TokenKind]] = [
    ("(((", TokenKind.TRIPLE_LPAREN),
    (")))", TokenKind.TRIPLE_RPAREN),
    ("((", TokenKind.DOUBLE_LPAREN),
    ("))", TokenKind.DOUBLE_RPAREN),
    ("([", TokenKind.LPAREN_LBRACKET),
    ("])", TokenKind.RBRACKET_RPAREN),
    ("[(", TokenKind.LBRACKET_LPAREN),
    (")]", TokenKind.RPAREN_RBRACKET),
    ("[[", TokenKind.DOUBLE_LBRACKET),
    ("]]", TokenKind.DOUBLE_RBRACKET),
    ("[/", TokenKind.LBRACKET_SLASH),
    ("/]", TokenKind.SLASH_RBRACKET),
    ("[\\", TokenKind.LBRACKET_BACKSLASH),
    ("\\]", TokenKind.BACKSLASH_RBRACKET),
    ("{{", TokenKind.DOUBLE_LBRACE),
    ("}}", TokenKind.DOUBLE_RBRACE),
    ("<<", TokenKind.ANNOTATION_START),
    (">>", TokenKind.ANNOTATION_END),
    ("[", TokenKind.LBRACKET),
    ("]", TokenKind.RBRACKET),
    ("(", TokenKind.LPAREN),
    (")", TokenKind.RPAREN),
    ("{", TokenKind.LBRACE),
    ("}", TokenKind.RBRACE),
    (">", TokenKind.ASYMMETRIC_START),
    ("<", TokenKind.LT),
    ("|", TokenKind.PIPE),
    (":", TokenKind.COLON),
    (";", TokenKind.SEMICOLON),
    (",", TokenKind.COMMA),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("#", TokenKind.HASH),
    ("~", TokenKind.TILDE),
    ("*", TokenKind.ASTERISK),
    ("?", TokenKind.QUESTION),
    ("!", TokenKind.EXCLAMATION),
    ("%", TokenKind.PERCENT),
    ("&", TokenKind.AMPERSAND),
    (".", TokenKind.DOT),
    ("/", TokenKind.SLASH),
    ("\\", TokenKind.BACKSLASH),
    ("=", TokenKind.EQUALS),
]


@dataclass
class Lexer:
    """Stateful scanner over the source string."""

    source: str
    pos: int = 0
    line: int = 1
    line_start: int = 0

    def column(self) -> int:
        return self.pos - self.line_start + 1

    def scan_all(self) -> list[Token]:
        """Scan the whole source into a token list terminated by EOF."""
        self.pos = 0
        self.line = 1
        self.line_start = 0
        tokens: list[Token] = []
        while self.pos < len(self.source):
            token = self.scan_token()
            if token is not None:
                tokens.append(token)
        tokens.append(Token(TokenKind.EOF, "", self.line, self.column()))
        return tokens

    def scan_token(self) -> Token | None:
        """Scan one token at the cursor; returns None for skipped whitespace."""
        m = _WHITESPACE_RE.match(self.source, self.pos)
        if m:
            self.pos = m.end()
            return None

        m = _NEWLINE_RE.match(self.source, self.pos)
        if m:
            token = Token(TokenKind.NEWLINE, "\n", self.line, self.column())
            self.pos = m.end()
            self.line += 1
            self.line_start = self.pos
            return token

        m = _COMMENT_RE.match(self.source, self.pos)
        if m:
            return self._emit(TokenKind.COMMENT, m.group(1).strip(), m.end())

        m = _STRING_RE.match(self.source, self.pos)
        if m:
            return self._emit(TokenKind.STRING, m.group(1), m.end())

        for pattern, kind in _LINK_PATTERNS:
            m = pattern.match(self.source, self.pos)
            if m:
                return self._emit(kind, m.group(0), m.end())

        m = _IDENTIFIER_RE.match(self.source, self.pos)
        if m:
            text = m.group(0)
            return self._emit(KEYWORDS.get(text, TokenKind.IDENTIFIER), text, m.end())

        for text, kind in _PUNCTUATION:
            if self.source.startswith(text, self.pos):
                return self._emit(kind, text, self.pos + len(text))

        return self._emit(TokenKind.UNKNOWN, self.source[self.pos], self.pos + 1)

    def _emit(self, kind: TokenKind, lexeme: str, end: int) -> Token:
        token = Token(kind, lexeme, self.line, self.column())
        self.pos = end
        return token


def scan_all(source: str) -> list[Token]:
    """Tokenize Mermaid source text."""
    return Lexer(source).scan_all()
