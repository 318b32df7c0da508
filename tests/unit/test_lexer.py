"""Tests for mermaid_syntax.syntax.lexer."""

import pytest

from mermaid_syntax.syntax.lexer import Lexer, scan_all
from mermaid_syntax.syntax.tokens import TokenKind as K


def kinds(src: str) -> list[K]:
    return [t.kind for t in scan_all(src)]


# ─── Totality ────────────────────────────────────────────────────────────────

def test_empty_source_is_single_eof():
    tokens = scan_all("")
    assert len(tokens) == 1
    assert tokens[0].kind == K.EOF
    assert (tokens[0].line, tokens[0].column) == (1, 1)


@pytest.mark.parametrize(
    "src",
    ["", "A --> B", "flowchart TD\n", "@@@ ??? \t\n\n", '"unterminated', "classDiagram\nclass A {", "((((((("],
)
def test_exactly_one_trailing_eof(src):
    tokens = scan_all(src)
    assert tokens[-1].kind == K.EOF
    assert sum(1 for t in tokens if t.kind == K.EOF) == 1


def test_unknown_character_becomes_token():
    assert kinds("A @ B") == [K.IDENTIFIER, K.UNKNOWN, K.IDENTIFIER, K.EOF]
    assert scan_all("@")[0].lexeme == "@"


def test_rescanning_is_stable():
    lexer = Lexer("A --> B\nC")
    assert lexer.scan_all() == lexer.scan_all()


# ─── Positions and newlines ──────────────────────────────────────────────────

def test_positions_are_one_based():
    tokens = scan_all("A[Start] --> B")
    positions = [(t.lexeme, t.line, t.column) for t in tokens[:-1]]
    assert positions == [
        ("A", 1, 1),
        ("[", 1, 2),
        ("Start", 1, 3),
        ("]", 1, 8),
        ("-->", 1, 10),
        ("B", 1, 14),
    ]


def test_one_newline_token_per_line_break():
    tokens = scan_all("A\nB\r\nC\rD")
    assert [t.kind for t in tokens] == [
        K.IDENTIFIER,
        K.NEWLINE,
        K.IDENTIFIER,
        K.NEWLINE,
        K.IDENTIFIER,
        K.NEWLINE,
        K.IDENTIFIER,
        K.EOF,
    ]
    assert [t.line for t in tokens if t.kind == K.IDENTIFIER] == [1, 2, 3, 4]


def test_whitespace_is_skipped():
    assert kinds("   A \t  B   ") == [K.IDENTIFIER, K.IDENTIFIER, K.EOF]


# ─── Keywords and identifiers ────────────────────────────────────────────────

def test_flowchart_headers():
    assert kinds("flowchart TD") == [K.FLOWCHART, K.TD, K.EOF]
    assert kinds("graph LR") == [K.FLOWCHART, K.LR, K.EOF]


def test_keywords_match_whole_words_only():
    assert kinds("end endpoint") == [K.END, K.IDENTIFIER, K.EOF]
    assert kinds("classDef classDiagram class") == [K.CLASS_DEF, K.CLASS_DIAGRAM, K.CLASS_KW, K.EOF]


def test_class_diagram_v2_header():
    assert kinds("classDiagram-v2") == [K.CLASS_DIAGRAM, K.EOF]


def test_hyphenated_identifier():
    tokens = scan_all("node-1 --> node-2")
    assert [t.lexeme for t in tokens[:-1]] == ["node-1", "-->", "node-2"]


def test_generic_suffix_is_part_of_identifier():
    tokens = scan_all("List~int~ items")
    assert tokens[0].kind == K.IDENTIFIER
    assert tokens[0].lexeme == "List~int~"


# ─── Comments and strings ────────────────────────────────────────────────────

def test_comment_token():
    tokens = scan_all("%% hello world\nA")
    assert tokens[0].kind == K.COMMENT
    assert tokens[0].lexeme == "hello world"
    assert [t.kind for t in tokens[1:]] == [K.NEWLINE, K.IDENTIFIER, K.EOF]


def test_string_lexeme_excludes_quotes():
    tokens = scan_all('A["Hello World"]')
    assert tokens[2].kind == K.STRING
    assert tokens[2].lexeme == "Hello World"


def test_unterminated_string_stops_at_line_end():
    tokens = scan_all('"abc\nB')
    assert tokens[0].kind == K.STRING
    assert tokens[0].lexeme == "abc"
    assert [t.kind for t in tokens[1:]] == [K.NEWLINE, K.IDENTIFIER, K.EOF]


# ─── Shape delimiters ────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "src,opener,closer",
    [
        ("[x]", K.LBRACKET, K.RBRACKET),
        ("(x)", K.LPAREN, K.RPAREN),
        ("([x])", K.LPAREN_LBRACKET, K.RBRACKET_RPAREN),
        ("[[x]]", K.DOUBLE_LBRACKET, K.DOUBLE_RBRACKET),
        ("[(x)]", K.LBRACKET_LPAREN, K.RPAREN_RBRACKET),
        ("{x}", K.LBRACE, K.RBRACE),
        ("{{x}}", K.DOUBLE_LBRACE, K.DOUBLE_RBRACE),
        ("((x))", K.DOUBLE_LPAREN, K.DOUBLE_RPAREN),
        ("(((x)))", K.TRIPLE_LPAREN, K.TRIPLE_RPAREN),
        (">x]", K.ASYMMETRIC_START, K.RBRACKET),
        ("[/x/]", K.LBRACKET_SLASH, K.SLASH_RBRACKET),
        ("[\\x\\]", K.LBRACKET_BACKSLASH, K.BACKSLASH_RBRACKET),
    ],
)
def test_shape_delimiters_longest_match(src, opener, closer):
    assert kinds(src) == [opener, K.IDENTIFIER, closer, K.EOF]


# ─── Links ───────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "glyph,kind",
    [
        ("-->", K.ARROW_SOLID),
        ("---->", K.ARROW_SOLID),
        ("-.->", K.ARROW_DOTTED),
        ("==>", K.ARROW_THICK),
        ("~~~", K.ARROW_INVISIBLE),
        ("--)", K.ARROW_OPEN_SOLID),
        ("-.-)", K.ARROW_OPEN_DOTTED),
        ("--x", K.ARROW_CROSS_SOLID),
        ("-.-x", K.ARROW_CROSS_DOTTED),
        ("--o", K.ARROW_CIRCLE_SOLID),
        ("---", K.LINE_SOLID),
        ("-.-", K.LINE_DOTTED),
        ("===", K.LINE_THICK),
        ("o--", K.AGGREGATION),
        ("*--", K.COMPOSITION),
        ("--*", K.COMPOSITION),
        ("<|--", K.INHERITANCE),
        ("--|>", K.INHERITANCE),
        ("..|>", K.REALIZATION),
        ("<|..", K.REALIZATION),
        ("..>", K.DEPENDENCY),
        ("<..", K.DEPENDENCY),
        ("--", K.LINK_SOLID),
        ("..", K.LINK_DASHED),
        ("o--o", K.AGGREGATION),
        ("*--*", K.COMPOSITION),
        ("<-->", K.LINK_SOLID),
        ("<--", K.LINK_SOLID),
    ],
)
def test_link_glyphs(glyph, kind):
    assert kinds(f"A {glyph} B") == [K.IDENTIFIER, kind, K.IDENTIFIER, K.EOF]


def test_arrow_without_spaces():
    assert kinds("A-->B") == [K.IDENTIFIER, K.ARROW_SOLID, K.IDENTIFIER, K.EOF]


def test_node_named_o_before_arrow():
    tokens = scan_all("o-->B")
    assert [t.kind for t in tokens] == [K.IDENTIFIER, K.ARROW_SOLID, K.IDENTIFIER, K.EOF]
    assert tokens[0].lexeme == "o"


def test_cross_head_needs_word_boundary():
    tokens = scan_all("A --xray")
    assert [t.kind for t in tokens] == [K.IDENTIFIER, K.LINK_SOLID, K.IDENTIFIER, K.EOF]
    assert tokens[2].lexeme == "xray"


def test_second_head_needs_word_boundary():
    tokens = scan_all("A o--obj")
    assert [t.kind for t in tokens] == [K.IDENTIFIER, K.AGGREGATION, K.IDENTIFIER, K.EOF]
    assert [t.lexeme for t in tokens[1:3]] == ["o--", "obj"]


def test_edge_label_pipes():
    assert kinds("A -->|Yes| B") == [K.IDENTIFIER, K.ARROW_SOLID, K.PIPE, K.IDENTIFIER, K.PIPE, K.IDENTIFIER, K.EOF]


# ─── Punctuation ─────────────────────────────────────────────────────────────

def test_visibility_markers():
    assert kinds("+ - # ~ *") == [K.PLUS, K.MINUS, K.HASH, K.TILDE, K.ASTERISK, K.EOF]


def test_annotation_delimiters():
    assert kinds("<<interface>>") == [K.ANNOTATION_START, K.IDENTIFIER, K.ANNOTATION_END, K.EOF]


def test_text_punctuation():
    assert kinds("? ! , : ; %") == [K.QUESTION, K.EXCLAMATION, K.COMMA, K.COLON, K.SEMICOLON, K.PERCENT, K.EOF]
