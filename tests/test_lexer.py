import pytest

from main import tokenize
from tokens import Token, TokenType, TokenStream
from errors import ErrorKind, LexicalError


def types_of(src):
    return [t.type for t in tokenize(src)]


def test_lexer_tokenizes_simple_number():
    tokens = tokenize("123")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
    assert tokens[0].value == "123"
    assert (tokens[0].start, tokens[0].end) == (0, 3)


def test_lexer_tokenizes_decimal_numbers():
    tokens = tokenize("1000.0002 1. 2.5")
    assert [t.value for t in tokens][:3] == ["1000.0002", "1.", "2.5"]
    assert all(t.type == TokenType.NUMBER for t in list(tokens)[:3])


def test_lexer_tokenizes_expression_with_offsets():
    tokens = tokenize("1 + 2 - 3")
    assert [(t.type, t.value, t.start) for t in tokens][:5] == [
        (TokenType.NUMBER, "1", 0),
        (TokenType.PLUS, "+", 2),
        (TokenType.NUMBER, "2", 4),
        (TokenType.MINUS, "-", 6),
        (TokenType.NUMBER, "3", 8),
    ]
    assert tokens[-1].type == TokenType.EOF


def test_lexer_recognizes_keywords_and_identifiers():
    assert types_of("let v a _b2 letter") == [
        TokenType.LET,
        TokenType.LET,
        TokenType.IDENTIFIER,
        TokenType.IDENTIFIER,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_lexer_handles_variable_declaration():
    tokens = tokenize("v a = 1")
    assert [(t.type, t.value) for t in tokens][:4] == [
        (TokenType.LET, "v"),
        (TokenType.IDENTIFIER, "a"),
        (TokenType.ASSIGN, "="),
        (TokenType.NUMBER, "1"),
    ]


def test_lexer_handles_function_header_and_arrow():
    assert types_of("(a, b) => { a + b; }") == [
        TokenType.LPAREN,
        TokenType.IDENTIFIER,
        TokenType.COMMA,
        TokenType.IDENTIFIER,
        TokenType.RPAREN,
        TokenType.ARROW,
        TokenType.LBRACE,
        TokenType.IDENTIFIER,
        TokenType.PLUS,
        TokenType.IDENTIFIER,
        TokenType.SEMICOLON,
        TokenType.RBRACE,
        TokenType.EOF,
    ]


def test_lexer_lexes_double_star_greedily():
    assert types_of("2***3") == [
        TokenType.NUMBER,
        TokenType.STAR_STAR,
        TokenType.STAR,
        TokenType.NUMBER,
        TokenType.EOF,
    ]
    assert types_of("a * b / c % d") == [
        TokenType.IDENTIFIER,
        TokenType.STAR,
        TokenType.IDENTIFIER,
        TokenType.SLASH,
        TokenType.IDENTIFIER,
        TokenType.PERCENT,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_lexer_does_not_lex_signs_into_numbers():
    assert types_of("-1") == [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF]


def test_lexer_skips_newlines_and_tabs():
    assert types_of("a\n\t b\r\n") == [
        TokenType.IDENTIFIER,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_lexer_reports_unexpected_character_offset():
    with pytest.raises(LexicalError) as excinfo:
        tokenize("1 $ 2")
    err = excinfo.value
    assert err.offset == 2
    assert err.character == "$"
    assert (err.start, err.end) == (2, 3)
    assert err.kind == ErrorKind.LEXICAL
    assert "line 1, column 3" in err.message


def test_lexer_error_tracks_lines():
    with pytest.raises(LexicalError) as excinfo:
        tokenize("let a = 1\nlet b = #")
    assert excinfo.value.offset == 18
    assert "line 2, column 9" in str(excinfo.value)


def test_lexer_rejects_leading_decimal_point():
    with pytest.raises(LexicalError) as excinfo:
        tokenize(".5")
    assert excinfo.value.offset == 0


def test_token_stream_mark_and_reset():
    stream = tokenize("(a) => a")
    mark = stream.mark()
    assert stream.advance().type == TokenType.LPAREN
    assert stream.peek().type == TokenType.IDENTIFIER
    assert stream.peek(2).type == TokenType.ARROW
    stream.reset(mark)
    assert stream.current.type == TokenType.LPAREN


def test_token_stream_stays_at_eof():
    stream = TokenStream([Token(TokenType.NUMBER, "1", 0, 1)])
    assert stream[-1].type == TokenType.EOF
    stream.advance()
    assert stream.at_end()
    assert stream.advance().type == TokenType.EOF
    assert stream.peek(5).type == TokenType.EOF
    with pytest.raises(ValueError):
        stream.reset(10)
