import pytest

from hypothesis import given
from hypothesis.strategies import lists, sampled_from, text

from wsnparse.errors import LexicalError
from wsnparse.lex import Kind, Lexer, Token, tokenize


def _kinds(src):
    return [tok for _, tok, _ in tokenize(src)]


def test_basic_lexer():
    lexer = Lexer("==")
    assert next(lexer) == (0, Token(Kind.EQUAL), 1)
    assert next(lexer) == (1, Token(Kind.EQUAL), 2)
    with pytest.raises(StopIteration):
        next(lexer)


def test_punctuation():
    assert [t.kind for t in _kinds("= . | { } [ ] ( )")] == [
        Kind.EQUAL,
        Kind.PERIOD,
        Kind.PIPE,
        Kind.LBRACE,
        Kind.RBRACE,
        Kind.LBRACKET,
        Kind.RBRACKET,
        Kind.LPAREN,
        Kind.RPAREN,
    ]


def test_lex_bnf_rules():
    source = r"""
     0 ABS = 'abs' .
     123 bit = '0' | '1' .
     125 digits = digit { digit } .
     219 function_call = ( built_in_function | function_ref ) [ actual_parameter_list ] .
     341 width_spec = '(' width ')' [ FIXED ] .
     149 tail_remark = '--' [ remark_tag ] { \a | \s | \x8 | \x9 | \xA | \xB | \xC | \xD } \n .
    """
    N = lambda n: Token(Kind.LINENUMBER, n)
    I = lambda s: Token(Kind.IDENTIFIER, s)
    S = lambda s: Token(Kind.STRING, s)
    E = lambda s: Token(Kind.ESCAPE, s)
    EQ = Token(Kind.EQUAL)
    DOT = Token(Kind.PERIOD)
    OR = Token(Kind.PIPE)

    expected = [
        N(0), I("ABS"), EQ, S("abs"), DOT,
        N(123), I("bit"), EQ, S("0"), OR, S("1"), DOT,
        N(125), I("digits"), EQ, I("digit"),
        Token(Kind.LBRACE), I("digit"), Token(Kind.RBRACE), DOT,
        N(219), I("function_call"), EQ,
        Token(Kind.LPAREN), I("built_in_function"), OR, I("function_ref"), Token(Kind.RPAREN),
        Token(Kind.LBRACKET), I("actual_parameter_list"), Token(Kind.RBRACKET), DOT,
        N(341), I("width_spec"), EQ, S("("), I("width"), S(")"),
        Token(Kind.LBRACKET), I("FIXED"), Token(Kind.RBRACKET), DOT,
        N(149), I("tail_remark"), EQ, S("--"),
        Token(Kind.LBRACKET), I("remark_tag"), Token(Kind.RBRACKET),
        Token(Kind.LBRACE),
        E(r"\a"), OR, E(r"\s"), OR, E(r"\x8"), OR, E(r"\x9"), OR,
        E(r"\xA"), OR, E(r"\xB"), OR, E(r"\xC"), OR, E(r"\xD"),
        Token(Kind.RBRACE), E(r"\n"), DOT,
    ]
    assert _kinds(source) == expected


def test_spans_cover_token_text():
    src = "12 a = 'b' | \\x1F ."
    for start, tok, end in tokenize(src):
        if tok.kind == Kind.STRING:
            assert src[start:end] == "'b'"
        elif tok.kind == Kind.ESCAPE:
            assert src[start:end] == tok.value == "\\x1F"
        elif tok.kind == Kind.LINENUMBER:
            assert (start, end) == (0, 2)


def test_empty_string_literal():
    assert list(tokenize("''")) == [(0, Token(Kind.STRING, ""), 2)]


def test_escape_takes_at_most_two_hex_digits():
    assert _kinds(r"\x1F2") == [Token(Kind.ESCAPE, r"\x1F"), Token(Kind.LINENUMBER, 2)]


def test_comments_are_skipped():
    src = "; header comment\na = b . ; trailing\n; last line without newline"
    assert [t.kind for t in _kinds(src)] == [
        Kind.IDENTIFIER,
        Kind.EQUAL,
        Kind.IDENTIFIER,
        Kind.PERIOD,
    ]


def test_identifier_then_number():
    assert _kinds("x1 12ab") == [
        Token(Kind.IDENTIFIER, "x1"),
        Token(Kind.LINENUMBER, 12),
        Token(Kind.IDENTIFIER, "ab"),
    ]


def test_backslash_followed_by_non_letter():
    with pytest.raises(LexicalError) as info:
        list(tokenize("a = \\1 ."))
    assert info.value.offset == 4
    assert (info.value.line, info.value.col) == (1, 5)


def test_unterminated_string():
    with pytest.raises(LexicalError) as info:
        list(tokenize("a = 'abc ."))
    assert info.value.offset == 4


def test_carriage_return_is_not_whitespace():
    with pytest.raises(LexicalError) as info:
        list(tokenize("a\r\n"))
    assert info.value.offset == 1


def test_line_number_out_of_range():
    with pytest.raises(LexicalError):
        list(tokenize("4294967296 a = b ."))
    assert _kinds("4294967295") == [Token(Kind.LINENUMBER, 4294967295)]


def test_lexer_is_lazy():
    lexer = tokenize("a = # .")
    assert next(lexer)[1] == Token(Kind.IDENTIFIER, "a")
    assert next(lexer)[1] == Token(Kind.EQUAL)
    with pytest.raises(LexicalError) as info:
        next(lexer)
    assert info.value.offset == 4
    assert isinstance(info.value, SyntaxError)
    # 실패 후에는 스트림이 끝난다
    assert list(lexer) == []


def test_line_col():
    lexer = tokenize("a = b .\n  c = d .")
    spans = [start for start, _, _ in lexer]
    assert lexer.line_col(spans[4]) == (2, 3)


@given(lists(sampled_from([" ", "\t", "\n", "\f", "; note\n", ";"]), max_size=20))
def test_blank_input_has_no_tokens(parts):
    assert list(tokenize("".join(parts))) == []


@given(text(alphabet="abcXYZ_019"))
def test_identifier_is_single_token(tail):
    word = "w" + tail
    assert _kinds(word) == [Token(Kind.IDENTIFIER, word)]


def test_offsets_are_utf8_bytes_after_non_ascii_comment():
    src = "; é\na = b ."
    first = next(tokenize(src))
    assert first == (5, Token(Kind.IDENTIFIER, "a"), 6)
    assert src.encode("utf-8")[5:6] == b"a"


def test_offsets_are_utf8_bytes_after_non_ascii_string():
    src = "a = 'é' \\1 ."
    lexer = tokenize(src)
    assert [next(lexer) for _ in range(3)][2] == (4, Token(Kind.STRING, "é"), 8)
    with pytest.raises(LexicalError) as info:
        next(lexer)
    err = info.value
    assert err.kind == "lexical"
    assert err.offset == 9
    # 표시용 위치는 문자 단위
    assert (err.line, err.col) == (1, 9)
    assert err.snippet == "a = 'é' \\1 .\n        ^"


def test_line_col_takes_byte_offsets():
    lexer = tokenize("'ü' x")
    spans = [start for start, _, _ in lexer]
    assert spans == [0, 5]
    assert lexer.line_col(5) == (1, 5)
