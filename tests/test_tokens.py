"""Test punctuation tokens, unknown characters, and the Token value type."""

import pytest

from whylang.tokens import Keyword, TextSpan, Token, TokenKind

from .conftest import assert_kinds, assert_values

OPERATORS = [
    ("(", TokenKind.LPAREN),
    (")", TokenKind.RPAREN),
    (",", TokenKind.COMMA),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.STAR),
    ("/", TokenKind.SLASH),
    ("=", TokenKind.ASSIGN),
]


class TestOperators:
    @pytest.mark.parametrize(("source", "kind"), OPERATORS)
    def test_single_operator(self, lex, source, kind):
        tokens = lex(source)
        assert_kinds(tokens, [kind])
        assert_values(tokens, [None])
        assert tokens[0].span == TextSpan(0, 1)

    def test_adjacent_operators(self, lex):
        tokens = lex("()+*")
        assert_kinds(
            tokens, [TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.PLUS, TokenKind.STAR]
        )

    def test_minus_without_digit(self, lex):
        tokens = lex("- 1")
        assert_kinds(tokens, [TokenKind.MINUS, TokenKind.NUMBER])
        assert_values(tokens, [None, 1])


class TestUnknown:
    def test_unknown_character(self, lex):
        tokens = lex("$")
        assert_kinds(tokens, [TokenKind.UNKNOWN])
        assert_values(tokens, [None])

    def test_unknown_multibyte_character_spans_all_bytes(self, lex):
        tokens = lex("€")
        assert_kinds(tokens, [TokenKind.UNKNOWN])
        assert tokens[0].span == TextSpan(0, 3)

    def test_each_unknown_character_is_a_token(self, lex):
        tokens = lex("$%")
        assert_kinds(tokens, [TokenKind.UNKNOWN, TokenKind.UNKNOWN])


class TestWhitespace:
    def test_whitespace_only(self, lex):
        assert lex("  \t\r\n ") == []

    def test_empty_source(self, lex):
        assert lex("") == []

    def test_whitespace_is_not_part_of_spans(self, lex):
        tokens = lex("  +  ")
        assert tokens[0].span == TextSpan(2, 3)


class TestTokenValue:
    def test_text_reslices_buffer(self):
        tok = Token(TextSpan(5, 9), TokenKind.UNKNOWN)
        assert tok.text("this is a test") == "is a"
        assert tok.text(b"this is a test") == "is a"

    def test_text_accepts_str_with_lone_surrogate(self):
        # Same encoding the tokenizer applies to str sources
        tok = Token(TextSpan(0, 2), TokenKind.IDENTIFIER, "ab")
        assert tok.text("ab\ud800") == "ab"

    def test_number_requires_int(self):
        with pytest.raises(TypeError):
            Token(TextSpan(0, 1), TokenKind.NUMBER, "1")

    def test_identifier_requires_str(self):
        with pytest.raises(TypeError):
            Token(TextSpan(0, 1), TokenKind.IDENTIFIER, None)

    def test_keyword_requires_keyword(self):
        with pytest.raises(TypeError):
            Token(TextSpan(0, 3), TokenKind.KEYWORD, "def")

    def test_operator_requires_none(self):
        with pytest.raises(TypeError):
            Token(TextSpan(0, 1), TokenKind.PLUS, 1)

    def test_bool_is_not_an_integer_value(self):
        with pytest.raises(TypeError):
            Token(TextSpan(0, 1), TokenKind.NUMBER, True)

    def test_valid_values(self):
        Token(TextSpan(0, 1), TokenKind.NUMBER, 1)
        Token(TextSpan(0, 1), TokenKind.IDENTIFIER, "x")
        Token(TextSpan(0, 3), TokenKind.KEYWORD, Keyword.DEF)


class TestTextSpan:
    def test_length(self):
        assert len(TextSpan(2, 7)) == 5

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            TextSpan(3, 2)

    def test_ordering_is_by_value(self):
        assert TextSpan(0, 1) == TextSpan(0, 1)
        assert TextSpan(0, 1) != TextSpan(0, 2)
