"""Test identifier and keyword lexing, and the character classes behind them."""

import pytest

from whylang.tokens import Keyword, TextSpan, TokenKind, is_ident_char, is_ident_start

from .conftest import assert_kinds, assert_values


class TestIsIdentChar:
    def test_letters(self):
        assert is_ident_char("a")
        assert is_ident_char("Z")

    def test_digits(self):
        assert is_ident_char("0")
        assert is_ident_char("9")
        assert not is_ident_start("0")

    def test_underscore(self):
        assert is_ident_start("_")
        assert is_ident_char("_")

    def test_non_ident(self):
        for ch in "()+-*/=, \t\n.$":
            assert not is_ident_char(ch), f"Expected '{ch}' to NOT be ident_char"

    def test_non_ascii_letters_are_not_ident(self):
        assert not is_ident_start("é")
        assert not is_ident_char("é")


class TestIdentifierLexing:
    def test_simple_word(self, lex):
        tokens = lex("hello")
        assert_kinds(tokens, [TokenKind.IDENTIFIER])
        assert_values(tokens, ["hello"])

    def test_underscores_and_digits(self, lex):
        tokens = lex("_123foo_bar")
        assert_kinds(tokens, [TokenKind.IDENTIFIER])
        assert_values(tokens, ["_123foo_bar"])
        assert tokens[0].span == TextSpan(0, 11)

    def test_identifier_with_digits(self, lex):
        tokens = lex("h2")
        assert_values(tokens, ["h2"])

    def test_identifier_ends_at_operator(self, lex):
        tokens = lex("name=")
        assert_kinds(tokens, [TokenKind.IDENTIFIER, TokenKind.ASSIGN])
        assert tokens[0].value == "name"

    def test_identifier_ends_at_space(self, lex):
        tokens = lex("hello world")
        assert_kinds(tokens, [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER])
        assert_values(tokens, ["hello", "world"])

    def test_identifier_ends_at_paren(self, lex):
        tokens = lex("f(")
        assert_kinds(tokens, [TokenKind.IDENTIFIER, TokenKind.LPAREN])


class TestKeywords:
    @pytest.mark.parametrize(("source", "keyword"), [("def", Keyword.DEF), ("extern", Keyword.EXTERN)])
    def test_keyword(self, lex, source, keyword):
        tokens = lex(source)
        assert_kinds(tokens, [TokenKind.KEYWORD])
        assert_values(tokens, [keyword])

    def test_keyword_prefix_is_identifier(self, lex):
        tokens = lex("define")
        assert_kinds(tokens, [TokenKind.IDENTIFIER])
        assert_values(tokens, ["define"])

    def test_keywords_are_case_sensitive(self, lex):
        tokens = lex("DEF")
        assert_kinds(tokens, [TokenKind.IDENTIFIER])


class TestIdentifierPositions:
    def test_spans(self, lex):
        tokens = lex("abc def")
        assert tokens[0].span == TextSpan(0, 3)
        assert tokens[1].span == TextSpan(4, 7)

    def test_text_matches_source(self, lex):
        source = "  alpha  beta"
        tokens = lex(source)
        assert [t.text(source) for t in tokens] == ["alpha", "beta"]
