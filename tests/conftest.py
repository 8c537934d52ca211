"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from whylang.ast import Binary, BinaryOperator, Constant, Expression, Integer
from whylang.lexer import tokenize
from whylang.parser import parse
from whylang.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the full token list."""

    def _lex(source: bytes | str) -> list[Token]:
        return list(tokenize(source))

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source as one expression."""

    def _parse(source: bytes | str) -> Expression:
        return parse(source)

    return _parse


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def const(value: int) -> Constant:
    """Shorthand for an integer constant node."""
    return Constant(Integer(value))


def add(left: Expression, right: Expression) -> Binary:
    return Binary(left, right, BinaryOperator.ADD)


def sub(left: Expression, right: Expression) -> Binary:
    return Binary(left, right, BinaryOperator.SUBTRACT)


def mul(left: Expression, right: Expression) -> Binary:
    return Binary(left, right, BinaryOperator.MULTIPLY)


def div(left: Expression, right: Expression) -> Binary:
    return Binary(left, right, BinaryOperator.DIVIDE)
