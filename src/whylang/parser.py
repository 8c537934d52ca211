"""WhyLang parser — builds expression trees from a token stream."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from whylang.ast import Binary, BinaryOperator, Constant, Expression, Integer
from whylang.errors import (
    ParseError,
    TokenizerError,
    UnexpectedEndOfFileError,
    UnexpectedTokenError,
)
from whylang.lexer import tokenize
from whylang.tokens import PUNCTUATION, TextSpan, Token, TokenKind

_SYMBOLS = {kind: symbol for symbol, kind in PUNCTUATION.items()}


class Parser:
    """Precedence-climbing parser with one token of lookahead.

    The first token is pulled when the parser is built, and the next one after
    every consumption. A TokenizerError hit while pulling is kept and raised as
    a ParseError once the parser actually needs that token.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Token | None = None
        self._pending: TokenizerError | None = None
        self._prev_end = 0
        self._next()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _next(self) -> None:
        try:
            self._current = next(self._tokens, None)
        except TokenizerError as exc:
            self._current = None
            self._pending = exc

    def _peek(self) -> Token | None:
        if self._pending is not None:
            exc = self._pending
            raise ParseError(exc.message, exc.span) from exc
        return self._current

    def _advance(self) -> Token:
        tok = self._peek()
        assert tok is not None
        self._prev_end = tok.span.end
        self._next()
        return tok

    def _peek_binary_operator(self) -> BinaryOperator | None:
        tok = self._peek()
        if tok is None:
            return None
        return BinaryOperator.from_token_kind(tok.kind)

    @property
    def at_end(self) -> bool:
        """True when no tokens remain."""
        return self._peek() is None

    def expect_end(self) -> None:
        """Raise UnexpectedTokenError if any token is left over."""
        tok = self._peek()
        if tok is not None:
            raise UnexpectedTokenError(f"unexpected {_describe(tok)} after expression", tok.span)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expression:
        """Parse one expression: a primary followed by any binary operators."""
        lhs = self.parse_primary_expression()
        return self.parse_expression_rhs(lhs, 0)

    def parse_expression_rhs(self, lhs: Expression, min_precedence: int) -> Expression:
        """Fold trailing operators that bind at least as tight as *min_precedence* into *lhs*."""
        while True:
            op = self._peek_binary_operator()
            if op is None or op.precedence < min_precedence:
                return lhs

            self._advance()
            rhs = self.parse_primary_expression()

            # A tighter operator after rhs takes rhs as its own left operand
            next_op = self._peek_binary_operator()
            if next_op is not None and next_op.precedence > op.precedence:
                rhs = self.parse_expression_rhs(rhs, op.precedence + 1)

            lhs = Binary(lhs, rhs, op)

    def parse_primary_expression(self) -> Expression:
        tok = self._peek()
        if tok is None:
            raise UnexpectedEndOfFileError(
                "unexpected end of input, expected an expression",
                TextSpan(self._prev_end, self._prev_end),
            )
        if tok.kind == TokenKind.NUMBER:
            return self._parse_literal()
        raise UnexpectedTokenError(f"expected an expression, found {_describe(tok)}", tok.span)

    def _parse_literal(self) -> Constant:
        tok = self._advance()
        assert isinstance(tok.value, int)
        return Constant(Integer(tok.value))


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.IDENTIFIER:
        return f"identifier '{tok.value}'"
    if tok.kind == TokenKind.KEYWORD:
        return f"keyword '{tok.value.value}'"  # type: ignore[union-attr]
    if tok.kind == TokenKind.NUMBER:
        return f"number {tok.value}"
    if tok.kind == TokenKind.UNKNOWN:
        return "unrecognized character"
    return f"'{_SYMBOLS[tok.kind]}'"


def parse(source: bytes | str) -> Expression:
    """Convenience function: parse *source* as exactly one expression."""
    parser = Parser(tokenize(source))
    expr = parser.parse_expression()
    parser.expect_end()
    return expr
