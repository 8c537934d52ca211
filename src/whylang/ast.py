"""AST node types for parsed WhyLang expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from whylang.tokens import TokenKind


class BinaryOperator(Enum):
    """Binary operators; the value is the source symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def precedence(self) -> int:
        """Binding strength; higher binds tighter."""
        return _PRECEDENCE[self]

    @classmethod
    def from_token_kind(cls, kind: TokenKind) -> BinaryOperator | None:
        """Return the operator a token kind spells, or None."""
        return _BY_TOKEN_KIND.get(kind)


_PRECEDENCE = {
    BinaryOperator.ADD: 10,
    BinaryOperator.SUBTRACT: 10,
    BinaryOperator.MULTIPLY: 20,
    BinaryOperator.DIVIDE: 20,
}

_BY_TOKEN_KIND = {
    TokenKind.PLUS: BinaryOperator.ADD,
    TokenKind.MINUS: BinaryOperator.SUBTRACT,
    TokenKind.STAR: BinaryOperator.MULTIPLY,
    TokenKind.SLASH: BinaryOperator.DIVIDE,
}


@dataclass(frozen=True, slots=True)
class Integer:
    """Signed 64-bit integer literal."""

    value: int


Literal = Integer


@dataclass(frozen=True, slots=True)
class Constant:
    """A literal value."""

    literal: Literal

    @property
    def precedence(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Binary:
    """``left op right``; owns both subtrees."""

    left: Expression
    right: Expression
    op: BinaryOperator

    @property
    def precedence(self) -> int:
        return self.op.precedence


Expression = Constant | Binary
