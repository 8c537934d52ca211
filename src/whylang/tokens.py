"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    UNKNOWN = auto()  # any character with no token of its own

    # Content
    NUMBER = auto()  # -?[0-9]+, value is the int
    IDENTIFIER = auto()  # [_A-Za-z][_A-Za-z0-9]*, value is the text
    KEYWORD = auto()  # reserved identifier, value is the Keyword

    # Punctuation (single-character)
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    ASSIGN = auto()  # =


class Keyword(Enum):
    """Reserved words; the value is the source spelling."""

    DEF = "def"
    EXTERN = "extern"


KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}

PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "=": TokenKind.ASSIGN,
}

TokenValue = int | str | Keyword | None

_VALUE_TYPES: dict[TokenKind, type] = {
    TokenKind.NUMBER: int,
    TokenKind.IDENTIFIER: str,
    TokenKind.KEYWORD: Keyword,
}


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Half-open byte range [start, end) in the source buffer."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Token:
    """A single token; the text is recovered from the buffer through its span."""

    span: TextSpan
    kind: TokenKind
    value: TokenValue = None

    def __post_init__(self) -> None:
        expected = _VALUE_TYPES.get(self.kind)
        if expected is None:
            ok = self.value is None
        else:
            ok = isinstance(self.value, expected) and not isinstance(self.value, bool)
        if not ok:
            raise TypeError(f"{self.kind.name} token cannot carry value {self.value!r}")

    def text(self, buffer: bytes | str) -> str:
        """Return the source text this token covers."""
        from whylang.window import as_bytes

        data = as_bytes(buffer)
        return data[self.span.start : self.span.end].decode("utf-8")


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_ident_char(ch: str) -> bool:
    """Return True if ch is a valid identifier character."""
    return is_ident_start(ch) or is_digit(ch)
