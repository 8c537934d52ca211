"""WhyLang tokenizer — turns a source buffer into a lazy stream of tokens."""

from __future__ import annotations

from enum import Enum, auto

from whylang.errors import NumberFormatError, TextError, TokenizerError
from whylang.predicates import DIGIT, WHITESPACE, Where
from whylang.tokens import (
    KEYWORDS,
    PUNCTUATION,
    Token,
    TokenKind,
    TokenValue,
    is_digit,
    is_ident_char,
    is_ident_start,
)
from whylang.window import TextWindow

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_IDENT_CHAR = Where(is_ident_char)


class _State(Enum):
    PRODUCING = auto()
    EXHAUSTED = auto()


class Tokenizer:
    """Iterator over the tokens of one buffer.

    Each ``next()`` scans exactly one token. A decode or number error is
    raised as TokenizerError and ends the stream; so does end of input. The
    stream cannot be restarted, build a new Tokenizer to scan again.
    """

    def __init__(self, source: bytes | str | TextWindow) -> None:
        self._window = source if isinstance(source, TextWindow) else TextWindow(source)
        self._state = _State.PRODUCING

    def __iter__(self) -> Tokenizer:
        return self

    def __next__(self) -> Token:
        if self._state is _State.EXHAUSTED:
            raise StopIteration
        try:
            token = self._next_token()
        except TextError as exc:
            self._state = _State.EXHAUSTED
            raise TokenizerError(exc.message, exc.span) from exc
        except TokenizerError:
            self._state = _State.EXHAUSTED
            raise
        if token is None:
            self._state = _State.EXHAUSTED
            raise StopIteration
        return token

    @property
    def exhausted(self) -> bool:
        return self._state is _State.EXHAUSTED

    @property
    def window(self) -> TextWindow:
        return self._window

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _next_token(self) -> Token | None:
        self._skip_whitespace()

        if not self._window.take():
            return None

        ch = self._window.last
        assert ch is not None

        if is_digit(ch) or (ch == "-" and self._window.peek(DIGIT)):
            return self._lex_number()

        if is_ident_start(ch):
            return self._lex_identifier()

        kind = PUNCTUATION.get(ch)
        if kind is not None:
            return self._emit(kind)

        return self._emit(TokenKind.UNKNOWN)

    def _skip_whitespace(self) -> None:
        if self._window.scan_while(WHITESPACE):
            self._window.advance()

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _lex_number(self) -> Token:
        # The sign (or first digit) is already in the window
        self._window.scan_while(DIGIT)
        text = self._window.as_str()
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise NumberFormatError(
                f"integer literal {text} does not fit in 64 bits", self._window.span()
            )
        return self._emit(TokenKind.NUMBER, value)

    def _lex_identifier(self) -> Token:
        self._window.scan_while(_IDENT_CHAR)
        text = self._window.as_str()
        keyword = KEYWORDS.get(text)
        if keyword is not None:
            return self._emit(TokenKind.KEYWORD, keyword)
        return self._emit(TokenKind.IDENTIFIER, text)

    def _emit(self, kind: TokenKind, value: TokenValue = None) -> Token:
        token = Token(self._window.span(), kind, value)
        self._window.advance()
        return token


def tokenize(source: bytes | str) -> Tokenizer:
    """Convenience function: return a token iterator over *source*."""
    return Tokenizer(source)
