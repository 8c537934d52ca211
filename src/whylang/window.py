"""TextWindow — the scanning cursor every higher layer reads source through."""

from __future__ import annotations

from whylang.errors import TextError
from whylang.predicates import Not, Predicate
from whylang.tokens import TextSpan
from whylang.utf8 import decode_utf8, is_char_boundary


def as_bytes(source: bytes | str) -> bytes:
    """Return *source* as a UTF-8 byte buffer."""
    if isinstance(source, str):
        # surrogatepass keeps lone surrogates so the decoder can reject them
        return source.encode("utf-8", errors="surrogatepass")
    return bytes(source)


class TextWindow:
    """A sliding window ``[offset, end)`` over an immutable UTF-8 buffer.

    ``end`` grows as characters are taken; ``advance()`` commits the window so
    the next token starts where this one stopped.
    """

    __slots__ = ("_buf", "_offset", "_end", "_last")

    def __init__(self, source: bytes | str) -> None:
        self._buf = as_bytes(source)
        self._offset = 0
        self._end = 0
        self._last: str | None = None

    def __repr__(self) -> str:
        return f"TextWindow({self._buf[self._offset : self._end]!r}, {self._offset}..{self._end})"

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def buffer(self) -> bytes:
        return self._buf

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def end(self) -> int:
        return self._end

    @property
    def last(self) -> str | None:
        """The most recently taken character, or None after advance()."""
        return self._last

    @property
    def at_end(self) -> bool:
        return self._end >= len(self._buf)

    def span(self) -> TextSpan:
        return TextSpan(self._offset, self._end)

    def as_str(self) -> str:
        """Return the text currently inside the window."""
        return self._buf[self._offset : self._end].decode("utf-8")

    def as_bytes(self) -> bytes:
        return self._buf[self._offset : self._end]

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def take(self) -> bool:
        """Load the next character into the window.

        Returns False at end of input. Raises InvalidTextError if the bytes at
        ``end`` are not valid UTF-8; the window is left unchanged.
        """
        if self.at_end:
            self._last = None
            return False
        ch, width = decode_utf8(self._buf, self._end)
        self._last = ch
        self._end += width
        return True

    def take_if(self, predicate: Predicate) -> bool:
        """Take the next character only if it satisfies *predicate*."""
        if self.at_end:
            return False
        ch, width = decode_utf8(self._buf, self._end)
        if not predicate(ch):
            return False
        self._last = ch
        self._end += width
        return True

    def peek(self, predicate: Predicate) -> bool:
        """Test the next character without consuming it."""
        if self.at_end:
            return False
        try:
            ch, _ = decode_utf8(self._buf, self._end)
        except TextError:
            return False
        return predicate(ch)

    def scan_while(self, predicate: Predicate) -> bool:
        """Take characters while *predicate* holds. Returns True if any were taken."""
        start = self._end
        matched = self._end
        while self.take_if(predicate):
            matched = self._end
        self.backtrack(matched)
        return matched > start

    def scan_until(self, predicate: Predicate) -> bool:
        """Take characters until *predicate* holds. Returns True if any were taken."""
        return self.scan_while(Not(predicate))

    def backtrack(self, position: int) -> None:
        """Move ``end`` back (or forward) to a position previously read from ``end``.

        A position outside ``[offset, len(buffer)]`` or inside a multi-byte
        character is a caller bug and raises AssertionError.
        """
        if not self._offset <= position <= len(self._buf):
            raise AssertionError(
                f"backtrack position {position} is outside the window [{self._offset}, {len(self._buf)}]"
            )
        if not is_char_boundary(self._buf, position):
            raise AssertionError(f"backtrack position {position} is not a character boundary")
        if position != self._end:
            self._end = position
            self._last = self._char_before(position)

    def advance(self) -> None:
        """Commit the window: the next token starts at ``end``."""
        self._offset = self._end
        self._last = None

    def _char_before(self, position: int) -> str | None:
        if position == self._offset:
            return None
        start = position - 1
        while start > self._offset and not is_char_boundary(self._buf, start):
            start -= 1
        ch, _ = decode_utf8(self._buf, start)
        return ch
