"""Byte offset to (line, column) mapping for diagnostics."""

from __future__ import annotations

import bisect
from dataclasses import dataclass

from whylang.utf8 import iter_chars
from whylang.window import as_bytes


@dataclass(frozen=True, slots=True)
class LineMap:
    """Byte offsets of every line break in a buffer, strictly increasing.

    A line break character belongs to the line it terminates. CR LF counts as
    one break, recorded at the LF.
    """

    line_breaks: tuple[int, ...]

    @classmethod
    def parse(cls, text: bytes | str) -> LineMap:
        """Scan *text* once and record its line breaks (LF, CR, CR LF).

        Undecodable bytes never count as breaks, so a map can still be built
        for a buffer that failed to tokenize.
        """
        breaks: list[int] = []
        last_char = ""
        last_idx = 0
        for idx, ch in iter_chars(as_bytes(text), replace=True):
            if last_char == "\r" and ch != "\n":
                breaks.append(last_idx)
            if ch == "\n":
                breaks.append(idx)
            last_char = ch
            last_idx = idx

        if last_char == "\r":
            breaks.append(last_idx)

        return cls(tuple(breaks))

    @property
    def line_count(self) -> int:
        return len(self.line_breaks) + 1

    def line_start(self, line: int) -> int:
        """Byte offset of the first character on *line* (0-based)."""
        if not 0 <= line < self.line_count:
            raise ValueError(f"line {line} out of range (0..{self.line_count - 1})")
        return 0 if line == 0 else self.line_breaks[line - 1] + 1

    def map_offset(self, offset: int) -> tuple[int, int]:
        """Return the 0-based ``(line, column)`` of a byte offset.

        An exact hit on a break means the offset IS the break character, which
        ends its line; otherwise the insertion point is the line number. Either
        way that is ``bisect_left``.
        """
        if offset < 0:
            raise ValueError(f"negative offset {offset}")
        line = bisect.bisect_left(self.line_breaks, offset)
        col = offset if line == 0 else offset - self.line_breaks[line - 1] - 1
        return line, col
