"""Validating UTF-8 decoding over raw bytes, one scalar value at a time."""

from __future__ import annotations

from collections.abc import Iterator

from whylang.errors import EndOfFileError, InvalidTextError
from whylang.tokens import TextSpan

# Width of a UTF-8 sequence indexed by its leading byte (RFC 3629).
# Continuation bytes, the overlong leads 0xC0/0xC1 and leads past U+10FFFF are 0.
# fmt: off
UTF8_CHAR_WIDTH: tuple[int, ...] = (
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 0x1F
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 0x3F
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 0x5F
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 0x7F
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # 0x9F
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # 0xBF
    0, 0, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,
    2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,  # 0xDF
    3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3,  # 0xEF
    4, 4, 4, 4, 4, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # 0xFF
)
# fmt: on

# Allowed range of the first continuation byte for leads that need more than
# the usual 0x80..0xBF check (overlongs, surrogates, beyond U+10FFFF).
_FIRST_CONTINUATION: dict[int, tuple[int, int]] = {
    0xE0: (0xA0, 0xBF),
    0xED: (0x80, 0x9F),
    0xF0: (0x90, 0xBF),
    0xF4: (0x80, 0x8F),
}

# Payload bits of the leading byte, by sequence width.
_LEAD_MASK = {1: 0x7F, 2: 0x1F, 3: 0x0F, 4: 0x07}

REPLACEMENT_CHARACTER = "\ufffd"


def utf8_char_width(byte: int) -> int:
    """Return the sequence length announced by a leading byte, or 0 if invalid."""
    return UTF8_CHAR_WIDTH[byte]


def is_char_boundary(buf: bytes, index: int) -> bool:
    """Return True if *index* falls between two scalar values of *buf*."""
    if index == 0 or index == len(buf):
        return True
    if not 0 < index < len(buf):
        return False
    return not 0x80 <= buf[index] <= 0xBF


def decode_utf8(buf: bytes, start: int = 0) -> tuple[str, int]:
    """Decode one scalar value at ``buf[start]``.

    Returns the character and the number of bytes it occupies. Raises
    InvalidTextError for an invalid, overlong, surrogate, out-of-range or
    truncated sequence, and EndOfFileError when *start* is past the buffer.
    """
    if start >= len(buf):
        raise EndOfFileError("expected a character, found end of input", TextSpan(start, start))

    lead = buf[start]
    width = UTF8_CHAR_WIDTH[lead]
    if width == 0:
        raise InvalidTextError(f"invalid UTF-8 leading byte 0x{lead:02X}", TextSpan(start, start + 1))
    if width == 1:
        return chr(lead), 1

    if start + width > len(buf):
        raise InvalidTextError("truncated UTF-8 sequence", TextSpan(start, len(buf)))

    code_point = lead & _LEAD_MASK[width]
    low, high = _FIRST_CONTINUATION.get(lead, (0x80, 0xBF))
    for i in range(1, width):
        byte = buf[start + i]
        if not low <= byte <= high:
            raise InvalidTextError(
                f"invalid UTF-8 continuation byte 0x{byte:02X}", TextSpan(start, start + i + 1)
            )
        code_point = (code_point << 6) | (byte & 0x3F)
        low, high = 0x80, 0xBF

    return chr(code_point), width


def iter_chars(buf: bytes, replace: bool = False) -> Iterator[tuple[int, str]]:
    """Yield ``(byte_offset, char)`` for every scalar value in *buf*.

    With *replace*, each byte that starts an invalid sequence yields U+FFFD
    instead of raising InvalidTextError.
    """
    idx = 0
    while idx < len(buf):
        try:
            ch, width = decode_utf8(buf, idx)
        except InvalidTextError:
            if not replace:
                raise
            ch, width = REPLACEMENT_CHARACTER, 1
        yield idx, ch
        idx += width
