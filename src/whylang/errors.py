"""Error types with formatted source context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from whylang.tokens import TextSpan

if TYPE_CHECKING:
    from whylang.document import Document


class WhyLangError(Exception):
    """Base class for every input error raised by the front end."""

    def __init__(self, message: str, span: TextSpan | None = None) -> None:
        self.message = message
        self.span = span
        super().__init__(message)

    def format(self, document: Document) -> str:
        """Render the error with the offending source line underlined."""
        filename = str(document.path)
        if self.span is None:
            return f"error: {self.message}\n --> {filename}"

        line, byte_col = document.line_map.map_offset(self.span.start)
        raw_line = document.line_text(line)
        source_line = raw_line.decode("utf-8", errors="replace")

        # Columns are byte based; carets are placed by character
        col = len(raw_line[:byte_col].decode("utf-8", errors="replace"))
        end_line, end_byte_col = document.line_map.map_offset(self.span.end)
        if end_line == line:
            width = len(raw_line[byte_col:end_byte_col].decode("utf-8", errors="replace"))
            underline_len = max(1, width)
        else:
            underline_len = max(1, len(source_line) - col)

        pad = " " * col
        carets = "^" * underline_len

        line_num = str(line + 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line + 1}:{col + 1}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


# ----------------------------------------------------------------------
# Text errors
# ----------------------------------------------------------------------


class TextError(WhyLangError):
    """Raised when the source buffer itself cannot be read."""


class InvalidTextError(TextError):
    """A byte sequence is not valid UTF-8."""


class EndOfFileError(TextError):
    """A character was required but the buffer is exhausted."""


# ----------------------------------------------------------------------
# Tokenizer errors
# ----------------------------------------------------------------------


class TokenizerError(WhyLangError):
    """Raised on the first tokenizing error; text errors are chained as the cause."""


class NumberFormatError(TokenizerError):
    """A numeric token does not fit a signed 64-bit integer."""


# ----------------------------------------------------------------------
# Parser errors
# ----------------------------------------------------------------------


class ParseError(WhyLangError):
    """Raised on the first parse error; tokenizer errors are chained as the cause."""


class UnexpectedEndOfFileError(ParseError):
    """The token stream ended where an expression was required."""


class UnexpectedTokenError(ParseError):
    """A token cannot start or continue an expression at this point."""
