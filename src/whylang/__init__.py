"""WhyLang expression language front end."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whylang.ast import Expression

__version__ = "0.1.0"


def compile(source: bytes | str) -> str:
    """Parse WhyLang source and render the expression as an S-expression."""
    from whylang.parser import parse
    from whylang.sexpr import to_sexpr

    return to_sexpr(parse(source))


def parse(source: bytes | str) -> Expression:
    """Parse exactly one expression from *source*."""
    from whylang.parser import parse as _parse

    return _parse(source)
