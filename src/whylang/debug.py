"""--tokens and --tree dumps."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from whylang.ast import Binary, Constant, Expression
from whylang.tokens import Keyword, Token


def dump_tokens(tokens: Iterable[Token], source: bytes, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: kind, span, source text and value."""
    for tok in tokens:
        line = f"{tok.kind.name:<10} {tok.span.start}..{tok.span.end} {tok.text(source)!r}"
        if isinstance(tok.value, Keyword):
            line += f" {tok.value.name}"
        elif tok.value is not None:
            line += f" {tok.value!r}"
        file.write(line + "\n")


def dump_ast(expr: Expression, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable expression tree to *file*."""
    _dump(expr, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump(expr: Expression, depth: int, f: TextIO) -> None:
    if isinstance(expr, Constant):
        f.write(f"{_indent(depth)}Constant {expr.literal.value}\n")
    elif isinstance(expr, Binary):
        f.write(f"{_indent(depth)}Binary {expr.op.name} ({expr.op.value})\n")
        _dump(expr.left, depth + 1, f)
        _dump(expr.right, depth + 1, f)
