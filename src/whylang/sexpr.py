"""S-expression rendering of expression trees."""

from __future__ import annotations

import io
from typing import TextIO

from whylang.ast import Binary, Constant, Expression


class SexprWriter:
    """Streams atoms and parenthesised lists to a text file.

    When *indented* is set every nested list starts on its own line, two
    spaces deeper than its parent.
    """

    def __init__(self, out: TextIO, indented: bool = False) -> None:
        self._out = out
        self.indented = indented
        self._depth = 0
        self._at_list_start = True

    def start_expression(self) -> None:
        if self.indented:
            if self._depth > 0:
                self._out.write("\n" + "  " * self._depth)
        elif not self._at_list_start:
            self._out.write(" ")
        self._out.write("(")
        self._at_list_start = True
        self._depth += 1

    def end_expression(self) -> None:
        if self._depth == 0:
            raise ValueError("end_expression() without a matching start_expression()")
        self._out.write(")")
        self._depth -= 1
        self._at_list_start = False

    def write_atom(self, atom: str) -> None:
        if not self._at_list_start:
            self._out.write(" ")
        self._out.write(atom)
        self._at_list_start = False


def write_expression(expr: Expression, writer: SexprWriter) -> None:
    """Write *expr* as ``(op left right)`` lists with integer atoms."""
    if isinstance(expr, Constant):
        writer.write_atom(str(expr.literal.value))
    elif isinstance(expr, Binary):
        writer.start_expression()
        writer.write_atom(expr.op.value)
        write_expression(expr.left, writer)
        write_expression(expr.right, writer)
        writer.end_expression()


def to_sexpr(expr: Expression, indented: bool = False) -> str:
    """Render *expr* as an S-expression string."""
    buf = io.StringIO()
    write_expression(expr, SexprWriter(buf, indented))
    return buf.getvalue()
