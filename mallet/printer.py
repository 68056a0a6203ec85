"""Render Mallet values back to text.

`readable=True` produces text the reader accepts again (strings quoted and
escaped); `readable=False` emits raw string contents, as used by `str` and
`println`.
"""

from __future__ import annotations

import math
from io import StringIO

from mallet import LispValue
from mallet.types.atom import Atom
from mallet.types.collections import HashMap, List, Vector
from mallet.types.functions import Closure, NativeFunction
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol


def _escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _number_str(n: float | int) -> str:
    if isinstance(n, float):
        if math.isnan(n):
            return "NaN"
        if n == 0 and math.copysign(1.0, n) < 0:
            return "-0"
        if math.isfinite(n) and n.is_integer():
            return str(int(n))
    return str(n)


def pr_str(value: LispValue, readable: bool = True) -> str:
    with StringIO() as buffer:
        _write(buffer, value, readable)
        return buffer.getvalue()


def _write_seq(buffer: StringIO, items, readable: bool, open_: str, close: str) -> None:
    buffer.write(open_)
    first = True
    for item in items:
        if not first:
            buffer.write(" ")
        _write(buffer, item, readable)
        first = False
    buffer.write(close)


def _write(buffer: StringIO, value: LispValue, readable: bool) -> None:
    match value:
        case _ if value is Nil:
            buffer.write("nil")
        case bool():
            buffer.write("true" if value else "false")
        case int() | float():
            buffer.write(_number_str(value))
        case str():
            buffer.write(f'"{_escape(value)}"' if readable else value)
        case Symbol():
            buffer.write(value.id)
        case Keyword():
            buffer.write(f":{value.id}")
        case List():
            _write_seq(buffer, value, readable, "(", ")")
        case Vector():
            _write_seq(buffer, value, readable, "[", "]")
        case HashMap():
            flat = []
            for k, v in value.items():
                flat.extend((k, v))
            _write_seq(buffer, flat, readable, "{", "}")
        case Closure() if value.is_macro:
            buffer.write("#<macro>")
        case Closure() | NativeFunction():
            buffer.write("#<function>")
        case Atom():
            buffer.write("(atom ")
            _write(buffer, value.value, readable)
            buffer.write(")")
        case _:
            buffer.write(str(value))
