from __future__ import annotations

from mallet import LispValue
from mallet.types.atom import Atom
from mallet.types.collections import HashMap, List, Sequence, Vector, equals
from mallet.types.functions import Closure, NativeFunction
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol

__all__ = [
    "equals",
    "is_atom",
    "is_function",
    "is_keyword",
    "is_list",
    "is_macro",
    "is_map",
    "is_nil",
    "is_number",
    "is_sequential",
    "is_string",
    "is_symbol",
    "is_truthy",
    "is_vector",
]


def is_truthy(x: LispValue) -> bool:
    # Only nil and false are falsy; 0, "" and empty collections are true
    return not (x is Nil or x is False)


def is_nil(x: LispValue) -> bool:
    return x is Nil


def is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def is_string(x: LispValue) -> bool:
    return isinstance(x, str)


def is_symbol(x: LispValue) -> bool:
    return isinstance(x, Symbol)


def is_keyword(x: LispValue) -> bool:
    return isinstance(x, Keyword)


def is_list(x: LispValue) -> bool:
    return isinstance(x, List)


def is_vector(x: LispValue) -> bool:
    return isinstance(x, Vector)


def is_sequential(x: LispValue) -> bool:
    return isinstance(x, Sequence)


def is_map(x: LispValue) -> bool:
    return isinstance(x, HashMap)


def is_atom(x: LispValue) -> bool:
    return isinstance(x, Atom)


def is_function(x: LispValue) -> bool:
    """True for builtins and closures, macros included."""
    return isinstance(x, (NativeFunction, Closure))


def is_macro(x: LispValue) -> bool:
    return isinstance(x, Closure) and x.is_macro
