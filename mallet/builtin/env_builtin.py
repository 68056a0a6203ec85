"""Built-in functions for the Mallet runtime environment.

This module defines arithmetic, comparison, predicates, printing, atoms,
I/O, control and reflection builtins, and the registration that seeds a root
environment with them (collection builtins live in collection_builtin).

Builtins that call back into the language (eval, apply, map, swap!) are given
the evaluator as an argument when the table is built, so this module never
imports the evaluator itself.
"""
from __future__ import annotations

import math
import time
from functools import partial
from typing import Callable, Optional

from loguru import logger

from mallet import EvaluatorFn, LispValue
from mallet.errors import LispException, NativeFunctionError
from mallet.printer import pr_str
from mallet.reader.parser import read_str
from mallet.types.atom import Atom
from mallet.types.collections import HashMap, List, Sequence
from mallet.types.environment import Environment
from mallet.types.functions import Closure, NativeFunction, call_function
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types import predicates
from mallet.builtin.arguments import (
    arg_count_eq,
    arg_count_gte,
    number_arg,
    sequence_arg,
    string_arg,
)
from mallet.builtin.collection_builtin import COLLECTION_BUILTINS
from mallet.line_editor import read_line as default_read_line

ReadLineFn = Callable[[str], Optional[str]]


# -------------------------------
# Arithmetic and comparison
# -------------------------------
def _binary_numeric(args: list[LispValue], op: Callable[[float, float], LispValue]) -> LispValue:
    arg_count_eq(args, 2)
    return op(number_arg(args[0]), number_arg(args[1]))


def _divide(a: float, b: float) -> float:
    # IEEE-754 results for a zero divisor
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def add(env: Environment, args: list[LispValue]) -> float:
    return _binary_numeric(args, lambda a, b: float(a + b))


def sub(env: Environment, args: list[LispValue]) -> float:
    return _binary_numeric(args, lambda a, b: float(a - b))


def mul(env: Environment, args: list[LispValue]) -> float:
    return _binary_numeric(args, lambda a, b: float(a * b))


def div(env: Environment, args: list[LispValue]) -> float:
    return _binary_numeric(args, lambda a, b: _divide(float(a), float(b)))


def lt(env: Environment, args: list[LispValue]) -> bool:
    return _binary_numeric(args, lambda a, b: a < b)


def lte(env: Environment, args: list[LispValue]) -> bool:
    return _binary_numeric(args, lambda a, b: a <= b)


def gt(env: Environment, args: list[LispValue]) -> bool:
    return _binary_numeric(args, lambda a, b: a > b)


def gte(env: Environment, args: list[LispValue]) -> bool:
    return _binary_numeric(args, lambda a, b: a >= b)


def equals(env: Environment, args: list[LispValue]) -> bool:
    """(= a b) with list/vector cross-equality; see types.collections.equals."""
    arg_count_eq(args, 2)
    return predicates.equals(args[0], args[1])


# -------------------------------
# Predicates
# -------------------------------
def _predicate(test: Callable[[LispValue], bool]):
    def builtin(env: Environment, args: list[LispValue]) -> bool:
        arg_count_eq(args, 1)
        return test(args[0])
    builtin.__name__ = test.__name__
    return builtin


PREDICATES = {
    "nil?": _predicate(predicates.is_nil),
    "true?": _predicate(lambda x: x is True),
    "false?": _predicate(lambda x: x is False),
    "symbol?": _predicate(predicates.is_symbol),
    "keyword?": _predicate(predicates.is_keyword),
    "list?": _predicate(predicates.is_list),
    "vector?": _predicate(predicates.is_vector),
    "sequential?": _predicate(predicates.is_sequential),
    "map?": _predicate(predicates.is_map),
    "string?": _predicate(predicates.is_string),
    "number?": _predicate(predicates.is_number),
    "fn?": _predicate(predicates.is_function),
    "macro?": _predicate(predicates.is_macro),
    "atom?": _predicate(predicates.is_atom),
}


# -------------------------------
# Construction
# -------------------------------
def symbol(env: Environment, args: list[LispValue]) -> Symbol:
    arg_count_eq(args, 1)
    return Symbol(string_arg(args[0]))


def keyword(env: Environment, args: list[LispValue]) -> Keyword:
    arg_count_eq(args, 1)
    if isinstance(args[0], Keyword):
        return args[0]
    return Keyword(string_arg(args[0]))


# -------------------------------
# Printing
# -------------------------------
def _pr_strs(args: list[LispValue], readable: bool) -> list[str]:
    return [pr_str(a, readable) for a in args]


def pr_str_builtin(env: Environment, args: list[LispValue]) -> str:
    """Readable renderings joined by a space."""
    return " ".join(_pr_strs(args, True))


def str_builtin(env: Environment, args: list[LispValue]) -> str:
    """Raw renderings concatenated with no separator."""
    return "".join(_pr_strs(args, False))


def prn(env: Environment, args: list[LispValue]) -> LispValue:
    print(" ".join(_pr_strs(args, True)))
    return Nil


def println(env: Environment, args: list[LispValue]) -> LispValue:
    print(" ".join(_pr_strs(args, False)))
    return Nil


# -------------------------------
# Atoms
# -------------------------------
def _atom_arg(arg: LispValue, what: str = "argument") -> Atom:
    if not isinstance(arg, Atom):
        raise NativeFunctionError(f"Invalid {what}. Expected atom.")
    return arg


def atom(env: Environment, args: list[LispValue]) -> Atom:
    arg_count_eq(args, 1)
    return Atom(args[0])


def deref(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 1)
    return _atom_arg(args[0]).deref()


def reset(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 2)
    return _atom_arg(args[0]).reset(args[1])


def swap(evaluate_fn: EvaluatorFn, env: Environment, args: list[LispValue]) -> LispValue:
    """(swap! a f & extra) stores and returns (f @a extra...)."""
    arg_count_gte(args, 2)
    cell = _atom_arg(args[0], "1st argument")
    fn = args[1]
    if not predicates.is_function(fn):
        raise NativeFunctionError("Invalid 2nd argument. Expected function.")
    result = call_function(fn, [cell.deref(), *args[2:]], evaluate_fn)
    return cell.reset(result)


# -------------------------------
# Higher-order and control
# -------------------------------
def apply(evaluate_fn: EvaluatorFn, env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f a b [c d]) calls f with a, b, c, d."""
    arg_count_gte(args, 2)
    fn, middle, last = args[0], args[1:-1], args[-1]
    spread = sequence_arg(last, "Last argument of apply")
    if not predicates.is_function(fn):
        raise NativeFunctionError("Expected function.")
    return call_function(fn, [*middle, *spread], evaluate_fn)


def map_builtin(evaluate_fn: EvaluatorFn, env: Environment, args: list[LispValue]) -> List:
    """(map f seq) applies f to each element; always returns a List."""
    arg_count_eq(args, 2)
    fn = args[0]
    items = sequence_arg(args[1], "Second argument of map")
    if not predicates.is_function(fn):
        raise NativeFunctionError("Expected function.")
    return List([call_function(fn, [item], evaluate_fn) for item in items])


def eval_builtin(evaluate_fn: EvaluatorFn, env: Environment, args: list[LispValue]) -> LispValue:
    """(eval form) evaluates form in the environment the builtin was built in."""
    arg_count_eq(args, 1)
    return evaluate_fn(args[0], env)


def throw(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_gte(args, 1)
    raise LispException(args[0])


# -------------------------------
# Metadata
# -------------------------------
_META_TYPES = (Sequence, HashMap, NativeFunction, Closure)


def meta(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 1)
    x = args[0]
    if not isinstance(x, _META_TYPES):
        raise NativeFunctionError("meta is only supported on collections and functions")
    return x.meta


def with_meta(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 2)
    x, m = args
    if not isinstance(x, _META_TYPES):
        raise NativeFunctionError("with-meta is only supported on collections and functions")
    return x.with_meta(m)


# -------------------------------
# I/O and time
# -------------------------------
def read_string(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 1)
    return read_str(string_arg(args[0], "read-string argument"))


def slurp(env: Environment, args: list[LispValue]) -> str:
    arg_count_eq(args, 1)
    path = string_arg(args[0], "slurp argument")
    logger.debug("slurp {}", path)
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise NativeFunctionError(f"slurp: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise NativeFunctionError(f"slurp: {path} is not valid UTF-8") from e


def readline(read_line: ReadLineFn, env: Environment, args: list[LispValue]) -> LispValue:
    """(readline prompt) -> the line read, or nil at end of input."""
    arg_count_eq(args, 1)
    prompt = string_arg(args[0])
    line = read_line(prompt)
    return Nil if line is None else line


def time_ms(env: Environment, args: list[LispValue]) -> float:
    arg_count_eq(args, 0)
    return float(time.time_ns() // 1_000_000)


BUILTINS = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    "=": equals,
    **COLLECTION_BUILTINS,
    **PREDICATES,
    "symbol": symbol,
    "keyword": keyword,
    "pr-str": pr_str_builtin,
    "str": str_builtin,
    "prn": prn,
    "println": println,
    "atom": atom,
    "deref": deref,
    "reset!": reset,
    "throw": throw,
    "meta": meta,
    "with-meta": with_meta,
    "read-string": read_string,
    "slurp": slurp,
    "time-ms": time_ms,
}


def ns(
    env: Environment,
    evaluate_fn: EvaluatorFn,
    read_line: Optional[ReadLineFn] = None,
) -> dict[str, NativeFunction]:
    """Build the builtin table for `env`, wiring in the evaluator capability."""
    if read_line is None:
        read_line = default_read_line

    table = dict(BUILTINS)
    table.update(
        {
            "swap!": partial(swap, evaluate_fn),
            "apply": partial(apply, evaluate_fn),
            "map": partial(map_builtin, evaluate_fn),
            "eval": partial(eval_builtin, evaluate_fn),
            "readline": partial(readline, read_line),
        }
    )
    return {name: NativeFunction(name, fn, env) for name, fn in table.items()}


def register(
    env: Environment,
    evaluate_fn: EvaluatorFn,
    read_line: Optional[ReadLineFn] = None,
) -> None:
    """Register all builtin functions into the given environment."""
    table = ns(env, evaluate_fn, read_line)
    env.update({Symbol(name): fn for name, fn in table.items()})
    logger.debug("registered {} builtins", len(table))
