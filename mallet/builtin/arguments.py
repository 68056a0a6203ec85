"""Argument checking shared by every builtin."""

from __future__ import annotations

from mallet import LispValue
from mallet.errors import NativeFunctionError
from mallet.types.collections import HashMap, Sequence
from mallet.types.predicates import is_number


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def arg_count_eq(args: list[LispValue], expected: int) -> None:
    if len(args) != expected:
        raise NativeFunctionError(
            f"Expected {expected} argument{_plural(expected)}, got {len(args)}"
        )


def arg_count_gte(args: list[LispValue], min_args: int) -> None:
    if len(args) < min_args:
        raise NativeFunctionError(
            f"Expected at least {min_args} argument{_plural(min_args)}, got {len(args)}"
        )


def number_arg(arg: LispValue) -> float:
    if not is_number(arg):
        raise NativeFunctionError("Argument must be a number")
    return arg


def string_arg(arg: LispValue, what: str = "Argument") -> str:
    if not isinstance(arg, str):
        raise NativeFunctionError(f"{what} must be a string.")
    return arg


def sequence_arg(arg: LispValue, what: str = "Argument") -> Sequence:
    if not isinstance(arg, Sequence):
        raise NativeFunctionError(f"{what} must be a list or vector.")
    return arg


def map_arg(arg: LispValue, what: str = "Argument") -> HashMap:
    if not isinstance(arg, HashMap):
        raise NativeFunctionError(f"{what} must be a hash map.")
    return arg
