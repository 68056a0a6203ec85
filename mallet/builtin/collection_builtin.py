"""Builtins over lists, vectors and hash maps.

Every operation returns a new collection; the arguments are never modified.
"""
from __future__ import annotations

import math

from mallet import LispValue
from mallet.errors import NativeFunctionError
from mallet.types.collections import HashMap, List, Sequence, Vector
from mallet.types.environment import Environment
from mallet.types.nil import Nil
from mallet.builtin.arguments import (
    arg_count_eq,
    arg_count_gte,
    map_arg,
    number_arg,
    sequence_arg,
)


# -------------------------------
# Lists and vectors
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> List:
    return List(args)


def vector(env: Environment, args: list[LispValue]) -> Vector:
    return Vector(args)


def cons(env: Environment, args: list[LispValue]) -> List:
    """(cons x seq) -> a List with x in front of the elements of seq."""
    arg_count_eq(args, 2)
    head, tail = args
    if tail is Nil:
        return List([head])
    if not isinstance(tail, Sequence):
        raise NativeFunctionError("Invalid 2nd argument")
    return List((head, *tail))


def concat(env: Environment, args: list[LispValue]) -> List:
    """Concatenate lists and vectors into a single List. Nil counts as empty."""
    result: list[LispValue] = []
    for item in args:
        if item is Nil:
            continue
        result.extend(sequence_arg(item, "Every argument to concat"))
    return List(result)


def empty(env: Environment, args: list[LispValue]) -> bool:
    arg_count_eq(args, 1)
    x = args[0]
    if x is Nil:
        return True
    if isinstance(x, (Sequence, str, HashMap)):
        return len(x) == 0
    raise NativeFunctionError("Invalid argument")


def count(env: Environment, args: list[LispValue]) -> float:
    arg_count_eq(args, 1)
    x = args[0]
    if x is Nil:
        return 0.0
    if isinstance(x, (Sequence, str, HashMap)):
        return float(len(x))
    raise NativeFunctionError("Invalid argument")


def nth(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 2)
    items = sequence_arg(args[0], "First argument to nth")
    position = number_arg(args[1])
    if not math.isfinite(position):
        raise NativeFunctionError("nth: index out of range")
    index = int(position)
    if index < 0 or index >= len(items):
        raise NativeFunctionError("nth: index out of range")
    return items[index]


def first(env: Environment, args: list[LispValue]) -> LispValue:
    arg_count_eq(args, 1)
    xs = args[0]
    if xs is Nil:
        return Nil
    items = sequence_arg(xs)
    return items[0] if items else Nil


def rest(env: Environment, args: list[LispValue]) -> List:
    arg_count_eq(args, 1)
    xs = args[0]
    if xs is Nil:
        return List()
    return List(sequence_arg(xs)[1:])


def conj(env: Environment, args: list[LispValue]) -> LispValue:
    """Lists grow at the front (in reverse argument order), vectors at the back."""
    arg_count_gte(args, 2)
    coll, items = args[0], args[1:]
    if isinstance(coll, List):
        return List((*reversed(items), *coll))
    if isinstance(coll, Vector):
        return Vector((*coll, *items))
    raise NativeFunctionError("First argument to conj must be a list or vector.")


def seq(env: Environment, args: list[LispValue]) -> LispValue:
    """Coerce to a List; empty collections and strings become nil."""
    arg_count_eq(args, 1)
    x = args[0]
    match x:
        case _ if x is Nil:
            return Nil
        case Sequence() if not x:
            return Nil
        case List():
            return x
        case Vector():
            return List(x)
        case str() if not x:
            return Nil
        case str():
            return List(list(x))
    raise NativeFunctionError("Invalid argument")


# -------------------------------
# Hash maps
# -------------------------------
def hash_map(env: Environment, args: list[LispValue]) -> HashMap:
    return HashMap.from_arguments(args)


def assoc(env: Environment, args: list[LispValue]) -> HashMap:
    arg_count_gte(args, 1)
    return map_arg(args[0], "First argument").assoc(args[1:])


def dissoc(env: Environment, args: list[LispValue]) -> HashMap:
    arg_count_gte(args, 1)
    return map_arg(args[0], "First argument").dissoc(args[1:])


def get(env: Environment, args: list[LispValue]) -> LispValue:
    """(get m k) -> value for k, or nil when m is nil or k is missing."""
    arg_count_eq(args, 2)
    m, key = args
    if m is Nil:
        return Nil
    return map_arg(m, "First argument").get(key)


def contains(env: Environment, args: list[LispValue]) -> bool:
    arg_count_eq(args, 2)
    m, key = args
    if m is Nil:
        return False
    return map_arg(m, "First argument").contains(key)


def keys(env: Environment, args: list[LispValue]) -> List:
    arg_count_eq(args, 1)
    return List(map_arg(args[0]).keys())


def vals(env: Environment, args: list[LispValue]) -> List:
    arg_count_eq(args, 1)
    return List(map_arg(args[0]).values())


COLLECTION_BUILTINS = {
    "list": list_builtin,
    "vector": vector,
    "cons": cons,
    "concat": concat,
    "empty?": empty,
    "count": count,
    "nth": nth,
    "first": first,
    "rest": rest,
    "conj": conj,
    "seq": seq,
    "hash-map": hash_map,
    "assoc": assoc,
    "dissoc": dissoc,
    "get": get,
    "contains?": contains,
    "keys": keys,
    "vals": vals,
}
