"""Function values: builtins implemented in Python, and user closures."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from mallet import EvaluatorFn, LispValue, SExpression
from mallet.errors import NativeFunctionError
from mallet.types.collections import equals
from mallet.types.environment import Environment
from mallet.types.nil import Nil
from mallet.types.symbol import Symbol

BuiltinFn = Callable[[Environment, list[LispValue]], LispValue]


class NativeFunction:
    """A Python callable `fn(env, args)` plus the environment it was built in."""

    __slots__ = ("name", "fn", "env", "meta")

    def __init__(self, name: str, fn: BuiltinFn, env: Environment, meta: LispValue = Nil):
        self.name = name
        self.fn = fn
        self.env = env
        self.meta = meta

    def __call__(self, args: list[LispValue]) -> LispValue:
        return self.fn(self.env, list(args))

    def with_meta(self, meta: LispValue) -> NativeFunction:
        return NativeFunction(self.name, self.fn, self.env, meta)

    def __eq__(self, other: object) -> bool:
        # Metadata is not part of a function's identity
        return isinstance(other, NativeFunction) and self.fn is other.fn and self.env is other.env

    def __hash__(self) -> int:
        return hash((id(self.fn), id(self.env)))

    def __repr__(self) -> str:
        return f"<native {self.name}>"


class Closure:
    """A first-class user function with parameters, body, and closure env."""

    __slots__ = ("params", "body", "env", "is_macro", "meta")

    def __init__(
        self,
        params: list[Symbol],
        body: SExpression,
        env: Environment,
        is_macro: bool = False,
        meta: LispValue = Nil,
    ):
        self.params: list[Symbol] = list(params)
        self.body: SExpression = body
        # Captured by reference, never copied
        self.env: Environment = env
        self.is_macro: bool = is_macro
        self.meta: LispValue = meta

    @classmethod
    def macro(cls, params: list[Symbol], body: SExpression, env: Environment) -> Closure:
        return cls(params, body, env, is_macro=True)

    def with_meta(self, meta: LispValue) -> Closure:
        return Closure(self.params, self.body, self.env, self.is_macro, meta)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Closure):
            return False
        return (
            self.env is other.env
            and self.is_macro == other.is_macro
            and self.params == other.params
            and equals(self.body, other.body)
        )

    def __hash__(self) -> int:
        return hash((tuple(self.params), id(self.env), self.is_macro))

    def extend_env(self, args: list[LispValue]) -> Environment:
        """Bind argument values to this closure's parameters in a fresh scope."""
        return Environment.with_binds(self.env, self.params, args)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(fn* (")
            buffer.write(" ".join(str(p) for p in self.params))
            buffer.write(") ")
            buffer.write(repr(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


def call_function(fn: LispValue, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply an already-evaluated function value to evaluated arguments.

    Used by builtins that call back into the language (apply, map, swap!).
    """
    if isinstance(fn, NativeFunction):
        return fn(args)
    if isinstance(fn, Closure):
        return evaluate_fn(fn.body, fn.extend_env(list(args)))
    raise NativeFunctionError("Expected function.")
