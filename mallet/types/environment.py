"""Runtime environment for Mallet.

The Environment stores bindings of Symbols to evaluated values and supports
nested lexical scopes via an `outer` link. Environments are shared by
reference: a closure keeps the environment it was created in alive, and
later `def!`s into that environment are visible to it.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

from mallet import LispValue
from mallet.errors import ArityError, EvaluationError, UndefinedSymbol
from mallet.types.collections import List
from mallet.types.symbol import Symbol

# Parameter marker that collects the remaining arguments into a List
VARIADIC_MARKER = Symbol("&")


def _as_symbol(name: Symbol | str) -> Symbol:
    return name if isinstance(name, Symbol) else Symbol(name)


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    @classmethod
    def new(cls) -> Environment:
        """An empty root environment."""
        return cls()

    @classmethod
    def with_outer(cls, outer: Environment) -> Environment:
        """An empty environment chained to `outer`."""
        return cls(outer)

    @classmethod
    def with_binds(
        cls,
        outer: Optional[Environment],
        params: Sequence[Symbol],
        args: Sequence[LispValue],
    ) -> Environment:
        """Chain a new scope to `outer` binding params[i] to args[i].

        A `&` marker binds the following parameter to a List of all remaining
        arguments. Without it the argument count must match exactly.
        """
        env = cls(outer)
        params = list(params)
        if VARIADIC_MARKER in params:
            split = params.index(VARIADIC_MARKER)
            fixed, rest = params[:split], params[split + 1:]
            if len(rest) != 1:
                raise EvaluationError("'&' must be followed by exactly one parameter")
            if len(args) < len(fixed):
                raise ArityError(
                    f"expected at least {len(fixed)} argument{'' if len(fixed) == 1 else 's'}, got {len(args)}"
                )
            for name, value in zip(fixed, args):
                env.set(name, value)
            env.set(rest[0], List(args[len(fixed):]))
            return env

        if len(params) != len(args):
            raise ArityError(
                f"expected {len(params)} argument{'' if len(params) == 1 else 's'}, got {len(args)}"
            )
        for name, value in zip(params, args):
            env.set(name, value)
        return env

    def set(self, name: Symbol | str, value: LispValue) -> LispValue:
        """Bind `name` in this frame only, replacing any existing binding."""
        self.vars[_as_symbol(name)] = value
        return value

    def find(self, name: Symbol | str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        symbol = _as_symbol(name)
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol | str) -> LispValue:
        """Look up `name` here, then in each outer environment in turn.

        Raises UndefinedSymbol if the chain is exhausted.
        """
        symbol = _as_symbol(name)
        env = self.find(symbol)
        if env is None:
            raise UndefinedSymbol(symbol.id)
        return env.vars[symbol]

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-bind a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.set(k, v)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation listing only the names bound in each frame."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            chain.append("{" + ", ".join(str(k) for k in env.vars) + "}")
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
