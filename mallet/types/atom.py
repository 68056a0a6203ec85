from __future__ import annotations

from mallet import LispValue


class Atom:
    """The single mutable cell. `value` is replaced in place by reset!/swap!."""

    __slots__ = ("value",)

    def __init__(self, value: LispValue):
        self.value = value

    def deref(self) -> LispValue:
        return self.value

    def reset(self, value: LispValue) -> LispValue:
        self.value = value
        return value

    def __repr__(self) -> str:
        return f"Atom({self.value!r})"
