"""Immutable collection values: List, Vector and HashMap.

Lists and vectors are tuple subclasses, so slicing and concatenation share the
element objects rather than copying them. Every "update" builds a new
container; the only mutable value in the language is the Atom.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from mallet import LispValue
from mallet.errors import ParserError
from mallet.types.atom import Atom
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword


class Sequence(tuple):
    """Shared base for List and Vector. Carries optional metadata."""

    meta: LispValue = Nil

    def __new__(cls, items: Iterable[LispValue] = (), meta: LispValue = Nil):
        seq = super().__new__(cls, items)
        if meta is not Nil:
            seq.meta = meta
        return seq

    def with_meta(self, meta: LispValue) -> Sequence:
        return type(self)(self, meta)

    def __eq__(self, other: object) -> bool:
        return equals(self, other)

    def __ne__(self, other: object) -> bool:
        return not equals(self, other)

    __hash__ = tuple.__hash__

    def __getitem__(self, index):
        result = super().__getitem__(index)
        if isinstance(index, slice):
            return type(self)(result)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class List(Sequence):
    """An ordered sequence written `( ... )`. Evaluated as an application."""


class Vector(Sequence):
    """An ordered sequence written `[ ... ]`. Evaluates element-wise."""


def _canonical_key(key: LispValue) -> Optional[str]:
    """Type-tagged token for a map key, or None if `key` cannot be one."""
    if isinstance(key, str):
        return "s" + key
    if isinstance(key, Keyword):
        return "k" + key.id
    return None


class HashMap:
    """Associative map keyed by strings and keywords.

    Internally keyed by a canonical token so strings and keywords with the same
    text stay distinct; the original key value is kept next to its value so
    callers see the key they stored.
    """

    __slots__ = ("_entries", "meta")

    def __init__(
        self,
        entries: Optional[dict[str, tuple[LispValue, LispValue]]] = None,
        meta: LispValue = Nil,
    ):
        self._entries: dict[str, tuple[LispValue, LispValue]] = entries if entries is not None else {}
        self.meta: LispValue = meta

    @classmethod
    def from_arguments(cls, arguments: list[LispValue] | tuple) -> HashMap:
        """Build a map from an alternating key/value argument sequence."""
        return cls()._with_pairs(arguments)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[LispValue, LispValue]]) -> HashMap:
        flat: list[LispValue] = []
        for key, value in pairs:
            flat.append(key)
            flat.append(value)
        return cls.from_arguments(flat)

    def _with_pairs(self, arguments) -> HashMap:
        if len(arguments) % 2 != 0:
            raise ParserError("hash map must have an even number of arguments")
        entries = dict(self._entries)
        for i in range(0, len(arguments), 2):
            token = _canonical_key(arguments[i])
            if token is None:
                raise ParserError("hash map keys must be strings or keywords")
            entries[token] = (arguments[i], arguments[i + 1])
        return HashMap(entries)

    # --- Persistent updates ---
    def assoc(self, arguments) -> HashMap:
        return self._with_pairs(arguments)

    def dissoc(self, keys) -> HashMap:
        entries = dict(self._entries)
        for key in keys:
            token = _canonical_key(key)
            if token is None:
                raise ParserError("hash map keys must be strings or keywords")
            entries.pop(token, None)
        return HashMap(entries)

    def with_meta(self, meta: LispValue) -> HashMap:
        return HashMap(self._entries, meta)

    # --- Queries ---
    def get(self, key: LispValue, default: LispValue = Nil) -> LispValue:
        token = _canonical_key(key)
        if token is None or token not in self._entries:
            return default
        return self._entries[token][1]

    def contains(self, key: LispValue) -> bool:
        token = _canonical_key(key)
        return token is not None and token in self._entries

    def keys(self) -> list[LispValue]:
        return [k for k, _ in self._entries.values()]

    def values(self) -> list[LispValue]:
        return [v for _, v in self._entries.values()]

    def items(self) -> Iterator[tuple[LispValue, LispValue]]:
        return iter(self._entries.values())

    def tokens(self) -> set[str]:
        return set(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        return equals(self, other)

    def __ne__(self, other: object) -> bool:
        return not equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashMap({{{inner}}})"


def _is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def equals(a: LispValue, b: LispValue) -> bool:
    """Language-level `=`.

    Lists and vectors compare element-wise with each other. Maps compare key
    sets and then values. Atoms never compare equal, not even to themselves.
    Everything else needs the same variant and payload.
    """
    if isinstance(a, Atom) or isinstance(b, Atom):
        return False
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, Sequence) and isinstance(b, Sequence):
        if len(a) != len(b):
            return False
        return all(equals(x, y) for x, y in zip(a, b))
    if isinstance(a, HashMap) and isinstance(b, HashMap):
        if a._entries.keys() != b._entries.keys():
            return False
        return all(equals(a._entries[t][1], b._entries[t][1]) for t in a._entries)
    if _is_number(a) and _is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b
