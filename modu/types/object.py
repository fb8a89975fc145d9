"""The single composite value kind of Modu: records and arrays."""

from __future__ import annotations

import copy
from collections import UserDict
from typing import Iterable, Iterator

from modu import ModuValue
from modu.errors import ModuTypeError

LENGTH_KEY = "length"


class ModuObject(UserDict):
    """A string-keyed mapping of properties.

    Arrays are ordinary objects keyed "0", "1", ... plus "length". The
    `is_array` marker only changes how the object renders and encodes.
    `methods` names the keys that hold injected native methods; those keys
    never print and never serialize.
    """

    def __init__(self, properties=None, *, is_array: bool = False, methods: Iterable[str] = ()):
        super().__init__(properties or {})
        self.is_array: bool = is_array
        self.methods: frozenset[str] = frozenset(methods)

    # Identity equality keeps objects usable as distinct values; structural
    # comparison goes through `.data`.
    def __eq__(self, other):
        if isinstance(other, ModuObject):
            return self is other
        return super().__eq__(other)

    def __hash__(self):
        return id(self)

    def __deepcopy__(self, memo):
        clone = ModuObject(is_array=self.is_array, methods=self.methods)
        memo[id(self)] = clone
        clone.data = copy.deepcopy(self.data, memo)
        return clone

    def __repr__(self):
        from modu.printer import to_display
        return to_display(self)

    def plain_items(self) -> Iterator[tuple[str, ModuValue]]:
        """Properties excluding injected methods."""
        for key, value in self.data.items():
            if key not in self.methods:
                yield key, value

    # --- Array helpers ---
    @classmethod
    def new_array(cls, items: Iterable[ModuValue] = ()) -> ModuObject:
        arr = cls({LENGTH_KEY: 0}, is_array=True)
        for item in items:
            arr.push(item)
        return arr

    @property
    def length(self) -> int:
        length = self.data.get(LENGTH_KEY)
        if isinstance(length, bool) or not isinstance(length, int):
            raise ModuTypeError("corrupted array")
        return length

    def elements(self) -> list[ModuValue]:
        items = []
        for i in range(self.length):
            key = str(i)
            if key not in self.data:
                raise ModuTypeError("corrupted array")
            items.append(self.data[key])
        return items

    def _reindex(self, items: list[ModuValue]) -> None:
        for i in range(self.length):
            self.data.pop(str(i), None)
        for i, item in enumerate(items):
            self.data[str(i)] = item
        self.data[LENGTH_KEY] = len(items)

    def push(self, item: ModuValue) -> None:
        length = self.length
        self.data[str(length)] = item
        self.data[LENGTH_KEY] = length + 1

    def pop(self, *args) -> ModuValue:
        # MutableMapping.pop(key[, default]) stays available for plain keys.
        if args:
            return super().pop(*args)
        length = self.length
        if length < 1:
            raise ModuTypeError("empty array")
        key = str(length - 1)
        if key not in self.data:
            raise ModuTypeError("corrupted array")
        last = self.data.pop(key)
        self.data[LENGTH_KEY] = length - 1
        return last

    def shift(self) -> ModuValue:
        items = self.elements()
        if not items:
            raise ModuTypeError("empty array")
        first = items.pop(0)
        self._reindex(items)
        return first

    def unshift(self, item: ModuValue) -> None:
        items = self.elements()
        self._reindex([item] + items)


def copy_value(value: ModuValue) -> ModuValue:
    """Objects are values: binding or storing one stores an independent copy."""
    if isinstance(value, ModuObject):
        return copy.deepcopy(value)
    return value
