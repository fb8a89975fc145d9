from __future__ import annotations


class NullType:
    __slots__ = ()

    def __repr__(self): return "null"
    def __bool__(self): return False

    # Null is only ever equal to itself at the Python level; the language's
    # own `==` never treats two nulls as equal (see evaluation.operators).
    def __eq__(self, other):
        return isinstance(other, NullType)

    def __hash__(self):
        return hash(None)

    # A single instance survives environment cloning.
    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "Null"


Null = NullType()
