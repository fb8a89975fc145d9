"""Runtime environment for Modu.

The Environment stores bindings of names to evaluated values. There is no
`outer` chain: a function call works on a structural clone of the caller's
environment, and an if-body works on the very same instance, so whatever a
call does stays inside the call while whatever an if-body does is visible
afterwards.
"""

from __future__ import annotations

import copy
from typing import Iterator, Optional

from modu import ModuValue
from modu.errors import ModuNameError
from modu.types.null import Null


class Environment:
    """Mutable mapping from names to Modu values."""

    __slots__ = ("vars", "bound_names")

    def __init__(self, bindings: Optional[dict[str, ModuValue]] = None):
        self.vars: dict[str, ModuValue] = dict(bindings or {})
        # Names bound on this instance since it was created, in binding order.
        self.bound_names: list[str] = []

    def define(self, name: str, value: ModuValue) -> None:
        """Bind `name` to `value`, replacing any previous binding."""
        self.vars[name] = value
        if name not in self.bound_names:
            self.bound_names.append(name)

    def lookup(self, name: str) -> ModuValue:
        """Return the value bound to `name`, or Null when it is unbound."""
        return self.vars.get(name, Null)

    def require(self, name: str, what: str = "Variable") -> ModuValue:
        """Return the value bound to `name`; raise ModuNameError if unbound."""
        try:
            return self.vars[name]
        except KeyError:
            raise ModuNameError(f"{what} {name} not found") from None

    def update(self, bindings: dict[str, ModuValue]) -> None:
        for name, value in bindings.items():
            self.define(name, value)

    def clone(self) -> Environment:
        """Structural copy: objects are duplicated, functions and primitives shared."""
        return Environment(copy.deepcopy(self.vars))

    def bound_since_creation(self) -> dict[str, ModuValue]:
        return {name: self.vars[name] for name in self.bound_names if name in self.vars}

    # --- Mapping protocol ---
    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __getitem__(self, name: str) -> ModuValue:
        return self.vars[name]

    def __setitem__(self, name: str, value: ModuValue) -> None:
        self.define(name, value)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def get(self, name: str, default: ModuValue = None) -> ModuValue:
        return self.vars.get(name, default)

    def items(self):
        return self.vars.items()

    def __repr__(self) -> str:
        return f"Environment({sorted(self.vars)})"
