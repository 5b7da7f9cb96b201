"""Per-call-site freshening of function types.

When a function-typed variable is applied, the bare variables sitting
directly in its parameter and return slots are renamed to fresh synthetic
names. Each application then unifies against its own copy, so an identity
function can be applied to a string at one site and a boolean at another.
Only the top-level slots are renamed; variables nested inside a parameter's
own function or object type stay shared across call sites.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from typeunify.types import Function, Type, Variable


@dataclass
class FreshNames:
    """Factory for synthetic variable names that never collide.

    Names are ``<base><marker><n>`` with a monotonic counter. Any name in
    ``reserved`` (the names used by the caller's constraints) and any
    name already handed out is skipped.
    """

    reserved: frozenset[str] = frozenset()
    marker: str = "'"
    _next_id: int = 0
    _issued: set[str] = field(default_factory=set)

    def fresh(self, base: str) -> str:
        """Create a fresh synthetic name derived from ``base``."""
        while True:
            self._next_id += 1
            name = f"{base}{self.marker}{self._next_id}"
            if name not in self.reserved and name not in self._issued:
                self._issued.add(name)
                return name

    def reserve(self, names: Iterable[str]) -> None:
        """Add names the generator must never produce."""
        self.reserved = self.reserved | frozenset(names)

    def is_synthetic(self, name: str) -> bool:
        """Check whether a name was produced by this generator."""
        return name in self._issued


def initialise(t: Type, fresh: FreshNames) -> tuple[Type, frozenset[str]]:
    """Freshen the top-level variables of a function type.

    Every parameter slot and the return slot that is directly a
    Variable is renamed; the same variable appearing in several slots
    gets the same fresh name. Anything that is not a Function is
    returned unchanged.

    Args:
        t: The type being applied.
        fresh: Generator for the synthetic names.

    Returns:
        The freshened type and the set of synthetic names it introduced.

    """
    if not isinstance(t, Function):
        return t, frozenset()

    renamed: dict[str, str] = {}

    def freshen(slot: Type) -> Type:
        if not isinstance(slot, Variable):
            return slot
        if slot.name not in renamed:
            renamed[slot.name] = fresh.fresh(slot.name)
        return Variable(renamed[slot.name])

    params = tuple(freshen(p) for p in t.params)
    returns = freshen(t.returns)
    return Function(params, returns), frozenset(renamed.values())
