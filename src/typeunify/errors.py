"""Error raised when two types cannot be unified.

A mismatch is the only fatal condition. It aborts the whole solve and
carries both offending types plus, once the solver has seen it, the
constraint that was being folded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from typeunify.constraints import constraint_summary
from typeunify.types import format_type

if TYPE_CHECKING:
    from typeunify.constraints import Constraint
    from typeunify.types import Type


@dataclass(eq=False)
class TypeMismatchError(Exception):
    """Two non-variable types are structurally incompatible.

    Raised for different literal values, different kinds, and functions
    of different arity.
    """

    left: Type
    right: Type
    constraint: Constraint | None = None

    @property
    def left_kind(self) -> str:
        """Tag of the left type, e.g. ``strlit``."""
        return self.left.tag

    @property
    def right_kind(self) -> str:
        """Tag of the right type."""
        return self.right.tag

    def __str__(self) -> str:
        parts = [
            f"Types do not unify: {format_type(self.left)} ({self.left_kind}) "
            f"and {format_type(self.right)} ({self.right_kind})",
        ]
        if self.constraint is not None:
            parts.append(f"  in constraint: {constraint_summary(self.constraint)}")
        return "\n".join(parts)
