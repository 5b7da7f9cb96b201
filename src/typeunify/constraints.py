"""Typing constraints consumed by the solver.

Constraints express relationships between types that must hold. A front
end emits them in dependency order and the solver folds them exactly once,
in that order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, dataclass_transform

from typeunify.types import Type, format_type, free_variables


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class ConstraintBase:
    """Base for constraint variants."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[ConstraintBase]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register constraint subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := ConstraintBase.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        ConstraintBase.registry[cls.tag] = cls


class Equals(ConstraintBase, tag="eq"):
    """Two types must unify.

    The workhorse constraint: a node's variable equals a literal, or two
    nodes are aliased to each other.
    """

    left: Type
    right: Type


class Apply(ConstraintBase, tag="apply"):
    """Calling func with args must produce ret.

    The function type is freshened per call site before unification, so
    one polymorphic binding serves many applications.
    """

    func: Type
    args: tuple[Type, ...]
    ret: Type

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))


class Concat(ConstraintBase, tag="concat"):
    """ret is the concatenation of first and second once both are string literals."""

    first: Type
    second: Type
    ret: Type


class Index(ConstraintBase, tag="index"):
    """ret is the field of obj named by the string literal field."""

    obj: Type
    field: Type
    ret: Type


type Constraint = Equals | Apply | Concat | Index
"""Union type for constraints."""


def equals(left: Type, right: Type) -> Equals:
    """Build an equality constraint."""
    return Equals(left, right)


def apply(func: Type, args: Sequence[Type], ret: Type) -> Apply:
    """Build an application constraint."""
    return Apply(func, tuple(args), ret)


def concat(first: Type, second: Type, ret: Type) -> Concat:
    """Build a string concatenation constraint."""
    return Concat(first, second, ret)


def index(obj: Type, field: Type, ret: Type) -> Index:
    """Build a field access constraint."""
    return Index(obj, field, ret)


def constraint_summary(constraint: Constraint) -> str:
    """Generate a one-line summary of a constraint for debugging."""
    match constraint:
        case Equals(left=left, right=right):
            return f"{format_type(left)} = {format_type(right)}"
        case Apply(func=func, args=args, ret=ret):
            args_str = ", ".join(format_type(a) for a in args)
            return f"{format_type(func)}({args_str}) -> {format_type(ret)}"
        case Concat(first=first, second=second, ret=ret):
            joined = f"{format_type(first)} ++ {format_type(second)}"
            return f"{joined} -> {format_type(ret)}"
        case Index(obj=obj, field=field, ret=ret):
            return f"{format_type(obj)}[{format_type(field)}] -> {format_type(ret)}"


def constraint_variables(constraint: Constraint) -> frozenset[str]:
    """Collect every variable name a constraint mentions."""
    match constraint:
        case Equals(left=left, right=right):
            operands: tuple[Type, ...] = (left, right)
        case Apply(func=func, args=args, ret=ret):
            operands = (func, *args, ret)
        case Concat(first=first, second=second, ret=ret):
            operands = (first, second, ret)
        case Index(obj=obj, field=field, ret=ret):
            operands = (obj, field, ret)
    return frozenset().union(*(free_variables(t) for t in operands))
