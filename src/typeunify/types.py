"""Type expressions for the unification engine.

Every variant is a frozen dataclass registered under a short tag. The tag
is the discriminant used by error messages and by the codecs, so the set of
variants is closed: registering a second class under an existing tag fails.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeBase:
    """Base for type variants."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[TypeBase]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register type subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__

        if (existing := TypeBase.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        TypeBase.registry[cls.tag] = cls

    def __str__(self) -> str:
        return format_type(self)  # type: ignore[arg-type]


class Number(TypeBase, tag="num"):
    """Any number."""


class String(TypeBase, tag="str"):
    """Any string."""


class Boolean(TypeBase, tag="bool"):
    """Any boolean."""


class NumberLiteral(TypeBase, tag="numlit"):
    """A single number value: 1 → NumberLiteral(1)."""

    value: int | float


class StringLiteral(TypeBase, tag="strlit"):
    """A single string value: "a" → StringLiteral("a")."""

    value: str


class BooleanLiteral(TypeBase, tag="boollit"):
    """A single boolean value: true → BooleanLiteral(True)."""

    value: bool


class Variable(TypeBase, tag="var"):
    """A placeholder resolved by the substitution.

    Identity is the name. Front ends alias two syntax nodes by giving
    them the same variable name.
    """

    name: str


class Function(TypeBase, tag="func"):
    """Function type: (a, b) => r → Function((a, b), r).

    Arity is part of the identity; params are always stored as a tuple.
    """

    params: tuple[Type, ...]
    returns: Type

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, "params", tuple(self.params))


class Object(TypeBase, tag="obj"):
    """Record type: { a: number } → Object({"a": Number()}).

    Fields are unordered; the mapping is frozen on construction.
    """

    fields: Mapping[str, Type]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(frozenset(self.fields.items()))


type LiteralType = NumberLiteral | StringLiteral | BooleanLiteral
"""Singleton types carrying a value."""

type Type = (
    Number
    | String
    | Boolean
    | NumberLiteral
    | StringLiteral
    | BooleanLiteral
    | Variable
    | Function
    | Object
)
"""Union type for type expressions."""


def format_type(t: Type) -> str:
    """Convert a type to a human-readable string.

    Examples:
        >>> format_type(Function([Variable("x")], Variable("x")))
        '(x) => x'
        >>> format_type(Object({"name": StringLiteral("pete")}))
        '{ name: "pete" }'

    """
    match t:
        case Number():
            return "number"
        case String():
            return "string"
        case Boolean():
            return "boolean"
        case BooleanLiteral(value=value):
            return "true" if value else "false"
        case NumberLiteral(value=value):
            return repr(value)
        case StringLiteral(value=value):
            return json.dumps(value)
        case Variable(name=name):
            return name
        case Function(params=params, returns=returns):
            params_str = ", ".join(format_type(p) for p in params)
            return f"({params_str}) => {format_type(returns)}"
        case Object(fields=fields):
            if not fields:
                return "{}"
            fields_str = ", ".join(f"{k}: {format_type(v)}" for k, v in fields.items())
            return f"{{ {fields_str} }}"


def free_variables(t: Type) -> frozenset[str]:
    """Collect the name of every variable occurring in a type."""
    match t:
        case Variable(name=name):
            return frozenset((name,))
        case Function(params=params, returns=returns):
            return frozenset().union(
                free_variables(returns),
                *(free_variables(p) for p in params),
            )
        case Object(fields=fields):
            return frozenset().union(*(free_variables(f) for f in fields.values()))
        case _:
            return frozenset()
