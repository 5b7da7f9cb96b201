"""Builtins conversion for types, constraints and substitutions.

Types and constraints encode as tagged dicts: ``{"tag": "<tag>", ...fields}``.
A substitution encodes as a plain dict of variable name to encoded type.
Decoding looks the tag up in the type and constraint registries, so a
front end running in another process can emit constraints as JSON.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import fields
from typing import Any

from typeunify.constraints import Constraint, ConstraintBase
from typeunify.substitution import Substitution
from typeunify.types import Type, TypeBase

_TAG_KEY = "tag"


def to_builtins(obj: Any) -> Any:
    """Convert a type, constraint or substitution to JSON-compatible builtins.

    Args:
        obj: A Type, Constraint, Substitution, or a list of them

    Returns:
        JSON-compatible Python value (dict, list, str, int, float, bool)

    """
    # 1. Substitutions (checked before generic mappings: no tag)
    if isinstance(obj, Substitution):
        return {name: to_builtins(t) for name, t in obj.items()}

    # 2. Tagged variants
    if isinstance(obj, TypeBase | ConstraintBase):
        result: dict[str, Any] = {_TAG_KEY: obj.tag}
        for f in fields(obj):
            result[f.name] = to_builtins(getattr(obj, f.name))
        return result

    # 3. Sequences (tuples of params/args become JSON arrays)
    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    # 4. Mappings (object fields)
    if isinstance(obj, Mapping):
        return {k: to_builtins(v) for k, v in obj.items()}

    # 5. Primitives pass through
    return obj


def from_builtins(data: dict[str, Any]) -> Type | Constraint:
    """Deserialize a tagged dict to a Type or Constraint.

    Args:
        data: Dict with 'tag' field

    Returns:
        Deserialized Type or Constraint

    Raises:
        KeyError: If 'tag' field is missing
        ValueError: If tag is unknown

    """
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)
    tag = data[_TAG_KEY]
    if tag in TypeBase.registry:
        return _deserialize(TypeBase.registry[tag], data)  # type: ignore[return-value]
    if tag in ConstraintBase.registry:
        return _deserialize(ConstraintBase.registry[tag], data)  # type: ignore[return-value]
    msg = f"Unknown tag '{tag}'"
    raise ValueError(msg)


def substitution_from_builtins(data: Mapping[str, Any]) -> Substitution:
    """Deserialize a ``{name: <type>}`` dict to a Substitution."""
    bindings: dict[str, Type] = {}
    for name, value in data.items():
        decoded = _deserialize_value(value)
        if not isinstance(decoded, TypeBase):
            msg = f"Binding for '{name}' is not a type: {value!r}"
            raise ValueError(msg)
        bindings[name] = decoded  # type: ignore[assignment]
    return Substitution(bindings)


def _deserialize(cls: type[TypeBase | ConstraintBase], data: dict[str, Any]) -> Any:
    """Deserialize a tagged dict into an instance of ``cls``."""
    field_values = {}
    for field in fields(cls):
        if field.name not in data:
            msg = f"Missing field '{field.name}' for tag '{cls.tag}'"
            raise KeyError(msg)
        field_values[field.name] = _deserialize_value(data[field.name])
    return cls(**field_values)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a field value, decoding nested tagged dicts."""
    if isinstance(value, dict) and isinstance(value.get(_TAG_KEY), str):
        return from_builtins(value)

    # Lists: params and args
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)

    # Dicts without tags: object fields
    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}

    return value
