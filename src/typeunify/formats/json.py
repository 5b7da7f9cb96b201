"""JSON format adapter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from typeunify.codecs import from_builtins, to_builtins
from typeunify.constraints import ConstraintBase

if TYPE_CHECKING:
    from typeunify.constraints import Constraint
    from typeunify.types import Type


def to_json(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize a Type, Constraint, Substitution, or list of them to JSON.

    Args:
        obj: The object to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    """
    return json.dumps(to_builtins(obj), indent=indent)


def from_json(s: str) -> Type | Constraint:
    """Deserialize a JSON string to a Type or Constraint.

    Raises:
        ValueError: If the JSON doesn't contain a valid tagged object
        KeyError: If required 'tag' field is missing

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = "Expected JSON object with 'tag' field"
        raise ValueError(msg)
    return from_builtins(data)


def constraints_from_json(s: str) -> list[Constraint]:
    """Deserialize a JSON array of tagged constraints.

    This is the hand-off point for a constraint generator running
    outside Python.

    Raises:
        ValueError: If the JSON is not an array of constraint objects

    """
    data = json.loads(s)
    if not isinstance(data, list):
        msg = "Expected JSON array of constraints"
        raise ValueError(msg)

    constraints: list[Constraint] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            msg = f"Expected constraint object at index {i}, got {type(item).__name__}"
            raise ValueError(msg)
        decoded = from_builtins(item)
        if not isinstance(decoded, ConstraintBase):
            msg = f"Expected constraint at index {i}, got type '{decoded.tag}'"
            raise ValueError(msg)
        constraints.append(decoded)  # type: ignore[arg-type]
    return constraints
