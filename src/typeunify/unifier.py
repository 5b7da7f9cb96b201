"""Structural unification of two types.

Finds the minimal substitution making two types equal. Variables bind to
whatever sits opposite them, literal types unify only with an identical
literal, and function types unify slot by slot when their arity matches.

There is no occurs check: the type algebra cannot express a recursive
type, so a variable can never end up inside its own binding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typeunify.errors import TypeMismatchError
from typeunify.substitution import Substitution
from typeunify.types import Function, Variable

if TYPE_CHECKING:
    from typeunify.types import Type


def unify(left: Type, right: Type) -> Substitution:
    """Unify two types.

    Rules, checked in order:
    1. A variable on the left binds to the right side, even when the
       right side is also a variable.
    2. A variable on the right is handled by swapping sides.
    3. Structurally identical types need no bindings.
    4. Functions of equal arity unify their return types first, then
       fold in each parameter pair from left to right.

    Args:
        left: The first type.
        right: The second type.

    Returns:
        A Substitution making the two types equal.

    Raises:
        TypeMismatchError: If the types cannot be made equal.

    Examples:
        >>> unify(Variable("x"), StringLiteral("s"))
        Substitution({x: "s"})

    """
    match (left, right):
        case (Variable(name=name), _):
            return Substitution({name: right})

        case (_, Variable()):
            return unify(right, left)

        case (l, r) if l == r:
            return Substitution()

        case (
            Function(params=lparams, returns=lreturns),
            Function(params=rparams, returns=rreturns),
        ) if len(lparams) == len(rparams):
            result = unify(lreturns, rreturns)
            for lparam, rparam in zip(lparams, rparams, strict=True):
                result = result.compose(unify(lparam, rparam))
            return result

    raise TypeMismatchError(left, right)
