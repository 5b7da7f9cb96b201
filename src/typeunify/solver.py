"""Constraint solver folding constraints into a substitution.

The solver makes exactly one left-to-right pass. Each constraint kind has
its own policy:

- Equals unifies both sides.
- Apply freshens the applied function type for this call site, unifies it
  against the call's shape and discards the synthetic bindings.
- Concat and Index only contribute once their operands are already
  literal (or object) types; otherwise they are skipped for good.

A type mismatch aborts the whole solve. Skipped constraints are not errors:
they are logged at DEBUG and recorded on the Solver for inspection.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from typeunify.constraints import (
    Apply,
    Concat,
    Constraint,
    Equals,
    Index,
    constraint_summary,
    constraint_variables,
)
from typeunify.errors import TypeMismatchError
from typeunify.instantiate import FreshNames, initialise
from typeunify.substitution import Substitution
from typeunify.types import Function, Object, StringLiteral, Type, format_type
from typeunify.unifier import unify

logger = logging.getLogger(__name__)


@dataclass
class Solver:
    """Folds an ordered list of constraints into a substitution.

    Attributes:
        fresh: Generator for per-call-site synthetic names. Every
            variable name appearing in the solved constraints is
            reserved on it before solving starts.
        subst: The substitution accumulated so far.
        skipped: Concat and Index constraints that contributed nothing
            because their operands were unresolved or the field was
            absent.

    """

    fresh: FreshNames = field(default_factory=FreshNames)
    subst: Substitution = field(default_factory=Substitution)
    skipped: list[Constraint] = field(default_factory=list)

    def solve(self, constraints: Iterable[Constraint]) -> Substitution:
        """Solve all constraints in order.

        Args:
            constraints: The constraints, in dependency order.

        Returns:
            The final substitution.

        Raises:
            TypeMismatchError: If any constraint cannot be satisfied. The
                failing constraint is attached to the error.

        """
        constraints = list(constraints)
        self.fresh.reserve(
            frozenset().union(*(constraint_variables(c) for c in constraints)),
        )

        for constraint in constraints:
            logger.debug("folding %s", constraint_summary(constraint))
            try:
                self.subst = self._fold(constraint)
            except TypeMismatchError as exc:
                logger.debug("mismatch in %s: %s", constraint_summary(constraint), exc)
                if exc.constraint is not None:
                    raise
                raise dataclasses.replace(exc, constraint=constraint) from exc

        return self.subst

    def _fold(self, constraint: Constraint) -> Substitution:
        """Fold one constraint into the current substitution."""
        match constraint:
            case Equals(left=left, right=right):
                return self.subst.compose(unify(left, right))
            case Apply():
                return self._apply(constraint)
            case Concat():
                return self._concat(constraint)
            case Index():
                return self._index(constraint)

    def _apply(self, constraint: Apply) -> Substitution:
        """Unify a call site against a freshened copy of the function type."""
        func, synthetic = initialise(self.subst.apply(constraint.func), self.fresh)
        application = unify(func, Function(constraint.args, constraint.ret))
        return self.subst.compose(application.without(synthetic))

    def _concat(self, constraint: Concat) -> Substitution:
        """Bind ret to the concatenated literal once both operands are known."""
        first = self.subst.apply(constraint.first)
        second = self.subst.apply(constraint.second)
        if isinstance(first, StringLiteral) and isinstance(second, StringLiteral):
            joined = StringLiteral(first.value + second.value)
            return self.subst.compose(unify(constraint.ret, joined))
        return self._skip(constraint, first, second)

    def _index(self, constraint: Index) -> Substitution:
        """Bind ret to the named field once the object and field are known."""
        obj = self.subst.apply(constraint.obj)
        name = self.subst.apply(constraint.field)
        if (
            isinstance(obj, Object)
            and isinstance(name, StringLiteral)
            and name.value in obj.fields
        ):
            return self.subst.compose(unify(constraint.ret, obj.fields[name.value]))
        return self._skip(constraint, obj, name)

    def _skip(self, constraint: Constraint, *operands: Type) -> Substitution:
        """Record a constraint that contributes nothing."""
        logger.debug(
            "skipping %s: operands resolved to %s",
            constraint_summary(constraint),
            ", ".join(format_type(o) for o in operands),
        )
        self.skipped.append(constraint)
        return self.subst


def solve(constraints: Iterable[Constraint]) -> Substitution:
    """Solve a list of typing constraints.

    Processes constraints in order, threading one substitution through
    them. Constraints must be supplied so that anything referring to a
    node's type comes after the constraints establishing it.

    Args:
        constraints: The constraints to solve.

    Returns:
        A Substitution mapping each resolved variable name to its type.

    Raises:
        TypeMismatchError: If two constraints are structurally
            incompatible. No partial substitution is returned.

    Example:
        solve([
            Equals(Variable("x"), Variable("y")),
            Equals(Variable("y"), StringLiteral("hello")),
        ])
        # Substitution({x: "hello", y: "hello"})

    """
    return Solver().solve(constraints)
