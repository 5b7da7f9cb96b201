"""Substitutions mapping type variable names to types.

A substitution is immutable: ``extend`` and ``compose`` return new
substitutions. Each extension back-substitutes the new binding into every
existing value, so a lookup never yields a variable that has already been
resolved (provided constraints arrive in dependency order).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from typeunify.types import (
    Function,
    Object,
    Type,
    Variable,
    format_type,
)


class Substitution(Mapping[str, Type]):
    """A mapping from type variable names to types.

    Supports application (replacing variables with their bindings),
    extension with a single binding, and composition with another
    substitution. Compares equal to any mapping with the same items.
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Mapping[str, Type] | None = None) -> None:
        self._bindings: dict[str, Type] = dict(bindings) if bindings else {}

    def __getitem__(self, name: str) -> Type:
        return self._bindings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}: {format_type(v)}" for k, v in self._bindings.items())
        return f"Substitution({{{items}}})"

    def apply(self, t: Type) -> Type:
        """Apply the substitution to a type.

        Replaces every bound variable with its binding, recursing into
        function and object types. Base and literal types pass through.

        Args:
            t: The type to apply the substitution to.

        Returns:
            The type with all known variables replaced.

        """
        match t:
            case Variable(name=name):
                return self._bindings.get(name, t)
            case Function(params=params, returns=returns):
                return Function(
                    tuple(self.apply(p) for p in params),
                    self.apply(returns),
                )
            case Object(fields=fields):
                return Object({k: self.apply(v) for k, v in fields.items()})
            case _:
                return t

    def extend(self, name: str, t: Type) -> Substitution:
        """Add a binding, keeping every existing binding current.

        If ``name`` is already bound, the new type is unified against the
        bound one and the result composed in, so two derivations of the
        same variable are reconciled. Otherwise the binding is
        back-substituted into every existing value before being inserted.

        Args:
            name: The variable to bind.
            t: The type to bind it to.

        Returns:
            A new substitution containing the binding.

        Raises:
            TypeMismatchError: If the existing binding does not unify
                with ``t``.

        """
        # Import here to avoid circular dependency
        from typeunify.unifier import unify  # noqa: PLC0415

        if t == Variable(name):
            return self

        if name in self._bindings:
            bound = self._bindings[name]
            if bound == t:
                return self
            return self.compose(unify(t, bound))

        resolved = self.apply(t)
        if resolved == Variable(name):
            return self
        step =Substitution({name: resolved})
        bindings = {k: step.apply(v) for k, v in self._bindings.items()}
        bindings[name] = resolved
        return Substitution(bindings)

    def compose(self, other: Mapping[str, Type]) -> Substitution:
        """Fold every binding of ``other`` into this substitution.

        Bindings are extended one at a time in ``other``'s order, which
        decides which derivation wins when two of them collide.

        Args:
            other: The substitution to fold in.

        Returns:
            A new substitution representing the composition.

        """
        result = self
        for name, t in other.items():
            result = result.extend(name, t)
        return result

    def without(self, names: Iterable[str]) -> Substitution:
        """Return a copy with the given variables dropped."""
        dropped = frozenset(names)
        return Substitution(
            {k: v for k, v in self._bindings.items() if k not in dropped},
        )
