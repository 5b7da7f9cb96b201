"""Tests for Substitution application, extension and composition."""

import pytest

from typeunify import (
    BooleanLiteral,
    Function,
    Number,
    NumberLiteral,
    Object,
    StringLiteral,
    Substitution,
    TypeMismatchError,
    Variable,
)


class TestApply:
    """Applying a substitution to a type."""

    def test_replaces_bound_variables(self) -> None:
        sub = Substitution({"x": Number()})
        assert sub.apply(Variable("x")) == Number()
        assert sub.apply(Variable("y")) == Variable("y")  # Unbound stays unchanged

    def test_recurses_into_functions_and_objects(self) -> None:
        sub = Substitution({"x": Number()})
        t = Function([Variable("x")], Object({"k": Variable("x")}))
        assert sub.apply(t) == Function([Number()], Object({"k": Number()}))

    def test_literals_pass_through(self) -> None:
        sub = Substitution({"x": Number()})
        assert sub.apply(StringLiteral("x")) == StringLiteral("x")


class TestExtend:
    """Extending with a single binding."""

    def test_back_substitutes_into_existing_bindings(self) -> None:
        sub = Substitution({"x": Variable("y")})
        result = sub.extend("y", NumberLiteral(1))
        assert result == {"x": NumberLiteral(1), "y": NumberLiteral(1)}

    def test_applies_current_bindings_to_new_type(self) -> None:
        sub = Substitution({"y": NumberLiteral(1)})
        assert sub.extend("x", Variable("y")) == {
            "y": NumberLiteral(1),
            "x": NumberLiteral(1),
        }

    def test_reconciles_existing_binding(self) -> None:
        """A variable derived twice unifies both derivations."""
        sub = Substitution({"x": Variable("y")})
        result = sub.extend("x", StringLiteral("a"))
        assert result == {"x": StringLiteral("a"), "y": StringLiteral("a")}

    def test_conflicting_binding_raises(self) -> None:
        sub = Substitution({"x": StringLiteral("a")})
        with pytest.raises(TypeMismatchError):
            sub.extend("x", StringLiteral("b"))

    def test_repeated_binding_is_noop(self) -> None:
        sub = Substitution({"x": Number()})
        assert sub.extend("x", Number()) == {"x": Number()}

    def test_self_binding_is_noop(self) -> None:
        assert Substitution().extend("x", Variable("x")) == {}

    def test_does_not_mutate(self) -> None:
        sub = Substitution({"x": Variable("y")})
        sub.extend("y", Number())
        assert sub == {"x": Variable("y")}


class TestCompose:
    """Folding one substitution into another."""

    def test_folds_in_order(self) -> None:
        result = Substitution().compose(
            {"x": Variable("y"), "y": BooleanLiteral(True)},
        )
        assert result == {"x": BooleanLiteral(True), "y": BooleanLiteral(True)}

    def test_keeps_existing_bindings(self) -> None:
        sub = Substitution({"a": Number()})
        assert sub.compose(Substitution({"b": Number()})) == {
            "a": Number(),
            "b": Number(),
        }

    def test_conflict_raises(self) -> None:
        sub = Substitution({"x": NumberLiteral(1)})
        with pytest.raises(TypeMismatchError):
            sub.compose({"x": NumberLiteral(2)})


class TestMapping:
    """Substitution behaves as a read-only mapping."""

    def test_mapping_protocol(self) -> None:
        sub = Substitution({"x": Number()})
        assert "x" in sub
        assert len(sub) == 1
        assert sub.get("y") is None
        assert list(sub) == ["x"]

    def test_without(self) -> None:
        sub = Substitution({"x": Number(), "y": Number()})
        assert sub.without(["y"]) == {"x": Number()}
        assert "y" in sub

    def test_repr(self) -> None:
        assert repr(Substitution({"x": StringLiteral("s")})) == 'Substitution({x: "s"})'
