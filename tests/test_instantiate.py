"""Tests for per-call-site freshening."""

from typeunify import (
    FreshNames,
    Function,
    Number,
    Object,
    Variable,
    initialise,
)


class TestFreshNames:
    """Tests for the synthetic name generator."""

    def test_counter_is_monotonic(self) -> None:
        fresh = FreshNames()
        assert fresh.fresh("x") == "x'1"
        assert fresh.fresh("y") == "y'2"

    def test_skips_reserved_names(self) -> None:
        fresh = FreshNames(reserved=frozenset({"x'1"}))
        assert fresh.fresh("x") == "x'2"

    def test_reserve_adds_names(self) -> None:
        fresh = FreshNames()
        fresh.reserve(["x'1", "x'2"])
        assert fresh.fresh("x") == "x'3"

    def test_custom_marker(self) -> None:
        fresh = FreshNames(marker="#")
        assert fresh.fresh("x") == "x#1"

    def test_is_synthetic(self) -> None:
        fresh = FreshNames()
        name = fresh.fresh("x")
        assert fresh.is_synthetic(name)
        assert not fresh.is_synthetic("x")


class TestInitialise:
    """Tests for freshening a function type."""

    def test_identity_shares_fresh_name(self) -> None:
        """The same variable in two slots gets the same fresh name."""
        t, synthetic = initialise(
            Function([Variable("x")], Variable("x")),
            FreshNames(),
        )
        assert t == Function([Variable("x'1")], Variable("x'1"))
        assert synthetic == {"x'1"}

    def test_distinct_variables_get_distinct_names(self) -> None:
        t, synthetic = initialise(
            Function([Variable("x"), Variable("y")], Number()),
            FreshNames(),
        )
        assert t == Function([Variable("x'1"), Variable("y'2")], Number())
        assert synthetic == {"x'1", "y'2"}

    def test_each_call_is_fresh(self) -> None:
        fresh = FreshNames()
        fn = Function([Variable("x")], Variable("x"))
        first, _ = initialise(fn, fresh)
        second, _ = initialise(fn, fresh)
        assert first != second

    def test_nested_positions_untouched(self) -> None:
        """Only top-level parameter and return slots are renamed."""
        inner = Function([Variable("x")], Variable("x"))
        record = Object({"k": Variable("z")})
        fn = Function([inner, record], Variable("y"))
        t, synthetic = initialise(fn, FreshNames())
        assert t == Function([inner, record], Variable("y'1"))
        assert synthetic == {"y'1"}

    def test_non_function_unchanged(self) -> None:
        t, synthetic = initialise(Variable("f"), FreshNames())
        assert t == Variable("f")
        assert synthetic == frozenset()
