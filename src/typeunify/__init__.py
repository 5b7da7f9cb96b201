"""typeunify - constraint-based type unification for literal-aware inference.

A front end walks a program, names each syntax node with a type variable
and emits constraints between those variables and literal or structural
types. This package folds the constraints into a substitution:

    from typeunify import Equals, StringLiteral, Variable, solve

    subst = solve([
        Equals(Variable("x"), Variable("y")),
        Equals(Variable("y"), StringLiteral("hello")),
    ])
    assert subst == {"x": StringLiteral("hello"), "y": StringLiteral("hello")}
"""

from typeunify.codecs import (
    from_builtins,
    substitution_from_builtins,
    to_builtins,
)
from typeunify.constraints import (
    Apply,
    Concat,
    Constraint,
    Equals,
    Index,
    apply,
    concat,
    constraint_summary,
    equals,
    index,
)
from typeunify.errors import TypeMismatchError
from typeunify.formats.json import (
    constraints_from_json,
    from_json,
    to_json,
)
from typeunify.instantiate import FreshNames, initialise
from typeunify.solver import Solver, solve
from typeunify.substitution import Substitution
from typeunify.types import (
    Boolean,
    BooleanLiteral,
    Function,
    Number,
    NumberLiteral,
    Object,
    String,
    StringLiteral,
    Type,
    Variable,
    format_type,
    free_variables,
)
from typeunify.unifier import unify

__all__ = [
    # Constraints
    "Apply",
    # Types
    "Boolean",
    "BooleanLiteral",
    "Concat",
    "Constraint",
    "Equals",
    # Instantiation
    "FreshNames",
    "Function",
    "Index",
    "Number",
    "NumberLiteral",
    "Object",
    # Solving
    "Solver",
    "String",
    "StringLiteral",
    "Substitution",
    "Type",
    # Errors
    "TypeMismatchError",
    "Variable",
    "apply",
    "concat",
    "constraint_summary",
    # Serialization
    "constraints_from_json",
    "equals",
    "format_type",
    "free_variables",
    "from_builtins",
    "from_json",
    "index",
    "initialise",
    "solve",
    "substitution_from_builtins",
    "to_builtins",
    "to_json",
    "unify",
]
