"""Enumerations for localeforge type-safe constants.

ScalarType and Arity are ordered lattices: every unification step widens an
observation with ``widen()``, which is ``max`` over the member order. The
fold over all locales is therefore associative and commutative, and the
result does not depend on the order in which locales are visited.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class ScalarType(IntEnum):
    """Element type of a canonical field.

    Ordered ``INTEGER < STRING``: once any locale supplies text for a key the
    canonical type is permanently STRING.
    """

    INTEGER = 1
    """All observed values were Integer literals: first_weekday 2"""

    STRING = 2
    """At least one textual value (String or Raw): d_fmt "%d/%m/%y" """

    def widen(self, other: "ScalarType") -> "ScalarType":
        """Return the least upper bound of two scalar types."""
        return max(self, other)

    @property
    def python_type(self) -> str:
        """Python type name used by the emitter."""
        return "int" if self is ScalarType.INTEGER else "str"


class Arity(IntEnum):
    """Shape of a canonical field.

    Ordered ``SCALAR < ARRAY < MATRIX``: arity only ever widens.
    """

    SCALAR = 1
    """One value: d_fmt "%d/%m/%y" """

    ARRAY = 2
    """One run of several values: grouping 3;3"""

    MATRIX = 3
    """Several runs under the same key, one row each."""

    def widen(self, other: "Arity") -> "Arity":
        """Return the least upper bound of two arities."""
        return max(self, other)


class CategoryKind(StrEnum):
    """How a parsed category participates in unification.

    StrEnum provides automatic string conversion: str(CategoryKind.LINK) == "link"
    """

    FIELDS = "fields"
    """Genuine key/value table."""

    LINK = "link"
    """Sole copy/include directive aliasing another locale's category."""


__all__ = [
    "Arity",
    "CategoryKind",
    "ScalarType",
]
