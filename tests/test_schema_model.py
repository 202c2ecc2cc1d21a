"""Tests for the unified model: lattices, canonical fields, tables and links."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from localeforge.diagnostics import CyclicAliasError
from localeforge.enums import Arity, ScalarType
from localeforge.schema import (
    CanonicalField,
    CanonicalSchema,
    CategoryLink,
    CategoryTable,
    UnifiedLocales,
)

canonical_fields = st.builds(
    CanonicalField,
    key=st.just("KEY"),
    scalar_type=st.sampled_from(ScalarType),
    arity=st.sampled_from(Arity),
    optional=st.booleans(),
)

# ============================================================================
# LATTICES
# ============================================================================


class TestLattices:
    """ScalarType and Arity only widen."""

    def test_scalar_type_order(self) -> None:
        """INTEGER < STRING."""
        assert ScalarType.INTEGER.widen(ScalarType.STRING) is ScalarType.STRING
        assert ScalarType.INTEGER.widen(ScalarType.INTEGER) is ScalarType.INTEGER

    def test_arity_order(self) -> None:
        """SCALAR < ARRAY < MATRIX."""
        assert Arity.ARRAY.widen(Arity.SCALAR) is Arity.ARRAY
        assert Arity.MATRIX.widen(Arity.ARRAY) is Arity.MATRIX

    def test_python_type(self) -> None:
        """Emitter element types."""
        assert ScalarType.INTEGER.python_type == "int"
        assert ScalarType.STRING.python_type == "str"


class TestCanonicalField:
    """Widening and rendering of canonical entries."""

    @given(canonical_fields, canonical_fields, canonical_fields)
    def test_widen_is_associative(
        self, a: CanonicalField, b: CanonicalField, c: CanonicalField
    ) -> None:
        """(a v b) v c == a v (b v c)."""
        assert a.widen(b).widen(c) == a.widen(b.widen(c))

    @given(canonical_fields, canonical_fields)
    def test_widen_is_commutative(self, a: CanonicalField, b: CanonicalField) -> None:
        """a v b == b v a."""
        assert a.widen(b) == b.widen(a)

    @given(canonical_fields)
    def test_widen_is_idempotent(self, a: CanonicalField) -> None:
        """a v a == a."""
        assert a.widen(a) == a

    @given(canonical_fields, canonical_fields)
    def test_widen_never_narrows(self, a: CanonicalField, b: CanonicalField) -> None:
        """The result is at least as wide as either input."""
        result = a.widen(b)

        assert result.scalar_type >= a.scalar_type
        assert result.arity >= a.arity
        assert result.optional >= a.optional

    def test_widen_different_keys(self) -> None:
        """Entries of different keys cannot be combined."""
        a = CanonicalField("A", ScalarType.STRING, Arity.SCALAR, False)
        b = CanonicalField("B", ScalarType.STRING, Arity.SCALAR, False)

        with pytest.raises(ValueError, match="Cannot widen"):
            a.widen(b)

    @pytest.mark.parametrize(
        ("scalar_type", "arity", "optional", "expected"),
        [
            (ScalarType.STRING, Arity.SCALAR, False, "str"),
            (ScalarType.INTEGER, Arity.SCALAR, True, "int | None"),
            (ScalarType.INTEGER, Arity.ARRAY, True, "tuple[int, ...] | None"),
            (ScalarType.STRING, Arity.MATRIX, False, "tuple[tuple[str, ...], ...]"),
        ],
    )
    def test_type_name(
        self, scalar_type: ScalarType, arity: Arity, optional: bool, expected: str
    ) -> None:
        """Python annotations of each shape."""
        assert CanonicalField("K", scalar_type, arity, optional).type_name == expected

    def test_to_dict(self) -> None:
        """Lower-case enum names."""
        entry = CanonicalField("GROUPING", ScalarType.INTEGER, Arity.ARRAY, True)

        assert entry.to_dict() == {"type": "integer", "arity": "array", "optional": True}


# ============================================================================
# SCHEMA AND TABLES
# ============================================================================

D_FMT = CanonicalField("D_FMT", ScalarType.STRING, Arity.SCALAR, False)
FIRST_WEEKDAY = CanonicalField("FIRST_WEEKDAY", ScalarType.INTEGER, Arity.SCALAR, True)
SCHEMA = CanonicalSchema(categories=(("LC_TIME", (D_FMT, FIRST_WEEKDAY)),))


class TestCanonicalSchema:
    """Lookups on the canonical schema."""

    def test_lookups(self) -> None:
        """Known and unknown categories and keys."""
        assert SCHEMA.category_names == ("LC_TIME",)
        assert SCHEMA.fields("LC_TIME") == (D_FMT, FIRST_WEEKDAY)
        assert SCHEMA.fields("LC_PAPER") == ()
        assert SCHEMA.field("LC_TIME", "D_FMT") == D_FMT
        assert SCHEMA.field("LC_TIME", "T_FMT") is None

    def test_to_dict_preserves_order(self) -> None:
        """Keys stay in sorted order."""
        data = SCHEMA.to_dict()

        assert list(data["LC_TIME"]) == ["D_FMT", "FIRST_WEEKDAY"]


class TestCategoryTable:
    """Filled tables."""

    def test_access(self) -> None:
        """get, keys and as_dict agree."""
        table = CategoryTable("de_DE", "LC_TIME", (("D_FMT", "%d.%m.%Y"), ("FIRST_WEEKDAY", None)))

        assert table.keys == ("D_FMT", "FIRST_WEEKDAY")
        assert table.get("D_FMT") == "%d.%m.%Y"
        assert table.get("FIRST_WEEKDAY") is None
        assert table.as_dict() == {"D_FMT": "%d.%m.%Y", "FIRST_WEEKDAY": None}

    def test_unknown_key(self) -> None:
        """Non-canonical keys raise KeyError."""
        table = CategoryTable("de_DE", "LC_TIME", ())

        with pytest.raises(KeyError):
            table.get("D_FMT")

    def test_guards(self) -> None:
        """TypeIs guards discriminate entries."""
        table = CategoryTable("de_DE", "LC_TIME", ())
        link = CategoryLink("fr_BE", "LC_TIME", "de_DE")

        assert CategoryTable.guard(table)
        assert not CategoryTable.guard(link)
        assert CategoryLink.guard(link)
        assert not CategoryLink.guard(table)


# ============================================================================
# UNIFIED LOCALES
# ============================================================================


def _unified(*entries: tuple[str, str, CategoryTable | CategoryLink]) -> UnifiedLocales:
    by_locale: dict[str, list[tuple[str, CategoryTable | CategoryLink]]] = {}
    for locale, category, entry in entries:
        by_locale.setdefault(locale, []).append((category, entry))
    return UnifiedLocales(
        schema=SCHEMA,
        entries=tuple((locale, tuple(items)) for locale, items in sorted(by_locale.items())),
    )


class TestUnifiedLocales:
    """Navigation and link resolution."""

    def test_resolve_follows_chain(self) -> None:
        """Links are followed until a table is reached."""
        table = CategoryTable("fr_FR", "LC_TIME", (("D_FMT", "%d/%m/%Y"),))
        unified = _unified(
            ("fr_FR", "LC_TIME", table),
            ("fr_BE", "LC_TIME", CategoryLink("fr_BE", "LC_TIME", "fr_FR")),
            ("fr_LU", "LC_TIME", CategoryLink("fr_LU", "LC_TIME", "fr_BE")),
        )

        assert unified.resolve("fr_LU", "LC_TIME") is table
        assert unified.links() == {
            "fr_BE": {"LC_TIME": "fr_FR"},
            "fr_LU": {"LC_TIME": "fr_BE"},
        }

    def test_resolve_cycle(self) -> None:
        """A looping chain raises instead of hanging."""
        unified = _unified(
            ("a", "LC_TIME", CategoryLink("a", "LC_TIME", "b")),
            ("b", "LC_TIME", CategoryLink("b", "LC_TIME", "a")),
        )

        with pytest.raises(CyclicAliasError) as error:
            unified.resolve("a", "LC_TIME")

        assert error.value.cycle == ["a/LC_TIME", "b/LC_TIME", "a/LC_TIME"]

    def test_resolve_missing(self) -> None:
        """Undefined categories raise KeyError."""
        unified = _unified(("a", "LC_TIME", CategoryTable("a", "LC_TIME", ())))

        with pytest.raises(KeyError):
            unified.resolve("a", "LC_NUMERIC")
        with pytest.raises(KeyError):
            unified.categories("zz")

    def test_entry_and_iteration(self) -> None:
        """entry() returns None for undefined categories; iteration is ordered."""
        first = CategoryTable("a", "LC_TIME", ())
        second = CategoryTable("b", "LC_TIME", ())
        unified = _unified(("b", "LC_TIME", second), ("a", "LC_TIME", first))

        assert unified.locales == ("a", "b")
        assert unified.entry("a", "LC_NUMERIC") is None
        assert list(unified.iter_entries()) == [first, second]
