"""Unified locale model: canonical schema and per-locale tables.

The unifier produces one UnifiedLocales value:

- CanonicalSchema: for every category, the canonical fields (type, arity,
  optionality) sorted by key.
- Per locale and category either a CategoryTable holding one value per
  canonical field (None where the locale lacks it), or a CategoryLink that
  defers to another locale's table.

Everything is immutable and built in sorted order, so two unifications of
the same input compare equal and serialize identically.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TypeIs

from localeforge.analysis import alias_node
from localeforge.diagnostics import CyclicAliasError, ErrorTemplate
from localeforge.enums import Arity, ScalarType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values
    "ScalarValue",
    "FieldValue",
    # Schema
    "CanonicalField",
    "CanonicalSchema",
    # Tables
    "CategoryTable",
    "CategoryLink",
    "CategoryEntry",
    "UnifiedLocales",
]

type ScalarValue = int | str
"""Element of a field value after unification."""

type FieldValue = (
    ScalarValue | tuple[ScalarValue, ...] | tuple[tuple[ScalarValue, ...], ...] | None
)
"""Scalar, array row, matrix rows, or None for an absent field."""


# ============================================================================
# SCHEMA
# ============================================================================


@dataclass(frozen=True, slots=True)
class CanonicalField:
    """Unified metadata of one field key of one category.

    Attributes:
        key: Normalized field key (e.g. D_FMT)
        scalar_type: Element type, widened across all locales
        arity: Shape, widened across all locales
        optional: True iff some locale defining the category lacks the key
            or declares it blank
    """

    key: str
    scalar_type: ScalarType
    arity: Arity
    optional: bool

    def widen(self, other: CanonicalField) -> CanonicalField:
        """Least upper bound of two entries for the same key.

        Associative, commutative and idempotent, so the fold over locales is
        independent of visiting order.
        """
        if other.key != self.key:
            msg = f"Cannot widen field {self.key} with field {other.key}"
            raise ValueError(msg)
        return CanonicalField(
            key=self.key,
            scalar_type=self.scalar_type.widen(other.scalar_type),
            arity=self.arity.widen(other.arity),
            optional=self.optional or other.optional,
        )

    @property
    def type_name(self) -> str:
        """Python annotation for the field value.

        Example:
            >>> CanonicalField("GROUPING", ScalarType.INTEGER, Arity.ARRAY, True).type_name
            'tuple[int, ...] | None'
        """
        element = self.scalar_type.python_type
        match self.arity:
            case Arity.SCALAR:
                annotation = element
            case Arity.ARRAY:
                annotation = f"tuple[{element}, ...]"
            case Arity.MATRIX:
                annotation = f"tuple[tuple[{element}, ...], ...]"
        if self.optional:
            annotation += " | None"
        return annotation

    def to_dict(self) -> dict[str, object]:
        """JSON-compatible representation."""
        return {
            "type": self.scalar_type.name.lower(),
            "arity": self.arity.name.lower(),
            "optional": self.optional,
        }


@dataclass(frozen=True, slots=True)
class CanonicalSchema:
    """Canonical fields per category.

    Attributes:
        categories: (category name, fields sorted by key), sorted by name
    """

    categories: tuple[tuple[str, tuple[CanonicalField, ...]], ...]

    @property
    def category_names(self) -> tuple[str, ...]:
        """Category names in sorted order."""
        return tuple(name for name, _ in self.categories)

    def fields(self, category: str) -> tuple[CanonicalField, ...]:
        """Canonical fields of category (empty if unknown)."""
        for name, fields in self.categories:
            if name == category:
                return fields
        return ()

    def field(self, category: str, key: str) -> CanonicalField | None:
        """Canonical entry for one key, if present."""
        for entry in self.fields(category):
            if entry.key == key:
                return entry
        return None

    def to_dict(self) -> dict[str, dict[str, dict[str, object]]]:
        """JSON-compatible representation, key order preserved."""
        return {
            name: {entry.key: entry.to_dict() for entry in fields}
            for name, fields in self.categories
        }


# ============================================================================
# TABLES
# ============================================================================


@dataclass(frozen=True, slots=True)
class CategoryTable:
    """Filled field table of one locale's category.

    Holds exactly the canonical keys of the category, in key order.
    """

    locale: str
    category: str
    values: tuple[tuple[str, FieldValue], ...]

    @property
    def keys(self) -> tuple[str, ...]:
        """Field keys in sorted order."""
        return tuple(key for key, _ in self.values)

    def get(self, key: str) -> FieldValue:
        """Value for key.

        Raises:
            KeyError: If key is not a canonical key of the category
        """
        for entry_key, value in self.values:
            if entry_key == key:
                return value
        raise KeyError(key)

    def as_dict(self) -> dict[str, FieldValue]:
        """Field values by key."""
        return dict(self.values)

    @staticmethod
    def guard(entry: object) -> TypeIs[CategoryTable]:
        """Type guard for CategoryTable."""
        return isinstance(entry, CategoryTable)


@dataclass(frozen=True, slots=True)
class CategoryLink:
    """Deferred reference to another locale's table for the same category.

    Example:
        fr_BE LC_TIME holding only ``copy "fr_FR"`` becomes
        CategoryLink("fr_BE", "LC_TIME", "fr_FR")
    """

    locale: str
    category: str
    target: str

    @staticmethod
    def guard(entry: object) -> TypeIs[CategoryLink]:
        """Type guard for CategoryLink."""
        return isinstance(entry, CategoryLink)


type CategoryEntry = CategoryTable | CategoryLink
"""What a locale holds for one category."""


@dataclass(frozen=True, slots=True)
class UnifiedLocales:
    """Unifier output: canonical schema plus every locale's entries.

    Attributes:
        schema: Canonical fields per category
        entries: (locale name, (category name, entry) sorted by category),
            sorted by locale name
    """

    schema: CanonicalSchema
    entries: tuple[tuple[str, tuple[tuple[str, CategoryEntry], ...]], ...]

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale names in sorted order."""
        return tuple(name for name, _ in self.entries)

    def categories(self, locale: str) -> tuple[tuple[str, CategoryEntry], ...]:
        """Entries of one locale.

        Raises:
            KeyError: If locale was not unified
        """
        for name, categories in self.entries:
            if name == locale:
                return categories
        raise KeyError(locale)

    def entry(self, locale: str, category: str) -> CategoryEntry | None:
        """Table or link of one locale's category, None if undefined."""
        for name, entry in self.categories(locale):
            if name == category:
                return entry
        return None

    def iter_entries(self) -> Iterator[CategoryEntry]:
        """All entries, locale-major, each in sorted order."""
        for _, categories in self.entries:
            for _, entry in categories:
                yield entry

    def links(self) -> Mapping[str, Mapping[str, str]]:
        """Alias target per locale and category (only linked categories)."""
        result: dict[str, dict[str, str]] = {}
        for entry in self.iter_entries():
            if CategoryLink.guard(entry):
                result.setdefault(entry.locale, {})[entry.category] = entry.target
        return result

    def resolve(self, locale: str, category: str) -> CategoryTable:
        """Follow links until a table is reached.

        Raises:
            KeyError: If the locale or category is not defined
            CyclicAliasError: If the links loop
        """
        seen: list[str] = []
        current = locale
        while True:
            node = alias_node(current, category)
            if node in seen:
                cycle = [*seen[seen.index(node) :], node]
                raise CyclicAliasError(ErrorTemplate.cyclic_alias(cycle), cycle=cycle)
            seen.append(node)
            entry = self.entry(current, category)
            if entry is None:
                raise KeyError(node)
            if CategoryTable.guard(entry):
                return entry
            current = entry.target
