"""Per-locale classification of parsed categories.

First stage of unification. Everything here looks at a single locale's
category; nothing depends on the rest of the locale set except the set of
known locale names used to validate alias targets.

- normalize_key: field keys to identifier-safe upper-case names
- classify_category: Link vs Fields, alias payload validation
- group_runs: collect value runs per normalized key
- observe_field: type and arity of one key in one locale

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from localeforge.diagnostics import (
    AliasPayloadError,
    ErrorTemplate,
    MixedTypeError,
    UnknownLocaleAliasError,
)
from localeforge.enums import Arity, CategoryKind, ScalarType
from localeforge.syntax.ast import Category, Field, IntegerValue, StringValue, Value

__all__ = [
    "ClassifiedCategory",
    "FieldObservation",
    "Run",
    "classify_category",
    "group_runs",
    "normalize_key",
    "observe_field",
]

# Applied in order, then upper-cased.
_KEY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("'", ""),
    ('"', ""),
    ("-", "_"),
    ("=", "eq"),
    ("<", "lt"),
    ("..", "dotdot"),
    ("2", "two"),
)

type Run = tuple[Value, ...]


def normalize_key(key: str) -> str:
    """Map a source key to its canonical upper-case name.

    Example:
        >>> normalize_key("d_fmt")
        'D_FMT'
        >>> normalize_key("country-ab2")
        'COUNTRY_ABTWO'
        >>> normalize_key("..")
        'DOTDOT'
    """
    for old, new in _KEY_REPLACEMENTS:
        key = key.replace(old, new)
    return key.upper()


@dataclass(frozen=True, slots=True)
class ClassifiedCategory:
    """A category with its alias directives separated from its fields.

    Attributes:
        locale: Owning locale name
        name: Category name
        kind: LINK when the category is nothing but one alias directive
        aliases: Alias target locale names in source order
        fields: Remaining (non-alias) fields in source order
    """

    locale: str
    name: str
    kind: CategoryKind
    aliases: tuple[str, ...]
    fields: tuple[Field, ...]

    @property
    def target(self) -> str:
        """Alias target of a LINK category."""
        if self.kind is not CategoryKind.LINK:
            msg = f"{self.locale}/{self.name} is not a link"
            raise ValueError(msg)
        return self.aliases[0]


def _describe(value: Value) -> str:
    match value:
        case IntegerValue():
            return str(value.value)
        case StringValue():
            return f'"{value.text}"'
        case _:
            return value.text


def _alias_target(
    locale: str,
    category: str,
    field: Field,
    known_locales: Collection[str],
) -> str:
    """Validate an alias directive and return the locale it names."""
    match field.values:
        case (StringValue() as value,):
            target = value.text
        case _:
            payload = ";".join(_describe(v) for v in field.values) or "<empty>"
            raise AliasPayloadError(
                ErrorTemplate.invalid_alias_payload(locale, category, field.key, payload),
                locale=locale,
                category=category,
                key=field.key,
            )
    if target not in known_locales:
        raise UnknownLocaleAliasError(
            ErrorTemplate.unknown_alias_target(locale, category, target),
            locale=locale,
            category=category,
            key=field.key,
        )
    return target


def classify_category(
    locale: str,
    category: Category,
    known_locales: Collection[str],
    alias_keys: Collection[str],
) -> ClassifiedCategory:
    """Split alias directives from ordinary fields.

    A category whose only field is a single copy/include directive is a
    LINK. Any other category is FIELDS; alias directives inside it are kept
    as embedded aliases merged underneath its own fields.

    Raises:
        AliasPayloadError: If a directive does not carry exactly one String
        UnknownLocaleAliasError: If a directive names a locale not in known_locales
    """
    aliases: list[str] = []
    fields: list[Field] = []
    for field in category.fields:
        if field.key in alias_keys:
            aliases.append(_alias_target(locale, category.name, field, known_locales))
        else:
            fields.append(field)

    kind = CategoryKind.LINK if len(aliases) == 1 and not fields else CategoryKind.FIELDS
    return ClassifiedCategory(
        locale=locale,
        name=category.name,
        kind=kind,
        aliases=tuple(aliases),
        fields=tuple(fields),
    )


def group_runs(fields: Iterable[Field]) -> dict[str, tuple[Run, ...]]:
    """Collect every value run per normalized key, in source order.

    Blank runs are kept here; observe_field drops them.
    """
    groups: dict[str, list[Run]] = {}
    for field in fields:
        groups.setdefault(normalize_key(field.key), []).append(field.values)
    return {key: tuple(runs) for key, runs in groups.items()}


@dataclass(frozen=True, slots=True)
class FieldObservation:
    """Type and shape of one key as one locale declares it.

    An empty observation (no non-blank run) only contributes optionality.

    Attributes:
        scalar_type: Widest element type over all rows, None if empty
        arity: SCALAR, ARRAY or MATRIX, None if empty
        rows: Non-blank runs in source order
    """

    scalar_type: ScalarType | None
    arity: Arity | None
    rows: tuple[Run, ...]

    @property
    def is_empty(self) -> bool:
        """Key declared with no value."""
        return not self.rows


def _run_type(locale: str, category: str, key: str, run: Run) -> ScalarType:
    types = {value.scalar_type for value in run}
    if len(types) > 1:
        raise MixedTypeError(
            ErrorTemplate.mixed_value_types(locale, category, key),
            locale=locale,
            category=category,
            key=key,
        )
    return types.pop()


def observe_field(locale: str, category: str, key: str, runs: Iterable[Run]) -> FieldObservation:
    """Classify the runs of one key.

    Examples:
        no non-blank run   -> empty (optionality only)
        d_fmt "%d/%m/%y"   -> STRING, SCALAR
        grouping 3;3       -> INTEGER, ARRAY
        two alt_digits runs -> MATRIX

    Raises:
        MixedTypeError: If one run mixes Integer and textual values
    """
    rows = tuple(run for run in runs if run)
    if not rows:
        return FieldObservation(scalar_type=None, arity=None, rows=())

    scalar_type = ScalarType.INTEGER
    for run in rows:
        scalar_type = scalar_type.widen(_run_type(locale, category, key, run))

    if len(rows) > 1:
        arity = Arity.MATRIX
    elif len(rows[0]) > 1:
        arity = Arity.ARRAY
    else:
        arity = Arity.SCALAR
    return FieldObservation(scalar_type=scalar_type, arity=arity, rows=rows)
