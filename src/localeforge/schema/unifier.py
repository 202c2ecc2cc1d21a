"""Schema unification across a whole locale set.

Builds one canonical schema per category from every locale's parsed
categories, then derives each locale's filled table from it.

Stages (all iteration sorted: locale name, category name, field key):
    1. Classify every category as Link or Fields; validate alias payloads
       and targets.
    2. Reject aliases whose target locale lacks the category, and alias
       cycles.
    3. Resolve embedded aliases: a Fields category inherits the runs of the
       categories it aliases, its own keys overriding.
    4. Observe type and arity per key and locale; fold the observations into
       CanonicalField entries (widening, never narrowing).
    5. Fill every Fields table to the canonical shape, lifting lower-arity
       data and using None for absent keys. Links stay deferred.

Unification needs the complete locale set: nothing is final until every
locale has been observed.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from localeforge.analysis import alias_node, detect_cycles
from localeforge.constants import ALIAS_KEYS, EXCLUDED_CATEGORIES
from localeforge.diagnostics import (
    CyclicAliasError,
    ErrorTemplate,
    UnresolvedAliasError,
)
from localeforge.enums import Arity, CategoryKind, ScalarType
from localeforge.schema.classify import (
    ClassifiedCategory,
    FieldObservation,
    Run,
    classify_category,
    group_runs,
    observe_field,
)
from localeforge.schema.model import (
    CanonicalField,
    CanonicalSchema,
    CategoryEntry,
    CategoryLink,
    CategoryTable,
    FieldValue,
    ScalarValue,
    UnifiedLocales,
)
from localeforge.syntax.ast import Category, IntegerValue, Value

__all__ = ["SchemaUnifier", "UnifierConfig", "unify"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnifierConfig:
    """Unification settings.

    Attributes:
        excluded_categories: Categories parsed but left out of unification
        alias_keys: Field keys treated as copy/include alias directives
    """

    excluded_categories: frozenset[str] = EXCLUDED_CATEGORIES
    alias_keys: frozenset[str] = ALIAS_KEYS

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.alias_keys:
            msg = "alias_keys must name at least one directive"
            raise ValueError(msg)
        for name in (*self.excluded_categories, *self.alias_keys):
            if not isinstance(name, str) or not name:
                msg = f"Configuration entries must be non-empty strings, got {name!r}"
                raise ValueError(msg)


def _merge_categories(categories: Iterable[Category]) -> dict[str, Category]:
    """Index categories by name; repeated blocks are concatenated."""
    merged: dict[str, Category] = {}
    for category in categories:
        previous = merged.get(category.name)
        if previous is None:
            merged[category.name] = category
        else:
            merged[category.name] = Category(
                name=category.name, fields=previous.fields + category.fields
            )
    return merged


def _convert(value: Value, scalar_type: ScalarType) -> ScalarValue:
    if IntegerValue.guard(value):
        return value.value if scalar_type is ScalarType.INTEGER else str(value.value)
    return value.text


def _lift(canonical: CanonicalField, observation: FieldObservation | None) -> FieldValue:
    """Shape one locale's data like the canonical field.

    Canonical arity is never below the observed arity, so a scalar becomes a
    one-element row and a single row a one-row matrix.
    """
    if observation is None or observation.is_empty:
        return None
    rows = tuple(
        tuple(_convert(value, canonical.scalar_type) for value in row) for row in observation.rows
    )
    match canonical.arity:
        case Arity.SCALAR:
            return rows[0][0]
        case Arity.ARRAY:
            return rows[0]
        case Arity.MATRIX:
            return rows


class SchemaUnifier:
    """Fold a locale set into a canonical schema and filled tables.

    Stateless between calls; one instance may unify any number of sets.

    Example:
        >>> from localeforge.syntax import parse
        >>> locales = {
        ...     "de_DE": parse('LC_NUMERIC\\ngrouping 3;3\\nEND LC_NUMERIC\\n').categories,
        ...     "en_DK": parse('LC_NUMERIC\\ndecimal_point ","\\nEND LC_NUMERIC\\n').categories,
        ... }
        >>> unified = SchemaUnifier().unify(locales)
        >>> unified.schema.field("LC_NUMERIC", "GROUPING").type_name
        'tuple[int, ...] | None'
    """

    __slots__ = ("_config",)

    def __init__(self, config: UnifierConfig | None = None) -> None:
        self._config = config if config is not None else UnifierConfig()

    @property
    def config(self) -> UnifierConfig:
        """Active configuration."""
        return self._config

    def unify(self, locales: Mapping[str, Iterable[Category]]) -> UnifiedLocales:
        """Unify every locale's categories.

        Args:
            locales: Parsed categories per locale name

        Returns:
            Canonical schema plus every locale's tables and links

        Raises:
            AliasPayloadError: Alias directive without exactly one String
            UnknownLocaleAliasError: Alias to a locale outside the set
            UnresolvedAliasError: Alias target lacks the category
            CyclicAliasError: Alias chain loops
            MixedTypeError: Integer and text mixed within one run
        """
        classified = self._classify(locales)
        self._check_aliases(classified)
        runs = self._resolve_runs(classified)

        observations: dict[str, dict[str, dict[str, FieldObservation]]] = {}
        for node in sorted(classified):
            category = classified[node]
            if category.kind is CategoryKind.LINK:
                continue
            per_key = {
                key: observe_field(category.locale, category.name, key, key_runs)
                for key, key_runs in sorted(runs[node].items())
            }
            observations.setdefault(category.name, {})[category.locale] = per_key

        schema = self._fold(observations)
        entries = self._fill(locales, classified, schema, observations)
        logger.info(
            "Unified %d locales into %d categories", len(entries), len(schema.categories)
        )
        return UnifiedLocales(schema=schema, entries=entries)

    def _classify(self, locales: Mapping[str, Iterable[Category]]) -> dict[str, ClassifiedCategory]:
        known = frozenset(locales)
        classified: dict[str, ClassifiedCategory] = {}
        for locale in sorted(locales):
            merged = _merge_categories(locales[locale])
            for name in sorted(merged):
                if name in self._config.excluded_categories:
                    logger.debug("Skipping excluded category %s/%s", locale, name)
                    continue
                classified[alias_node(locale, name)] = classify_category(
                    locale, merged[name], known, self._config.alias_keys
                )
        return classified

    @staticmethod
    def _check_aliases(classified: Mapping[str, ClassifiedCategory]) -> None:
        graph: dict[str, set[str]] = {}
        for node in sorted(classified):
            category = classified[node]
            targets = {alias_node(target, category.name) for target in category.aliases}
            for target in category.aliases:
                if alias_node(target, category.name) not in classified:
                    raise UnresolvedAliasError(
                        ErrorTemplate.unresolved_alias(category.locale, category.name, target),
                        locale=category.locale,
                        category=category.name,
                    )
            graph[node] = targets

        cycles = detect_cycles(graph)
        if cycles:
            cycle = cycles[0]
            raise CyclicAliasError(ErrorTemplate.cyclic_alias(cycle), cycle=cycle)

    @staticmethod
    def _resolve_runs(
        classified: Mapping[str, ClassifiedCategory],
    ) -> dict[str, dict[str, tuple[Run, ...]]]:
        """Runs per key for every category, aliased runs merged underneath.

        Iterative post-order walk; the alias graph is known to be acyclic.
        """
        resolved: dict[str, dict[str, tuple[Run, ...]]] = {}
        for start in sorted(classified):
            stack = [start]
            while stack:
                node = stack[-1]
                if node in resolved:
                    stack.pop()
                    continue
                category = classified[node]
                targets = [alias_node(target, category.name) for target in category.aliases]
                pending = [target for target in targets if target not in resolved]
                if pending:
                    stack.extend(reversed(pending))
                    continue
                stack.pop()
                merged: dict[str, tuple[Run, ...]] = {}
                for target in targets:
                    merged.update(resolved[target])
                merged.update(group_runs(category.fields))
                resolved[node] = merged
        return resolved

    @staticmethod
    def _fold(
        observations: Mapping[str, Mapping[str, Mapping[str, FieldObservation]]],
    ) -> CanonicalSchema:
        categories: list[tuple[str, tuple[CanonicalField, ...]]] = []
        for name in sorted(observations):
            tables = observations[name]
            keys = sorted({key for table in tables.values() for key in table})
            fields: list[CanonicalField] = []
            for key in keys:
                canonical: CanonicalField | None = None
                optional = False
                for locale in sorted(tables):
                    observation = tables[locale].get(key)
                    if (
                        observation is None
                        or observation.scalar_type is None
                        or observation.arity is None
                    ):
                        optional = True
                        continue
                    entry = CanonicalField(key, observation.scalar_type, observation.arity, False)
                    canonical = entry if canonical is None else canonical.widen(entry)
                if canonical is None:
                    canonical = CanonicalField(key, ScalarType.STRING, Arity.SCALAR, True)
                elif optional:
                    canonical = replace(canonical, optional=True)
                fields.append(canonical)
            categories.append((name, tuple(fields)))
        return CanonicalSchema(categories=tuple(categories))

    @staticmethod
    def _fill(
        locales: Mapping[str, Iterable[Category]],
        classified: Mapping[str, ClassifiedCategory],
        schema: CanonicalSchema,
        observations: Mapping[str, Mapping[str, Mapping[str, FieldObservation]]],
    ) -> tuple[tuple[str, tuple[tuple[str, CategoryEntry], ...]], ...]:
        by_locale: dict[str, list[ClassifiedCategory]] = {locale: [] for locale in locales}
        for node in sorted(classified):
            category = classified[node]
            by_locale[category.locale].append(category)

        result: list[tuple[str, tuple[tuple[str, CategoryEntry], ...]]] = []
        for locale in sorted(by_locale):
            entries: list[tuple[str, CategoryEntry]] = []
            for category in sorted(by_locale[locale], key=lambda c: c.name):
                entry: CategoryEntry
                if category.kind is CategoryKind.LINK:
                    entry = CategoryLink(locale, category.name, category.target)
                else:
                    table = observations[category.name][locale]
                    entry = CategoryTable(
                        locale=locale,
                        category=category.name,
                        values=tuple(
                            (field.key, _lift(field, table.get(field.key)))
                            for field in schema.fields(category.name)
                        ),
                    )
                entries.append((category.name, entry))
            result.append((locale, tuple(entries)))
        return tuple(result)


def unify(
    locales: Mapping[str, Iterable[Category]],
    *,
    config: UnifierConfig | None = None,
) -> UnifiedLocales:
    """Unify a locale set.

    Convenience function for SchemaUnifier.unify().
    """
    return SchemaUnifier(config).unify(locales)
