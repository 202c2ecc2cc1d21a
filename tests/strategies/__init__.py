"""Hypothesis strategies for localeforge property-based testing.

Strategies are organized by domain:

- locale: locale source ASTs (values, fields, categories, definitions)
  and locale names

Usage:
    from tests.strategies import definitions, values
    from tests.strategies.locale import special_chars
"""

from .locale import (
    CATEGORY_NAMES,
    categories,
    definitions,
    field_keys,
    fields,
    integer_values,
    locale_names,
    raw_values,
    special_chars,
    string_values,
    values,
)

__all__ = [
    "CATEGORY_NAMES",
    "categories",
    "definitions",
    "field_keys",
    "fields",
    "integer_values",
    "locale_names",
    "raw_values",
    "special_chars",
    "string_values",
    "values",
]
