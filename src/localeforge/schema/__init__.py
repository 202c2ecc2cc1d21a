"""Cross-locale schema unification.

Turns the parsed categories of a whole locale set into one canonical schema
per category and a filled, identically shaped table per locale.

Python 3.13+.
"""

from .classify import FieldObservation, normalize_key, observe_field
from .model import (
    CanonicalField,
    CanonicalSchema,
    CategoryEntry,
    CategoryLink,
    CategoryTable,
    FieldValue,
    ScalarValue,
    UnifiedLocales,
)
from .unifier import SchemaUnifier, UnifierConfig, unify

__all__ = [
    "CanonicalField",
    "CanonicalSchema",
    "CategoryEntry",
    "CategoryLink",
    "CategoryTable",
    "FieldObservation",
    "FieldValue",
    "ScalarValue",
    "SchemaUnifier",
    "UnifiedLocales",
    "UnifierConfig",
    "normalize_key",
    "observe_field",
    "unify",
]
