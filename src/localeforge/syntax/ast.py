"""Locale source AST node definitions.

A parsed locale file is a LocaleDefinition: the file's SpecialChars plus an
ordered tuple of Category blocks, each holding its Field lines in source
order. Nodes are immutable once produced by the parser.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field
from typing import TypeIs

from localeforge.constants import (
    DEFAULT_COMMENT_CHAR,
    DEFAULT_ESCAPE_CHAR,
    FALLBACK_COMMENT_CHAR,
    FALLBACK_ESCAPE_CHAR,
)
from localeforge.enums import ScalarType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "SpecialChars",
    # Values
    "RawValue",
    "StringValue",
    "IntegerValue",
    "Value",
    # Structure
    "Field",
    "Category",
    "LocaleDefinition",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SpecialChars:
    """Per-file comment and escape characters.

    Declared by the preamble of each locale file and passed by value into
    every grammar rule. Never shared between files.

    Attributes:
        comment_char: Starts a comment running to end of line
        escape_char: Escapes the next character (None: no escaping)
    """

    comment_char: str = DEFAULT_COMMENT_CHAR
    escape_char: str | None = DEFAULT_ESCAPE_CHAR

    def __post_init__(self) -> None:
        """Validate that both characters are single characters."""
        if len(self.comment_char) != 1:
            msg = f"comment_char must be a single character, got {self.comment_char!r}"
            raise ValueError(msg)
        if self.escape_char is not None and len(self.escape_char) != 1:
            msg = f"escape_char must be a single character, got {self.escape_char!r}"
            raise ValueError(msg)

    @classmethod
    def fallback(cls) -> "SpecialChars":
        """Characters used by files that carry no preamble."""
        return cls(comment_char=FALLBACK_COMMENT_CHAR, escape_char=FALLBACK_ESCAPE_CHAR)


# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class RawValue:
    """Unquoted token: LC_IDENTIFICATION in category "i18n:2012";LC_IDENTIFICATION"""

    text: str

    @property
    def scalar_type(self) -> ScalarType:
        """Raw tokens are textual."""
        return ScalarType.STRING

    @staticmethod
    def guard(value: object) -> TypeIs["RawValue"]:
        """Type guard for RawValue."""
        return isinstance(value, RawValue)


@dataclass(frozen=True, slots=True)
class StringValue:
    """Quoted string with escapes and <Uhhhh> sequences decoded.

    Example:
        d_fmt "%d/%m/%y" -> StringValue("%d/%m/%y")
    """

    text: str

    @property
    def scalar_type(self) -> ScalarType:
        """Strings are textual."""
        return ScalarType.STRING

    @staticmethod
    def guard(value: object) -> TypeIs["StringValue"]:
        """Type guard for StringValue."""
        return isinstance(value, StringValue)


@dataclass(frozen=True, slots=True)
class IntegerValue:
    """Signed 64-bit decimal literal: first_weekday 2"""

    value: int

    @property
    def scalar_type(self) -> ScalarType:
        """Integers are the only non-textual values."""
        return ScalarType.INTEGER

    @staticmethod
    def guard(value: object) -> TypeIs["IntegerValue"]:
        """Type guard for IntegerValue."""
        return isinstance(value, IntegerValue)


type Value = RawValue | StringValue | IntegerValue
"""Any value appearing after a field key."""


# ============================================================================
# STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Field:
    """One key line of a category.

    Column placeholders (empty slots between separators) are dropped by the
    parser, so ``values`` only holds real values. An empty tuple means the
    key was declared blank. Spans do not take part in equality.

    Examples:
        d_fmt "%d/%m/%y"          -> Field("d_fmt", (StringValue(...),))
        grouping 3;3              -> Field("grouping", (IntegerValue(3), IntegerValue(3)))
        am_pm "";""               -> Field("am_pm", (StringValue(""), StringValue("")))
        translit_end              -> Field("translit_end", ())
    """

    key: str
    values: tuple[Value, ...]
    span: Span | None = field(default=None, compare=False)

    @property
    def is_blank(self) -> bool:
        """Key present with no value."""
        return not self.values


@dataclass(frozen=True, slots=True)
class Category:
    """Named block closed by ``END <name>``.

    Example:
        LC_TIME
        d_fmt "%d/%m/%y"
        END LC_TIME
    """

    name: str
    fields: tuple[Field, ...]
    span: Span | None = field(default=None, compare=False)

    def get(self, key: str) -> tuple[Field, ...]:
        """All field lines declared under key, in source order."""
        return tuple(f for f in self.fields if f.key == key)


@dataclass(frozen=True, slots=True)
class LocaleDefinition:
    """Root node: one parsed locale source file."""

    special_chars: SpecialChars
    categories: tuple[Category, ...]

    def category(self, name: str) -> Category | None:
        """First category with the given name, if declared."""
        for category in self.categories:
            if category.name == name:
                return category
        return None

    @property
    def category_names(self) -> tuple[str, ...]:
        """Category names in source order."""
        return tuple(c.name for c in self.categories)
