"""Locale source parsing package.

Provides parser, AST definitions and serialization.
Separate from schema unification so single files can be checked in isolation.

Python 3.13+.
"""

from .ast import (
    Category,
    Field,
    IntegerValue,
    LocaleDefinition,
    RawValue,
    Span,
    SpecialChars,
    StringValue,
    Value,
)
from .cursor import Cursor, ParseError, ParseResult
from .parser import LocaleParser
from .serializer import (
    SerializationValidationError,
    serialize_category,
    serialize_definition,
    serialize_field,
    serialize_value,
)

__all__ = [
    "Category",
    "Cursor",
    "Field",
    "IntegerValue",
    "LocaleDefinition",
    "LocaleParser",
    "ParseError",
    "ParseResult",
    "RawValue",
    "SerializationValidationError",
    "Span",
    "SpecialChars",
    "StringValue",
    "Value",
    "parse",
    "serialize_category",
    "serialize_definition",
    "serialize_field",
    "serialize_value",
]


def parse(source: str) -> LocaleDefinition:
    """Parse locale source into AST.

    Convenience function for LocaleParser.parse().

    Args:
        source: Locale file content

    Returns:
        LocaleDefinition with the file's SpecialChars and categories

    Raises:
        LocaleSyntaxError: On any structural mismatch

    Example:
        >>> from localeforge.syntax import parse
        >>> definition = parse('LC_TIME\\nd_fmt "%d/%m/%y"\\nEND LC_TIME\\n')
        >>> definition.category_names
        ('LC_TIME',)
    """
    parser = LocaleParser()
    return parser.parse(source)
