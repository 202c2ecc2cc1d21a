"""Core locale source parser implementation.

This module provides the LocaleParser class that orchestrates parsing of one
locale source file into the AST defined in :mod:`localeforge.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern (:class:`~localeforge.syntax.cursor.Cursor`)
    to traverse source text. Sub-parsers in :mod:`~localeforge.syntax.parser.rules`
    and :mod:`~localeforge.syntax.parser.primitives` return a
    :class:`~localeforge.syntax.cursor.ParseResult` or None when their
    alternative does not match.

Failure Policy:
    Unlike a recovering parser there is no junk handling. The first structural
    mismatch raises :class:`~localeforge.diagnostics.LocaleSyntaxError` for the
    whole file. Only blank and comment runs outside categories are discarded.

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large source files.
"""

import logging

from localeforge.constants import MAX_SOURCE_SIZE
from localeforge.diagnostics import (
    DiagnosticCode,
    ErrorTemplate,
    LocaleSyntaxError,
)
from localeforge.syntax.ast import Category, LocaleDefinition
from localeforge.syntax.cursor import Cursor
from localeforge.syntax.parser.primitives import fail
from localeforge.syntax.parser.rules import parse_category, parse_preamble
from localeforge.syntax.parser.whitespace import skip_blank_block

__all__ = ["LocaleParser"]

logger = logging.getLogger(__name__)


class LocaleParser:
    """Locale source parser using immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - SpecialChars read from the preamble are passed by value to every rule
    - Error messages include line:column with source context

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 10 MB (glibc's largest locale sources are under 1 MB)

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable size limit (not recommended).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str) -> LocaleDefinition:
        """Parse locale source into a LocaleDefinition.

        Args:
            source: Locale file content

        Returns:
            :class:`~localeforge.syntax.ast.LocaleDefinition` holding the
            file's SpecialChars and its categories in source order

        Raises:
            LocaleSyntaxError: On any structural mismatch, or if source
                exceeds max_source_size

        Example:
            >>> parser = LocaleParser()
            >>> definition = parser.parse("LC_TIME\\nfirst_weekday 2\\nEND LC_TIME\\n")
            >>> definition.categories[0].fields[0].values
            (IntegerValue(value=2),)
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            raise LocaleSyntaxError(diagnostic)

        try:
            return self._parse_source(source)
        except EOFError as e:
            # Cursor.current guards are in place everywhere; reaching EOF here
            # means a rule read past the end of a truncated file.
            cursor = Cursor(source, len(source))
            raise fail(DiagnosticCode.UNEXPECTED_EOF, str(e), cursor) from e

    def _parse_source(self, source: str) -> LocaleDefinition:
        preamble = parse_preamble(Cursor(source, 0))
        chars = preamble.value
        cursor = preamble.cursor
        logger.debug(
            "Preamble: comment_char=%r escape_char=%r", chars.comment_char, chars.escape_char
        )

        categories: list[Category] = []
        while True:
            cursor = skip_blank_block(cursor, chars.comment_char)
            if cursor.is_eof:
                break
            result = parse_category(cursor, chars)
            if result is None:
                raise fail(
                    DiagnosticCode.UNEXPECTED_CONTENT,
                    f"Unexpected content {cursor.current!r} outside a category",
                    cursor,
                    ("category name",),
                )
            categories.append(result.value)
            cursor = result.cursor
            logger.debug(
                "Parsed category %s (%d fields)", result.value.name, len(result.value.fields)
            )

        return LocaleDefinition(special_chars=chars, categories=tuple(categories))
