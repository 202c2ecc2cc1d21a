"""localeforge exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Every error is fatal to a batch: unification needs a complete and
consistent view of every locale.

Hierarchy:
    LocaleError
    ├─ LocaleSyntaxError (malformed locale source)
    ├─ LocaleDecodeError (locale file is not valid text)
    ├─ SchemaError (cross-locale unification)
    │   ├─ UnknownLocaleAliasError
    │   ├─ AliasPayloadError
    │   ├─ MixedTypeError
    │   ├─ UnresolvedAliasError
    │   └─ CyclicAliasError
    ├─ InvalidLocaleNameError (also ValueError)
    └─ CodegenError

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from localeforge.syntax.cursor import ParseError


class LocaleError(Exception):
    """Base exception for all localeforge errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class LocaleSyntaxError(LocaleError):
    """Locale source does not match the grammar.

    There is no partial-file recovery: the first structural mismatch aborts
    the parse of the whole file.

    Attributes:
        parse_error: Cursor-level error (position, source excerpt), if known
        source_name: File the source was read from, once attributed
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        parse_error: ParseError | None = None,
        source_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.parse_error = parse_error
        self.source_name = source_name

    def with_source(self, source_name: str) -> LocaleSyntaxError:
        """Return an equivalent error naming the offending file."""
        if self.diagnostic is not None:
            return LocaleSyntaxError(
                self.diagnostic.with_source(source_name),
                parse_error=self.parse_error,
                source_name=source_name,
            )
        return LocaleSyntaxError(
            f"{source_name}: {self}", parse_error=self.parse_error, source_name=source_name
        )

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with the offending source lines and a caret."""
        if self.parse_error is None:
            return str(self)
        return self.parse_error.format_with_context(context_lines)


class SchemaError(LocaleError):
    """Unification failure across the locale set.

    Attributes:
        locale: Locale whose data triggered the failure
        category: Category name (e.g. LC_TIME)
        key: Field key, where applicable
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale: str = "",
        category: str = "",
        key: str = "",
    ) -> None:
        super().__init__(message)
        self.locale = locale
        self.category = category
        self.key = key


class UnknownLocaleAliasError(SchemaError):
    """copy/include names a locale absent from the input set."""


class AliasPayloadError(SchemaError):
    """copy/include carries a non-String or multi-value payload."""


class MixedTypeError(SchemaError):
    """A single value run mixes Integer and textual values."""


class UnresolvedAliasError(SchemaError):
    """The aliased locale does not define the aliased category."""


class CyclicAliasError(SchemaError):
    """Alias chain loops back onto itself.

    Attributes:
        cycle: Nodes of the cycle as ``locale/CATEGORY`` strings, first node repeated last
    """

    def __init__(self, message: str | Diagnostic, *, cycle: list[str]) -> None:
        first = cycle[0] if cycle else "/"
        locale, _, category = first.partition("/")
        super().__init__(message, locale=locale, category=category)
        self.cycle = cycle


class InvalidLocaleNameError(LocaleError, ValueError):
    """Name is not of the form language[_territory][@modifier]."""


class CodegenError(LocaleError):
    """Unified model cannot be rendered as source code."""


class LocaleDecodeError(LocaleError):
    """Locale file is not text in the loader's encoding.

    Attributes:
        source_name: The offending file
    """

    def __init__(self, message: str | Diagnostic, *, source_name: str) -> None:
        super().__init__(message)
        self.source_name = source_name
