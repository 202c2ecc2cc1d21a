"""Locale keys derived from locale source file names.

A locale source file is named ``language[_territory][@modifier]``:

    de_DE        -> LocaleKey("de", "DE")
    sr_RS@latin  -> LocaleKey("sr", "RS", "latin")
    eo           -> LocaleKey("eo")

Every component is ASCII alphabetic and the modifier must be last. The
language ``translit`` is reserved for transliteration tables, which share the
directory with locale files but are not locales.

Python 3.13+. Babel is optional (display names only).
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from localeforge.constants import RESERVED_LANGUAGE
from localeforge.core.babel_compat import cldr_display_name, require_babel
from localeforge.diagnostics import ErrorTemplate, InvalidLocaleNameError

__all__ = ["LocaleKey"]

_TERRITORY_SEPARATOR = "_"
_MODIFIER_SEPARATOR = "@"


def _is_alpha(text: str) -> bool:
    return bool(text) and text.isascii() and text.isalpha()


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class LocaleKey:
    """Composite locale identifier ``(language, territory, modifier)``.

    Keys order by their file name, which is also the order every
    deterministic iteration in the pipeline uses.

    Attributes:
        language: Alphabetic language code, never ``translit``
        territory: Alphabetic territory code, if any
        modifier: Alphabetic modifier (script or variant), if any
    """

    language: str
    territory: str | None = None
    modifier: str | None = None

    def __post_init__(self) -> None:
        """Validate component invariants."""
        name = self.name
        if not _is_alpha(self.language):
            raise InvalidLocaleNameError(
                ErrorTemplate.invalid_locale_name(name, "language must be alphabetic")
            )
        if self.language == RESERVED_LANGUAGE:
            raise InvalidLocaleNameError(
                ErrorTemplate.invalid_locale_name(name, f"'{RESERVED_LANGUAGE}' is reserved")
            )
        for label, part in (("territory", self.territory), ("modifier", self.modifier)):
            if part is not None and not _is_alpha(part):
                raise InvalidLocaleNameError(
                    ErrorTemplate.invalid_locale_name(name, f"{label} must be alphabetic")
                )

    @classmethod
    def parse(cls, name: str) -> LocaleKey:
        """Parse a file name into a LocaleKey.

        Raises:
            InvalidLocaleNameError: If name is not language[_territory][@modifier]

        Example:
            >>> LocaleKey.parse("sr_RS@latin")
            LocaleKey(language='sr', territory='RS', modifier='latin')
        """
        base, has_modifier, modifier = name.partition(_MODIFIER_SEPARATOR)
        if has_modifier and _MODIFIER_SEPARATOR in modifier:
            raise InvalidLocaleNameError(
                ErrorTemplate.invalid_locale_name(name, "more than one modifier")
            )
        language, has_territory, territory = base.partition(_TERRITORY_SEPARATOR)
        if has_territory and _TERRITORY_SEPARATOR in territory:
            raise InvalidLocaleNameError(
                ErrorTemplate.invalid_locale_name(name, "more than one territory")
            )
        # Empty components after a separator fail the alphabetic check.
        return cls(
            language=language,
            territory=territory if has_territory else None,
            modifier=modifier if has_modifier else None,
        )

    @classmethod
    def is_valid(cls, name: str) -> bool:
        """Check whether name is a locale key without raising."""
        try:
            cls.parse(name)
        except InvalidLocaleNameError:
            return False
        return True

    @property
    def name(self) -> str:
        """Original file name form."""
        result = self.language
        if self.territory is not None:
            result += _TERRITORY_SEPARATOR + self.territory
        if self.modifier is not None:
            result += _MODIFIER_SEPARATOR + self.modifier
        return result

    @property
    def identifier(self) -> str:
        """Namespace name used in emitted code ('@' becomes '_')."""
        return self.name.replace(_MODIFIER_SEPARATOR, "_")

    def __str__(self) -> str:
        return self.name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LocaleKey):
            return NotImplemented
        return self.name < other.name

    def display_name(self, locale: str = "en") -> str | None:
        """Human-readable name from CLDR data.

        Args:
            locale: Locale to render the name in

        Returns:
            Display name such as "German (Germany)", the modifier appended
            after '@'; None when CLDR does not know the language

        Raises:
            BabelImportError: If Babel is not installed
        """
        require_babel("LocaleKey.display_name")
        code = self.language
        if self.territory is not None:
            code += _TERRITORY_SEPARATOR + self.territory

        display = cldr_display_name(code, locale)
        if display is None:
            return None
        if self.modifier is not None:
            display += f" @{self.modifier}"
        return display
