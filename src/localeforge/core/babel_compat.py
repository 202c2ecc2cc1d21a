"""Optional Babel support.

Parsing, unification and code generation are pure Python. Babel is only
needed to turn locale keys into CLDR display names ("German (Germany)"),
which `localeforge list` and LocaleKey.display_name() offer when installed:

    pip install localeforge[babel]

Babel loads CLDR data on import, so it is imported lazily inside the
functions below and never at module level.

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache

__all__ = [
    "BabelImportError",
    "cldr_display_name",
    "is_babel_available",
    "require_babel",
]


@lru_cache(maxsize=1)
def _babel_installed() -> bool:
    try:
        import babel  # noqa: F401, PLC0415
    except ImportError:
        return False
    return True


class BabelImportError(ImportError):
    """Raised when a display-name feature is used without Babel installed."""

    def __init__(self, feature: str) -> None:
        message = (
            f"{feature} needs Babel for CLDR display names. "
            "Install with: pip install localeforge[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """True when Babel can be imported (checked once)."""
    return _babel_installed()


def require_babel(feature: str) -> None:
    """Raise BabelImportError naming feature unless Babel is installed."""
    if not _babel_installed():
        raise BabelImportError(feature)


@lru_cache(maxsize=256)
def cldr_display_name(code: str, display_locale: str) -> str | None:
    """Display name of a ``language[_TERRITORY]`` code from CLDR.

    Args:
        code: Locale code without codeset or modifier (e.g. "de_DE")
        display_locale: Locale the name is rendered in (e.g. "en")

    Returns:
        The display name, or None when CLDR does not know the code

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("cldr_display_name")
    from babel import Locale  # noqa: PLC0415
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        return Locale.parse(code).get_display_name(display_locale)
    except (UnknownLocaleError, ValueError):
        return None
