"""Shared constants for localeforge.

Centralized defaults used across the syntax, schema and codegen packages.
Placing constants here avoids circular imports and provides a single source
of truth.

Constants are grouped by domain:
- Preamble defaults: comment/escape characters of locale source files
- Input limits: DoS prevention via size constraints
- Unification defaults: alias directives and excluded categories

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Preamble defaults
    "COMMENT_CHAR_DIRECTIVE",
    "ESCAPE_CHAR_DIRECTIVE",
    "DEFAULT_COMMENT_CHAR",
    "DEFAULT_ESCAPE_CHAR",
    "FALLBACK_COMMENT_CHAR",
    "FALLBACK_ESCAPE_CHAR",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_UNICODE_ESCAPE_DIGITS",
    "INTEGER_MIN",
    "INTEGER_MAX",
    # Unification defaults
    "ALIAS_KEYS",
    "EXCLUDED_CATEGORIES",
    "RESERVED_LANGUAGE",
]

# ============================================================================
# PREAMBLE DEFAULTS
# ============================================================================

COMMENT_CHAR_DIRECTIVE: str = "comment_char"
ESCAPE_CHAR_DIRECTIVE: str = "escape_char"

# Defaults for a directive missing from an otherwise present preamble.
DEFAULT_COMMENT_CHAR: str = "%"
DEFAULT_ESCAPE_CHAR: str = "/"

# Used when the file carries no preamble at all. The collation tables
# (iso14651_t1_pinyin and friends) are written with '#' comments and never
# declare an escape character.
FALLBACK_COMMENT_CHAR: str = "#"
FALLBACK_ESCAPE_CHAR: str | None = None

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB).
# The largest glibc locale sources are well under 1 MB.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# <Uhhhh> escapes carry between 1 and 8 hex digits.
MAX_UNICODE_ESCAPE_DIGITS: int = 8

# Integer values are signed 64-bit.
INTEGER_MIN: int = -(2**63)
INTEGER_MAX: int = 2**63 - 1

# ============================================================================
# UNIFICATION DEFAULTS
# ============================================================================

# Field keys whose sole string value names another locale to alias.
ALIAS_KEYS: frozenset[str] = frozenset(("copy", "include"))

# Categories parsed but left out of unification. Their contents (collation
# rules, character classes, paper and name formats) are either not
# key/value tables or mix value types within one run.
EXCLUDED_CATEGORIES: frozenset[str] = frozenset(
    ("LC_COLLATE", "LC_CTYPE", "LC_MEASUREMENT", "LC_NAME", "LC_PAPER")
)

# File names starting with this language token are transliteration tables.
RESERVED_LANGUAGE: str = "translit"
