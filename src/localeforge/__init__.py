"""localeforge - Unify POSIX locale sources into typed Python data.

Parses glibc-style locale definition files, unifies every locale's
categories into one canonical schema, and emits a Python module with one
identically shaped namespace per locale.

Usage:
    >>> from localeforge import DirectoryLocaleLoader, build_locales, emit_python_module
    >>> unified = build_locales(DirectoryLocaleLoader("localedata/locales"))
    >>> unified.schema.field("LC_TIME", "D_FMT").type_name
    'str'
    >>> source = emit_python_module(unified)

Python 3.13+. Babel is optional (locale display names).
"""

# Essential Public API - Minimal exports for clean namespace
from .codegen import emit_python_module
from .diagnostics import LocaleError, LocaleSyntaxError, SchemaError
from .locale_key import LocaleKey
from .localization import DirectoryLocaleLoader, LocaleSourceLoader
from .pipeline import build_locales, parse_all
from .schema import SchemaUnifier, UnifiedLocales, UnifierConfig, unify
from .syntax import parse as parse_locale
from .syntax import serialize_definition as serialize_locale

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localeforge")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DirectoryLocaleLoader",
    "LocaleError",
    "LocaleKey",
    "LocaleSourceLoader",
    "LocaleSyntaxError",
    "SchemaError",
    "SchemaUnifier",
    "UnifiedLocales",
    "UnifierConfig",
    "__version__",
    "build_locales",
    "emit_python_module",
    "parse_all",
    "parse_locale",
    "serialize_locale",
    "unify",
]
