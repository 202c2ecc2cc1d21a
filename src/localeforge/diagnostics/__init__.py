"""Diagnostic system for localeforge errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    AliasPayloadError,
    CodegenError,
    CyclicAliasError,
    InvalidLocaleNameError,
    LocaleDecodeError,
    LocaleError,
    LocaleSyntaxError,
    MixedTypeError,
    SchemaError,
    UnknownLocaleAliasError,
    UnresolvedAliasError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "AliasPayloadError",
    "CodegenError",
    "CyclicAliasError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "InvalidLocaleNameError",
    "LocaleDecodeError",
    "LocaleError",
    "LocaleSyntaxError",
    "MixedTypeError",
    "OutputFormat",
    "SchemaError",
    "SourceSpan",
    "UnknownLocaleAliasError",
    "UnresolvedAliasError",
]
