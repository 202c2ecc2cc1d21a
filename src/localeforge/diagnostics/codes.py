"""Diagnostic codes, source spans and the Diagnostic record.

Every error localeforge reports carries a Diagnostic; the exception classes
in errors.py wrap one and the formatter renders it.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Stable numeric codes, grouped by the stage that reports them:

        3000-3999: Syntax errors (locale source grammar)
        6000-6999: Schema errors (cross-locale unification)
        7000-7999: Loading, naming and code generation errors
    """

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    SOURCE_TOO_LARGE = 3002
    INVALID_PREAMBLE = 3003
    UNTERMINATED_STRING = 3004
    INVALID_UNICODE_ESCAPE = 3005
    INVALID_ESCAPE = 3006
    INTEGER_OUT_OF_RANGE = 3007
    CATEGORY_END_MISMATCH = 3008
    UNEXPECTED_CONTENT = 3009

    # Schema errors (6000-6999)
    UNKNOWN_ALIAS_TARGET = 6001
    INVALID_ALIAS_PAYLOAD = 6002
    MIXED_VALUE_TYPES = 6003
    UNRESOLVED_ALIAS = 6004
    CYCLIC_ALIAS = 6005

    # Loading, naming and code generation errors (7000-7999)
    INVALID_LOCALE_NAME = 7001
    INVALID_IDENTIFIER = 7002
    UNDECODABLE_SOURCE = 7003


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Character range of a diagnostic inside one locale source.

    Offsets count code points, not bytes; line and column are 1-based.
    A span produced by the parser is usually empty (start == end) and marks
    the point where parsing stopped.
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            msg = f"SourceSpan needs 0 <= start <= end, got start={self.start} end={self.end}"
            raise ValueError(msg)
        if min(self.line, self.column) < 1:
            msg = f"SourceSpan line/column are 1-based, got {self.line}:{self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reportable problem: code, message, optional location and hint.

    source_name is the locale file (or bare locale name) the problem belongs
    to. The parser does not know it, so syntax diagnostics get it later
    through with_source().
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    source_name: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        return self.message

    def with_source(self, source_name: str) -> "Diagnostic":
        """Same diagnostic attributed to source_name."""
        return replace(self, source_name=source_name)

    def format_error(self) -> str:
        """Default (rust-style) rendering, as printed by the CLI.

        Example output:
            error[CATEGORY_END_MISMATCH]: Expected 'END LC_TIME'
              --> fr_BE:12:1
              = help: Every category block must be closed by END and its own name
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
