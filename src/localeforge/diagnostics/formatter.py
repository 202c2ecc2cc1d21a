"""Rendering of diagnostics for the terminal and for tools.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_SEVERITY_COLOURS = {"error": "1;31", "warning": "1;33"}


class OutputFormat(StrEnum):
    """Values accepted by ``localeforge --format``."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostic records into text.

    ``rust`` is a multi-line block with location and help lines, ``simple``
    one ``location: CODE: message`` line, ``json`` one JSON object per
    diagnostic. color only affects ``rust``.

    Example:
        >>> diagnostic = ErrorTemplate.unknown_alias_target("fr_BE", "LC_TIME", "xx_XX")
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[UNKNOWN_ALIAS_TARGET]: Unknown locale 'xx_XX' aliased by fr_BE/LC_TIME
          --> fr_BE
          = help: copy/include must name a locale file present in the input directory
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic))
        fr_BE: UNKNOWN_ALIAS_TARGET: Unknown locale 'xx_XX' aliased by fr_BE/LC_TIME
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        match self.output_format:
            case OutputFormat.RUST:
                return self._rust(diagnostic)
            case OutputFormat.SIMPLE:
                location = _location(diagnostic)
                prefix = f"{location}: " if location else ""
                return f"{prefix}{diagnostic.code.name}: {diagnostic.message}"
            case OutputFormat.JSON:
                return self._json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render each diagnostic, separated by a blank line."""
        return "\n\n".join(map(self.format, diagnostics))

    def _rust(self, diagnostic: Diagnostic) -> str:
        severity = diagnostic.severity
        if self.color:
            severity = f"\033[{_SEVERITY_COLOURS[severity]}m{severity}\033[0m"

        lines = [f"{severity}[{diagnostic.code.name}]: {diagnostic.message}"]
        location = _location(diagnostic)
        if location:
            lines.append(f"  --> {location}")
        if diagnostic.hint:
            lines.append(f"  = help: {diagnostic.hint}")
        return "\n".join(lines)

    @staticmethod
    def _json(diagnostic: Diagnostic) -> str:
        record: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if diagnostic.source_name:
            record["source"] = diagnostic.source_name
        if span := diagnostic.span:
            record |= {
                "line": span.line,
                "column": span.column,
                "start": span.start,
                "end": span.end,
            }
        if diagnostic.hint:
            record["hint"] = diagnostic.hint
        return json.dumps(record, ensure_ascii=False)


def _location(diagnostic: Diagnostic) -> str | None:
    """``file:line:col``, ``line N, column M``, the bare file, or None."""
    span, name = diagnostic.span, diagnostic.source_name
    if span is None:
        return name
    if name is None:
        return f"line {span.line}, column {span.column}"
    return f"{name}:{span.line}:{span.column}"
