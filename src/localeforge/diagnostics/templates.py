"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable, consistent, and documents every error case.
    """

    # =========================================================================
    # SYNTAX ERRORS (3000-3999)
    # =========================================================================

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Unexpected end of file.

        Args:
            position: The position where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            hint="Check for an unterminated string or a missing END line",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Source exceeds the configured size limit."""
        msg = f"Source size ({size:,} characters) exceeds maximum ({limit:,} characters)"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Configure max_source_size in the LocaleParser constructor",
        )

    @staticmethod
    def syntax(
        code: DiagnosticCode, message: str, span: SourceSpan, hint: str | None = None
    ) -> Diagnostic:
        """Grammar failure at a known source position.

        Args:
            code: One of the 3000-range syntax codes
            message: Parser message (already includes expected tokens)
            span: Location of the failure
            hint: Overrides the default hint for code

        Returns:
            Diagnostic carrying the span
        """
        hints = {
            DiagnosticCode.INVALID_PREAMBLE: (
                "comment_char and escape_char each take exactly one character"
            ),
            DiagnosticCode.UNTERMINATED_STRING: "Close the string with '\"'",
            DiagnosticCode.INVALID_UNICODE_ESCAPE: (
                "Unicode escapes are written <Uhhhh> with 1-8 hex digits"
            ),
            DiagnosticCode.INVALID_ESCAPE: "The escape character must be followed by a character",
            DiagnosticCode.CATEGORY_END_MISMATCH: (
                "Every category block must be closed by END and its own name"
            ),
            DiagnosticCode.UNEXPECTED_CONTENT: (
                "Only comments and blank lines may appear outside category blocks"
            ),
        }
        if hint is None:
            hint = hints.get(code)
        return Diagnostic(code=code, message=message, span=span, hint=hint)

    # =========================================================================
    # SCHEMA ERRORS (6000-6999)
    # =========================================================================

    @staticmethod
    def unknown_alias_target(locale: str, category: str, target: str) -> Diagnostic:
        """Alias directive names a locale that was not loaded."""
        msg = f"Unknown locale '{target}' aliased by {locale}/{category}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ALIAS_TARGET,
            message=msg,
            hint="copy/include must name a locale file present in the input directory",
            source_name=locale,
        )

    @staticmethod
    def invalid_alias_payload(locale: str, category: str, key: str, payload: str) -> Diagnostic:
        """Alias directive does not carry exactly one quoted locale name."""
        msg = f"Invalid {key} payload in {locale}/{category}: {payload}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ALIAS_PAYLOAD,
            message=msg,
            hint=f'Write {key} "<locale>" with a single quoted locale name',
            source_name=locale,
        )

    @staticmethod
    def mixed_value_types(locale: str, category: str, key: str) -> Diagnostic:
        """One value run mixes Integer and textual values."""
        msg = f"Mixed integer and string values in {locale}/{category}.{key}"
        return Diagnostic(
            code=DiagnosticCode.MIXED_VALUE_TYPES,
            message=msg,
            hint="Quote every value of the run to make it textual",
            source_name=locale,
        )

    @staticmethod
    def unresolved_alias(locale: str, category: str, target: str) -> Diagnostic:
        """Alias target locale lacks the aliased category."""
        msg = f"{locale}/{category} aliases {target}, which does not define {category}"
        return Diagnostic(
            code=DiagnosticCode.UNRESOLVED_ALIAS,
            message=msg,
            hint=f"Define {category} in {target} or alias another locale",
            source_name=locale,
        )

    @staticmethod
    def cyclic_alias(cycle: list[str]) -> Diagnostic:
        """Alias chain loops back onto itself."""
        msg = f"Cyclic alias: {' -> '.join(cycle)}"
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_ALIAS,
            message=msg,
            hint="Break the cycle by giving one of the categories its own fields",
            source_name=cycle[0].split("/", 1)[0] if cycle else None,
        )

    # =========================================================================
    # LOADING, NAMING AND CODEGEN ERRORS (7000-7999)
    # =========================================================================

    @staticmethod
    def invalid_locale_name(name: str, reason: str) -> Diagnostic:
        """File name is not a locale key."""
        msg = f"Invalid locale name '{name}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_NAME,
            message=msg,
            hint="Locale names look like language[_territory][@modifier]",
        )

    @staticmethod
    def undecodable_source(
        source_name: str, encoding: str, error: UnicodeDecodeError
    ) -> Diagnostic:
        """Locale file bytes are not valid in the configured encoding."""
        byte = error.object[error.start : error.start + 1].hex()
        msg = (
            f"Cannot decode {source_name} as {encoding}: "
            f"invalid byte 0x{byte} at offset {error.start}"
        )
        return Diagnostic(
            code=DiagnosticCode.UNDECODABLE_SOURCE,
            message=msg,
            hint=f"Convert the file to {encoding}",
            source_name=source_name,
        )

    @staticmethod
    def invalid_identifier(name: str, context: str) -> Diagnostic:
        """Name cannot be rendered as a Python identifier."""
        msg = f"Cannot emit '{name}' as an identifier ({context})"
        return Diagnostic(
            code=DiagnosticCode.INVALID_IDENTIFIER,
            message=msg,
            hint="Exclude the category from unification or rename the key",
        )
