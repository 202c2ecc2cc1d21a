"""Grammar rules for the locale source parser.

This module provides the structural rules built on the primitives:
- Preamble parsing (comment_char / escape_char directives)
- Value and value-list parsing (ordered alternatives, column placeholders)
- Field and category parsing (key lines, END markers)

All grammar rules are co-located in a single module to keep the import graph
flat. The file's SpecialChars travel as an explicit argument; no rule reads
ambient state.

Lookahead Patterns:
    - `"` starts a String value
    - `-` or a digit may start an Integer value (token boundary decides)
    - `<` starts a bracketed key
    - `END` after a category's fields starts the closing marker
"""

from localeforge.constants import (
    COMMENT_CHAR_DIRECTIVE,
    DEFAULT_COMMENT_CHAR,
    DEFAULT_ESCAPE_CHAR,
    ESCAPE_CHAR_DIRECTIVE,
    FALLBACK_COMMENT_CHAR,
)
from localeforge.diagnostics import DiagnosticCode
from localeforge.syntax.ast import Category, Field, Span, SpecialChars, Value
from localeforge.syntax.cursor import Cursor, ParseResult
from localeforge.syntax.parser.primitives import (
    at_token_boundary,
    fail,
    parse_category_name,
    parse_integer,
    parse_key,
    parse_raw,
    parse_string,
)
from localeforge.syntax.parser.whitespace import (
    INLINE_SPACE,
    MULTISPACE,
    skip_blank_block,
    skip_blank_inline,
    skip_key_separator,
)

__all__ = [
    "parse_category",
    "parse_field",
    "parse_preamble",
    "parse_value",
    "parse_values",
]

# Separators between the value slots of one key line.
_VALUE_SEPARATORS: str = "; \t"

# Comment characters accepted before the comment_char directive is known.
_PREAMBLE_COMMENT_CHARS: str = DEFAULT_COMMENT_CHAR + FALLBACK_COMMENT_CHAR

_END_MARKER: str = "END"

_FIELD_LINE_HINT = (
    "Separate values with ';' or blanks and start trailing comments with the comment character"
)
_CATEGORY_NAME_HINT = "A category name must stand alone on its line"


# =============================================================================
# Preamble
# =============================================================================


def _skip_preamble_blank(cursor: Cursor, comment_chars: str) -> Cursor:
    """Skip whitespace and comment lines ahead of (or between) directives."""
    while not cursor.is_eof:
        ch = cursor.current
        if ch in MULTISPACE:
            cursor = cursor.skip_while(MULTISPACE)
        elif ch in comment_chars:
            cursor = cursor.skip_to_line_end()
        else:
            break
    return cursor


def _match_directive(cursor: Cursor) -> str | None:
    """Return the directive name at cursor, if a directive starts here."""
    for directive in (COMMENT_CHAR_DIRECTIVE, ESCAPE_CHAR_DIRECTIVE):
        if cursor.startswith(directive) and cursor.peek(len(directive)) in tuple(INLINE_SPACE):
            return directive
    return None


def _parse_directive_char(cursor: Cursor, directive: str) -> ParseResult[str]:
    """Parse the single character argument of a preamble directive.

    Raises:
        LocaleSyntaxError: If the argument is missing or longer than one character
    """
    value_start = cursor.skip_while(INLINE_SPACE)
    nxt = value_start.peek(1)
    if value_start.is_eof or value_start.current in MULTISPACE or (
        nxt is not None and nxt not in MULTISPACE
    ):
        raise fail(
            DiagnosticCode.INVALID_PREAMBLE,
            f"{directive} takes exactly one non-blank character",
            value_start,
            ("<char>",),
        )
    return ParseResult(value_start.current, value_start.advance())


def parse_preamble(cursor: Cursor) -> ParseResult[SpecialChars]:
    """Parse the comment_char / escape_char preamble.

    Each directive may appear at most once, in either order, optionally
    preceded by blank or comment lines. A directive missing from a partial
    preamble takes its default ('%' or '/'). A file without any directive uses
    SpecialChars.fallback() and nothing is consumed.

    Examples:
        comment_char %\\nescape_char / -> SpecialChars("%", "/")
        escape_char ;                  -> SpecialChars("%", ";")
        (no directives)                -> SpecialChars("#", None)

    Raises:
        LocaleSyntaxError: On a malformed or repeated directive
    """
    found: dict[str, str] = {}
    scan = cursor
    end = cursor

    while True:
        comment_chars = found.get(COMMENT_CHAR_DIRECTIVE, _PREAMBLE_COMMENT_CHARS)
        scan = _skip_preamble_blank(scan, comment_chars)
        directive = _match_directive(scan)
        if directive is None:
            break
        if directive in found:
            raise fail(
                DiagnosticCode.INVALID_PREAMBLE,
                f"Duplicate {directive} directive",
                scan,
            )
        result = _parse_directive_char(scan.advance(len(directive)), directive)
        found[directive] = result.value
        scan = end = result.cursor

    if not found:
        return ParseResult(SpecialChars.fallback(), cursor)

    chars = SpecialChars(
        comment_char=found.get(COMMENT_CHAR_DIRECTIVE, DEFAULT_COMMENT_CHAR),
        escape_char=found.get(ESCAPE_CHAR_DIRECTIVE, DEFAULT_ESCAPE_CHAR),
    )
    return ParseResult(chars, end)


# =============================================================================
# Values
# =============================================================================


def parse_value(cursor: Cursor, chars: SpecialChars) -> ParseResult[Value] | None:
    """Parse one value: Integer, else String, else Raw (first match wins).

    Leading inline blanks (spaces, inline comments, escaped characters) are
    skipped first.
    """
    cursor = skip_blank_inline(cursor, chars)

    integer = parse_integer(cursor, chars)
    if integer is not None:
        return ParseResult(integer.value, integer.cursor)

    string = parse_string(cursor, chars)
    if string is not None:
        return ParseResult(string.value, string.cursor)

    raw = parse_raw(cursor, chars)
    if raw is not None:
        return ParseResult(raw.value, raw.cursor)

    return None


def parse_values(cursor: Cursor, chars: SpecialChars) -> ParseResult[tuple[Value, ...]]:
    """Parse a separated list of optional value slots.

    value_list ::= value? (SEP value?)*   SEP ::= ';' | ' ' | '\\t'

    Empty slots only keep columns aligned in the source and are dropped.

    Examples:
        3;3       -> (IntegerValue(3), IntegerValue(3))
        "";""     -> (StringValue(""), StringValue(""))
        "a";;"b"  -> (StringValue("a"), StringValue("b"))
    """
    values: list[Value] = []
    while True:
        result = parse_value(cursor, chars)
        if result is not None:
            values.append(result.value)
            cursor = result.cursor
        if cursor.is_eof or cursor.current not in _VALUE_SEPARATORS:
            break
        cursor = cursor.advance()
    return ParseResult(tuple(values), cursor)


def _expect_line_end(cursor: Cursor, chars: SpecialChars) -> Cursor:
    """Require that nothing but inline blanks remains on the key line."""
    cursor = skip_blank_inline(cursor, chars)
    if not cursor.is_eof and cursor.current not in ("\n", "\r"):
        raise fail(
            DiagnosticCode.UNEXPECTED_CONTENT,
            f"Unexpected character {cursor.current!r} after field values",
            cursor,
            (";", "end of line"),
            hint=_FIELD_LINE_HINT,
        )
    return cursor


# =============================================================================
# Fields and categories
# =============================================================================


def parse_field(cursor: Cursor, chars: SpecialChars) -> ParseResult[Field] | None:
    """Parse one field: key (SPACE+ value_list)?

    A key with no gap after it is a field without values, and the next key
    may start right behind it on the same line. Collation ranges rely on
    this: ``<U0041>..<U005A> IGNORE`` is the keys U0041, .. and U005A, the
    last one carrying the value.

    Examples:
        d_fmt "%d/%m/%y"  -> Field("d_fmt", (StringValue("%d/%m/%y"),))
        translit_end      -> Field("translit_end", ())

    Raises:
        LocaleSyntaxError: If a value list is followed by content that is
            not a value
    """
    start = cursor.pos
    key = parse_key(cursor)
    if key is None:
        return None
    cursor = key.cursor

    after_gap = skip_key_separator(cursor, chars)
    if after_gap is None:
        field = Field(key=key.value, values=(), span=Span(start=start, end=cursor.pos))
        return ParseResult(field, cursor)

    parsed = parse_values(after_gap, chars)
    cursor = _expect_line_end(parsed.cursor, chars)
    field = Field(key=key.value, values=parsed.value, span=Span(start=start, end=cursor.pos))
    return ParseResult(field, cursor)


def _parse_end_marker(cursor: Cursor, chars: SpecialChars, name: str) -> Cursor:
    """Consume ``END <name>`` built from the name just parsed.

    Raises:
        LocaleSyntaxError: If the marker is missing or names another category
    """
    expected = f"{_END_MARKER} {name}"
    if cursor.startswith(_END_MARKER):
        after_end = cursor.advance(len(_END_MARKER))
        name_start = after_end.skip_while(INLINE_SPACE)
        if name_start.pos > after_end.pos and name_start.startswith(name):
            after_name = name_start.advance(len(name))
            if at_token_boundary(after_name, chars):
                return after_name

    if cursor.is_eof:
        found = "end of input"
    else:
        found = repr(cursor.slice_to(cursor.skip_to_line_end().pos))
    raise fail(
        DiagnosticCode.CATEGORY_END_MISMATCH,
        f"Category {name} is not closed, found {found}",
        cursor,
        (expected,),
    )


def parse_category(cursor: Cursor, chars: SpecialChars) -> ParseResult[Category] | None:
    """Parse a category block.

    category ::= NAME line_end field* END NAME

    Returns None when no category name starts at cursor; blank and comment
    lines ahead of the name are skipped first.

    Raises:
        LocaleSyntaxError: On a mismatched or missing END marker, or a
            malformed field line
    """
    cursor = skip_blank_block(cursor, chars.comment_char)
    start = cursor.pos
    name = parse_category_name(cursor)
    if name is None:
        return None
    cursor = name.cursor
    if not at_token_boundary(cursor, chars):
        raise fail(
            DiagnosticCode.UNEXPECTED_CONTENT,
            f"Unexpected character {cursor.current!r} after category name {name.value}",
            cursor,
            ("end of line",),
            hint=_CATEGORY_NAME_HINT,
        )

    fields: list[Field] = []
    while True:
        cursor = skip_blank_block(cursor, chars.comment_char)
        field = parse_field(cursor, chars)
        if field is None:
            break
        fields.append(field.value)
        cursor = field.cursor

    cursor = _parse_end_marker(cursor, chars, name.value)
    category = Category(
        name=name.value,
        fields=tuple(fields),
        span=Span(start=start, end=cursor.pos),
    )
    return ParseResult(category, cursor)
