"""Primitive parsers for the locale source grammar.

Low-level parsers for keys, category names, integers, quoted strings and raw
tokens. Each returns ParseResult on a match and None when the alternative
does not apply at the cursor. Structural failures inside a token that has
clearly started (an unterminated string, a malformed <U...> escape, an
integer outside the 64-bit range) raise LocaleSyntaxError instead: there is
no partial-file recovery.

Every rule receives the file's SpecialChars explicitly; there is no parse
state outside the arguments.
"""

from localeforge.constants import INTEGER_MAX, INTEGER_MIN, MAX_UNICODE_ESCAPE_DIGITS
from localeforge.diagnostics import DiagnosticCode, ErrorTemplate, LocaleSyntaxError
from localeforge.syntax.ast import IntegerValue, RawValue, SpecialChars, StringValue
from localeforge.syntax.cursor import Cursor, ParseError, ParseResult
from localeforge.syntax.parser.whitespace import MULTISPACE, escape_width

__all__ = [
    "at_token_boundary",
    "fail",
    "parse_category_name",
    "parse_integer",
    "parse_key",
    "parse_raw",
    "parse_string",
]

# Maximum valid Unicode code point per Unicode Standard.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range (D800-DFFF), invalid as scalar values.
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

# ASCII digits only; str.isdigit() accepts superscripts that int() rejects.
_ASCII_DIGITS: str = "0123456789"

_KEY_CHARS: str = "abcdefghijklmnopqrstuvwxyz0123456789_-"
_CATEGORY_CHARS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ_"

# Literal keys used by collation tables.
_ELLIPSIS_KEY: str = ".."
_UNDEFINED_KEY: str = "UNDEFINED"

# Characters that end a raw token (in addition to the comment character).
_RAW_TERMINATORS: str = " \t\r\n;"

# Characters an escape protects inside quoted strings, besides itself and
# line ends. An escape before any other character is kept literally.
_STRING_ESCAPABLE: str = "\"<>"


def fail(
    code: DiagnosticCode,
    message: str,
    cursor: Cursor,
    expected: tuple[str, ...] = (),
    hint: str | None = None,
) -> LocaleSyntaxError:
    """Build the LocaleSyntaxError for a hard failure at cursor.

    Returned rather than raised so call sites read ``raise fail(...)``.
    hint replaces the default hint of code.
    """
    error = ParseError(message, cursor, expected)
    diagnostic = ErrorTemplate.syntax(code, error.format_error(), cursor.to_span(), hint)
    return LocaleSyntaxError(diagnostic, parse_error=error)


def parse_category_name(cursor: Cursor) -> ParseResult[str] | None:
    """Parse category name: [A-Z_]+

    Examples:
        LC_TIME -> "LC_TIME"
        LC_MONETARY -> "LC_MONETARY"
    """
    end = cursor.skip_while(_CATEGORY_CHARS)
    if end.pos == cursor.pos:
        return None
    return ParseResult(cursor.slice_to(end.pos), end)


def parse_key(cursor: Cursor) -> ParseResult[str] | None:
    """Parse field key.

    Alternatives, first match wins:
        [a-z0-9_-]+        -> d_fmt, mon_grouping, country-code
        "<" [^>]+ ">"      -> <U0041> yields "U0041" (brackets dropped)
        ".." | "UNDEFINED" -> literal collation keys

    The bracketed form does not cross a line end.
    """
    end = cursor.skip_while(_KEY_CHARS)
    if end.pos > cursor.pos:
        return ParseResult(cursor.slice_to(end.pos), end)

    if not cursor.is_eof and cursor.current == "<":
        inner_start = cursor.advance()
        inner_end = inner_start
        while not inner_end.is_eof and inner_end.current not in (">", "\n", "\r"):
            inner_end = inner_end.advance()
        if inner_end.pos > inner_start.pos and not inner_end.is_eof and inner_end.current == ">":
            return ParseResult(inner_start.slice_to(inner_end.pos), inner_end.advance())
        return None

    for literal in (_ELLIPSIS_KEY, _UNDEFINED_KEY):
        if cursor.startswith(literal):
            return ParseResult(literal, cursor.advance(len(literal)))

    return None


def parse_integer(cursor: Cursor, chars: SpecialChars) -> ParseResult[IntegerValue] | None:
    """Parse integer literal: -?[0-9]+

    The whole token must be numeric: a digit run followed by anything other
    than a token terminator (whitespace, ';', comment or escape character,
    EOF) is not an integer and falls through to the string/raw alternatives.

    A numeric token always wins over the textual alternatives, even where a
    string may have been intended.

    Raises:
        LocaleSyntaxError: If the literal does not fit a signed 64-bit integer

    Examples:
        2 -> IntegerValue(2)
        -1 -> IntegerValue(-1)
        19971130 -> IntegerValue(19971130)
    """
    start = cursor
    if not cursor.is_eof and cursor.current == "-":
        cursor = cursor.advance()

    digits_end = cursor.skip_while(_ASCII_DIGITS)
    if digits_end.pos == cursor.pos:
        return None

    nxt = digits_end.peek()
    if nxt is not None and not (
        nxt in _RAW_TERMINATORS or nxt == chars.comment_char or nxt == chars.escape_char
    ):
        return None

    number = int(start.slice_to(digits_end.pos))
    if not INTEGER_MIN <= number <= INTEGER_MAX:
        raise fail(
            DiagnosticCode.INTEGER_OUT_OF_RANGE,
            f"Integer literal {number} does not fit in 64 bits",
            start,
        )
    return ParseResult(IntegerValue(number), digits_end)


def _parse_unicode_escape(cursor: Cursor) -> tuple[str, Cursor]:
    """Decode <Uhhhh> at cursor (positioned at '<', followed by 'U').

    Raises:
        LocaleSyntaxError: On missing digits, more than 8 digits, missing '>',
            or a value that is not a Unicode scalar value
    """
    digits_start = cursor.advance(2)
    digits_end = digits_start.skip_while(_HEX_DIGITS)
    hex_digits = digits_start.slice_to(digits_end.pos)

    if (
        not hex_digits
        or len(hex_digits) > MAX_UNICODE_ESCAPE_DIGITS
        or digits_end.is_eof
        or digits_end.current != ">"
    ):
        raise fail(
            DiagnosticCode.INVALID_UNICODE_ESCAPE,
            f"Invalid Unicode escape (expected 1-{MAX_UNICODE_ESCAPE_DIGITS} hex digits)",
            cursor,
            ("<Uhhhh>",),
        )

    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT:
        raise fail(
            DiagnosticCode.INVALID_UNICODE_ESCAPE,
            f"Invalid Unicode code point: U+{hex_digits} (max U+10FFFF)",
            cursor,
        )
    if _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END:
        raise fail(
            DiagnosticCode.INVALID_UNICODE_ESCAPE,
            f"Invalid surrogate code point: U+{hex_digits} (surrogates not allowed)",
            cursor,
        )
    return chr(code_point), digits_end.advance()


def parse_string(cursor: Cursor, chars: SpecialChars) -> ParseResult[StringValue] | None:
    """Parse quoted string: "text"

    Inside the quotes:
        escape + newline         -> nothing (line continuation)
        escape + escape, " < >   -> the protected character
        escape + any other char  -> both characters, unchanged
        <Uhhhh>                  -> the code point U+hhhh (1-8 hex digits)

    ``""`` yields the empty string directly.

    Raises:
        LocaleSyntaxError: On a missing closing quote or an invalid escape

    Examples:
        "%d/%m/%y" -> "%d/%m/%y"
        "%d//%m//%y" -> "%d/%m/%y"
        "<U00E9>t<U00E9>" -> "été"
    """
    if cursor.is_eof or cursor.current != '"':
        return None

    if cursor.startswith('""'):
        return ParseResult(StringValue(""), cursor.advance(2))

    opening = cursor
    cursor = cursor.advance()
    parts: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == '"':
            return ParseResult(StringValue("".join(parts)), cursor.advance())

        if ch == chars.escape_char:
            width = escape_width(cursor, chars.escape_char)
            if width == 0:
                raise fail(
                    DiagnosticCode.INVALID_ESCAPE,
                    "Escape character at end of input",
                    cursor,
                )
            escaped = cursor.slice_ahead(width)[1:]
            if escaped in ("\n", "\r", "\r\n"):
                cursor = cursor.advance(width)
            elif escaped == chars.escape_char or escaped in _STRING_ESCAPABLE:
                parts.append(escaped)
                cursor = cursor.advance(width)
            else:
                parts.append(ch)
                cursor = cursor.advance()
        elif ch == "<" and cursor.peek(1) == "U":
            decoded, cursor = _parse_unicode_escape(cursor)
            parts.append(decoded)
        else:
            parts.append(ch)
            cursor = cursor.advance()

    raise fail(
        DiagnosticCode.UNTERMINATED_STRING,
        "Unterminated string literal",
        opening,
        ('"',),
    )


def parse_raw(cursor: Cursor, chars: SpecialChars) -> ParseResult[RawValue] | None:
    """Parse unquoted token.

    A run of characters other than whitespace, ';' and the comment
    character. The escape character splices the next character in literally.

    Examples:
        LC_IDENTIFICATION -> RawValue("LC_IDENTIFICATION")
        <U0041> -> RawValue("<U0041>") (no Unicode decoding outside quotes)
    """
    parts: list[str] = []
    start = cursor.pos

    while not cursor.is_eof:
        ch = cursor.current
        if ch == chars.escape_char:
            nxt = cursor.peek(1)
            if nxt is None:
                break
            parts.append(nxt)
            cursor = cursor.advance(2)
        elif ch in _RAW_TERMINATORS or ch == chars.comment_char:
            break
        else:
            parts.append(ch)
            cursor = cursor.advance()

    if cursor.pos == start:
        return None
    return ParseResult(RawValue("".join(parts)), cursor)


def at_token_boundary(cursor: Cursor, chars: SpecialChars) -> bool:
    """Check whether cursor sits at EOF, whitespace or a comment."""
    return cursor.is_eof or cursor.current in MULTISPACE or cursor.current == chars.comment_char
