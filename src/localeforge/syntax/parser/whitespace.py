"""Whitespace and comment skipping for the locale source parser.

Two skip rules exist because comments behave differently between lines and
inside a key line:

    blank_block ::= (comment_line | [ \\t\\r\\n]+)*
    blank_inline ::= ([ \\t]+ | inline_comment | escape any)*

An inline comment stops before an escaped line end so that a commented line
ending in the escape character still continues the logical line.
"""

from localeforge.syntax.ast import SpecialChars
from localeforge.syntax.cursor import Cursor

__all__ = [
    "INLINE_SPACE",
    "MULTISPACE",
    "escape_width",
    "skip_blank_block",
    "skip_blank_inline",
    "skip_key_separator",
]

INLINE_SPACE: str = " \t"
MULTISPACE: str = " \t\r\n"


def escape_width(cursor: Cursor, escape_char: str | None) -> int:
    """Width of an escape sequence starting at cursor, 0 if there is none.

    The escape character plus the single character it protects is two
    characters wide; an escaped CRLF line ending is three.
    """
    if escape_char is None or cursor.is_eof or cursor.current != escape_char:
        return 0
    nxt = cursor.peek(1)
    if nxt is None:
        return 0
    if nxt == "\r" and cursor.peek(2) == "\n":
        return 3
    return 2


def skip_blank_block(cursor: Cursor, comment_char: str) -> Cursor:
    """Skip whitespace (including line ends) and whole-line comments.

    Applied before every category name, field key and END marker.

    Args:
        cursor: Current position in source
        comment_char: The file's comment character

    Returns:
        New cursor at first character that is neither blank nor comment
    """
    while not cursor.is_eof:
        ch = cursor.current
        if ch == comment_char:
            cursor = cursor.skip_to_line_end()
        elif ch in MULTISPACE:
            cursor = cursor.skip_while(MULTISPACE)
        else:
            break
    return cursor


def skip_blank_inline(cursor: Cursor, chars: SpecialChars) -> Cursor:
    """Skip spaces, inline comments and escaped characters on a key line.

    Line ends are never consumed here except when escaped, which makes an
    escaped newline a line continuation.
    """
    while not cursor.is_eof:
        ch = cursor.current
        if ch in INLINE_SPACE:
            cursor = cursor.skip_while(INLINE_SPACE)
        elif ch == chars.comment_char:
            cursor = cursor.advance()
            while not cursor.is_eof and cursor.current not in ("\n", "\r"):
                if cursor.current == chars.escape_char and cursor.peek(1) in ("\n", "\r"):
                    break
                cursor = cursor.advance()
        elif width := escape_width(cursor, chars.escape_char):
            cursor = cursor.advance(width)
        else:
            break
    return cursor


def skip_key_separator(cursor: Cursor, chars: SpecialChars) -> Cursor | None:
    """Skip the mandatory gap between a field key and its first value.

    The gap is one or more spaces, tabs or escaped characters.

    Returns:
        Cursor after the gap, or None when the key is not followed by one
    """
    start = cursor.pos
    while not cursor.is_eof:
        if cursor.current in INLINE_SPACE:
            cursor = cursor.skip_while(INLINE_SPACE)
        elif width := escape_width(cursor, chars.escape_char):
            cursor = cursor.advance(width)
        else:
            break
    return cursor if cursor.pos > start else None
