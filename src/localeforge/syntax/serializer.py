"""Serialize locale AST back to locale source syntax.

Converts AST nodes to locale source text. Useful for:
- Fixtures and test data generation
- Property-based testing (roundtrip: parse -> serialize -> parse)

Python 3.13+.
"""

from localeforge.constants import COMMENT_CHAR_DIRECTIVE, ESCAPE_CHAR_DIRECTIVE

from .ast import (
    Category,
    Field,
    IntegerValue,
    LocaleDefinition,
    RawValue,
    SpecialChars,
    StringValue,
    Value,
)

__all__ = [
    "SerializationValidationError",
    "serialize_category",
    "serialize_definition",
    "serialize_field",
    "serialize_value",
]


class SerializationValidationError(ValueError):
    """Raised when a node has no textual form that parses back to it.

    Common causes:
    - Raw value that would re-parse as an Integer or a String
    - Raw value needing escapes in a file without an escape character
    - Key that fits neither the bare nor the bracketed key form
    """


_BARE_KEY_CHARS: str = "abcdefghijklmnopqrstuvwxyz0123456789_-"
_LITERAL_KEYS: frozenset[str] = frozenset(("..", "UNDEFINED"))

# Characters written as <Uhhhh> inside quoted strings.
_STRING_ENCODED: str = '"<\n\r'

_RAW_SPECIAL: str = " \t\r\n;"


def _encode_code_point(ch: str) -> str:
    return f"<U{ord(ch):04X}>"


def _serialize_string(text: str, chars: SpecialChars) -> str:
    if not text:
        return '""'
    parts = ["\""]
    for ch in text:
        if ch in _STRING_ENCODED or ch == chars.escape_char:
            parts.append(_encode_code_point(ch))
        else:
            parts.append(ch)
    parts.append("\"")
    return "".join(parts)


def _looks_like_integer(text: str) -> bool:
    digits = text.removeprefix("-")
    return bool(digits) and digits.isascii() and digits.isdigit()


def _serialize_raw(text: str, chars: SpecialChars) -> str:
    special = _RAW_SPECIAL + chars.comment_char
    if chars.escape_char is not None:
        special += chars.escape_char

    if not text:
        msg = "Raw value must not be empty"
        raise SerializationValidationError(msg)
    # A leading escape is read as an inline blank, so the first character
    # must stand on its own.
    if text[0] in special or text[0] == '"':
        msg = f"Raw value {text!r} cannot start with {text[0]!r}"
        raise SerializationValidationError(msg)

    head = text
    for index, ch in enumerate(text):
        if ch in special:
            head = text[:index]
            break
    if _looks_like_integer(head):
        msg = f"Raw value {text!r} would re-parse as an Integer"
        raise SerializationValidationError(msg)

    parts: list[str] = []
    for ch in text:
        if ch in special:
            if chars.escape_char is None:
                msg = f"Raw value {text!r} needs an escape character for {ch!r}"
                raise SerializationValidationError(msg)
            parts.append(chars.escape_char)
        parts.append(ch)
    return "".join(parts)


def serialize_value(value: Value, chars: SpecialChars | None = None) -> str:
    """Render one value in locale source syntax.

    Integers are written in decimal. Strings are quoted, with '"', '<', line
    breaks and the escape character written as <Uhhhh> so no escape character
    is required. Raw tokens are written as-is with the escape character in
    front of separators.

    Raises:
        SerializationValidationError: If no textual form re-parses to value

    Example:
        >>> serialize_value(StringValue('say "hi"'))
        '"say <U0022>hi<U0022>"'
        >>> serialize_value(IntegerValue(-3))
        '-3'
    """
    chars = chars if chars is not None else SpecialChars()
    match value:
        case IntegerValue():
            return str(value.value)
        case StringValue():
            return _serialize_string(value.text, chars)
        case RawValue():
            return _serialize_raw(value.text, chars)


def _serialize_key(key: str) -> str:
    if key in _LITERAL_KEYS or (key and all(ch in _BARE_KEY_CHARS for ch in key)):
        return key
    if key and not any(ch in key for ch in ">\r\n"):
        return f"<{key}>"
    msg = f"Key {key!r} has no textual form"
    raise SerializationValidationError(msg)


def serialize_field(field: Field, chars: SpecialChars | None = None) -> str:
    """Render one key line (without line ending).

    Example:
        >>> serialize_field(Field("grouping", (IntegerValue(3), IntegerValue(3))))
        'grouping 3;3'
    """
    chars = chars if chars is not None else SpecialChars()
    key = _serialize_key(field.key)
    if field.is_blank:
        return key
    return key + " " + ";".join(serialize_value(v, chars) for v in field.values)


def serialize_category(category: Category, chars: SpecialChars | None = None) -> str:
    """Render a category block including its END marker and final newline."""
    chars = chars if chars is not None else SpecialChars()
    lines = [category.name]
    lines.extend(serialize_field(f, chars) for f in category.fields)
    lines.append(f"END {category.name}")
    return "\n".join(lines) + "\n"


def serialize_definition(definition: LocaleDefinition) -> str:
    """Render a whole locale file, preamble included.

    Files using the fallback characters are written without a preamble. Any
    other character pair is declared explicitly.

    Raises:
        SerializationValidationError: If the characters cannot be declared
    """
    chars = definition.special_chars
    output: list[str] = []

    if chars != SpecialChars.fallback():
        if chars.escape_char is None:
            msg = "A preamble cannot declare the absence of an escape character"
            raise SerializationValidationError(msg)
        if chars.comment_char.isspace() or chars.escape_char.isspace():
            msg = "Preamble characters must not be whitespace"
            raise SerializationValidationError(msg)
        output.append(f"{COMMENT_CHAR_DIRECTIVE} {chars.comment_char}\n")
        output.append(f"{ESCAPE_CHAR_DIRECTIVE} {chars.escape_char}\n")

    for category in definition.categories:
        output.append("\n")
        output.append(serialize_category(category, chars))

    return "".join(output)
