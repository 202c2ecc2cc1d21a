"""Render a unified locale set as a Python module.

The generated module contains:

- ``UnknownLocaleError(ValueError)``
- one class per locale (``fr_FR``), holding one nested class per Fields
  category with one ``Final`` constant per canonical field
- link re-exports after all classes (``fr_BE.LC_TIME = fr_FR.LC_TIME``),
  ordered so every target exists before it is referenced
- ``Locale(StrEnum)`` over all locale names with a fallible ``from_str``
- ``NAMESPACES`` and ``lookup(locale, category, field)``

Output is a pure function of the unified model: same input, same bytes.

Python 3.13+. Zero external dependencies.
"""

import keyword

from localeforge.diagnostics import CodegenError, ErrorTemplate
from localeforge.locale_key import LocaleKey
from localeforge.schema import CanonicalSchema, CategoryLink, CategoryTable, UnifiedLocales

__all__ = ["emit_python_module", "python_identifier"]

_INDENT: str = "    "

_HEADER: str = '''\
# Generated by localeforge. Do not edit; regenerate with `localeforge generate`.
"""Locale data unified from POSIX locale sources."""

from enum import StrEnum
from typing import Final


class UnknownLocaleError(ValueError):
    """Raised for locale names outside the generated set."""
'''

_FOOTER: str = '''

def lookup(locale: Locale | str, category: str, field: str) -> object:
    """Value of one field of one locale's category.

    Raises:
        UnknownLocaleError: If locale is not generated
        AttributeError: If the category or field does not exist
    """
    namespace = NAMESPACES[Locale.from_str(str(locale))]
    return getattr(getattr(namespace, category), field)
'''


def python_identifier(name: str, context: str) -> str:
    """Turn name into a usable identifier; keywords get a trailing underscore.

    Raises:
        CodegenError: If name is not an identifier at all

    Example:
        >>> python_identifier("as", "locale")
        'as_'
    """
    if not name.isidentifier():
        raise CodegenError(ErrorTemplate.invalid_identifier(name, context))
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        return name + "_"
    return name


def _locale_identifier(locale: str) -> str:
    return python_identifier(LocaleKey.parse(locale).identifier, "locale")


def _emit_table(table: CategoryTable, schema: CanonicalSchema, output: list[str]) -> None:
    category = python_identifier(table.category, f"category of {table.locale}")
    output.append(f"\n{_INDENT}class {category}:\n")
    output.append(f'{_INDENT * 2}"""{table.category} of {table.locale}."""\n')
    fields = schema.fields(table.category)
    if fields:
        output.append("\n")
    for field in fields:
        name = python_identifier(field.key, f"field of {table.category}")
        value = table.get(field.key)
        output.append(f"{_INDENT * 2}{name}: Final[{field.type_name}] = {value!r}\n")


def _link_order(unified: UnifiedLocales) -> list[CategoryLink]:
    """Links ordered so that each target is bound before use."""
    pending = [entry for entry in unified.iter_entries() if CategoryLink.guard(entry)]
    bound: set[tuple[str, str]] = {
        (entry.locale, entry.category)
        for entry in unified.iter_entries()
        if CategoryTable.guard(entry)
    }
    ordered: list[CategoryLink] = []
    while pending:
        ready = [link for link in pending if (link.target, link.category) in bound]
        if not ready:
            # Unreachable for unifier output, which rejects alias cycles.
            names = ", ".join(f"{link.locale}/{link.category}" for link in pending)
            msg = f"Links without a bound target: {names}"
            raise CodegenError(msg)
        for link in ready:
            ordered.append(link)
            bound.add((link.locale, link.category))
        pending = [link for link in pending if link not in ready]
    return ordered


def emit_python_module(unified: UnifiedLocales) -> str:
    """Render unified locales as Python source.

    Raises:
        CodegenError: If a locale, category or field name cannot be an identifier
    """
    output: list[str] = [_HEADER]
    identifiers = {locale: _locale_identifier(locale) for locale in unified.locales}

    for locale in unified.locales:
        output.append(f"\n\nclass {identifiers[locale]}:\n")
        output.append(f'{_INDENT}"""Locale {locale}."""\n')
        for _, entry in unified.categories(locale):
            if CategoryTable.guard(entry):
                _emit_table(entry, unified.schema, output)

    links = _link_order(unified)
    if links:
        output.append("\n\n")
        for link in links:
            category = python_identifier(link.category, f"category of {link.locale}")
            output.append(
                f"{identifiers[link.locale]}.{category} = {identifiers[link.target]}.{category}\n"
            )

    output.append("\n\nclass Locale(StrEnum):\n")
    output.append(f'{_INDENT}"""Every generated locale."""\n\n')
    for locale in unified.locales:
        output.append(f"{_INDENT}{identifiers[locale]} = {locale!r}\n")
    output.append(
        "\n"
        f"{_INDENT}@classmethod\n"
        f'{_INDENT}def from_str(cls, name: str) -> "Locale":\n'
        f'{_INDENT * 2}"""Parse a locale name such as \'sr_RS@latin\'."""\n'
        f"{_INDENT * 2}try:\n"
        f"{_INDENT * 3}return cls(name)\n"
        f"{_INDENT * 2}except ValueError:\n"
        f"{_INDENT * 3}raise UnknownLocaleError(name) from None\n"
    )

    output.append("\n\nNAMESPACES: Final[dict[Locale, type]] = {\n")
    for locale in unified.locales:
        output.append(f"{_INDENT}Locale.{identifiers[locale]}: {identifiers[locale]},\n")
    output.append("}\n")
    output.append(_FOOTER)
    return "".join(output)
