"""Load, parse and unify a locale set.

The driver between loaders, the parser and the unifier:

    loader.discover() -> loader.load() per key -> LocaleParser.parse() per file
    -> SchemaUnifier.unify() once over the whole set

Any failure aborts the batch. Parse failures are re-raised with the file
they came from attached.

Python 3.13+. Zero external dependencies.
"""

import logging

from localeforge.diagnostics import LocaleSyntaxError
from localeforge.locale_key import LocaleKey
from localeforge.localization import LocaleSourceLoader
from localeforge.schema import SchemaUnifier, UnifiedLocales, UnifierConfig
from localeforge.syntax import LocaleDefinition, LocaleParser

__all__ = ["build_locales", "parse_all"]

logger = logging.getLogger(__name__)


def parse_all(
    loader: LocaleSourceLoader,
    parser: LocaleParser | None = None,
) -> dict[LocaleKey, LocaleDefinition]:
    """Parse every locale the loader discovers.

    Args:
        loader: Source of locale files
        parser: Parser to use (default: LocaleParser())

    Returns:
        Parsed definitions keyed and ordered by locale key

    Raises:
        LocaleSyntaxError: With source_name set to the offending file
        LocaleDecodeError: If a file is not valid in the loader's encoding
        OSError: If a file cannot be read
    """
    parser = parser if parser is not None else LocaleParser()
    definitions: dict[LocaleKey, LocaleDefinition] = {}
    for key in sorted(loader.discover()):
        source = loader.load(key)
        try:
            definitions[key] = parser.parse(source)
        except LocaleSyntaxError as e:
            raise e.with_source(loader.describe_path(key)) from e
        logger.debug("Parsed %s (%d categories)", key, len(definitions[key].categories))
    logger.info("Parsed %d locale files", len(definitions))
    return definitions


def build_locales(
    loader: LocaleSourceLoader,
    *,
    parser: LocaleParser | None = None,
    config: UnifierConfig | None = None,
) -> UnifiedLocales:
    """Parse and unify every locale the loader discovers.

    Example:
        >>> from localeforge.localization import DirectoryLocaleLoader
        >>> unified = build_locales(DirectoryLocaleLoader("localedata/locales"))
        >>> unified.resolve("fr_BE", "LC_TIME").get("D_FMT")
        '%d/%m/%y'

    Raises:
        LocaleSyntaxError: If any file fails to parse
        SchemaError: If the set cannot be unified
    """
    definitions = parse_all(loader, parser)
    unifier = SchemaUnifier(config)
    return unifier.unify({str(key): d.categories for key, d in definitions.items()})
