"""Locale source parser module.

This module provides the LocaleParser class and related parsing utilities
organized into focused submodules.

Module Organization:
- core.py: Main LocaleParser class and parse() entry point
- primitives.py: Basic parsers (keys, category names, integers, strings, raw tokens)
- whitespace.py: Blank, comment and escape skipping
- rules.py: Grammar rules (preamble, values, fields, categories)

Public API:
    LocaleParser: Main parser class
"""

from localeforge.syntax.parser.core import LocaleParser

__all__ = ["LocaleParser"]
