"""Locale source discovery and loading.

Python 3.13+.
"""

from .loading import DirectoryLocaleLoader, LocaleSourceLoader

__all__ = ["DirectoryLocaleLoader", "LocaleSourceLoader"]
