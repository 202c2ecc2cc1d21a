"""Locale source loading infrastructure.

Provides the protocol for locale source loaders and a filesystem
implementation over one flat directory of locale files (the layout of
glibc's localedata/locales).

Components:
    LocaleSourceLoader - Protocol for discovering and reading locale sources
    DirectoryLocaleLoader - Disk-based loader with path-traversal prevention

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from localeforge.diagnostics import ErrorTemplate, LocaleDecodeError
from localeforge.locale_key import LocaleKey

__all__ = ["DirectoryLocaleLoader", "LocaleSourceLoader"]

logger = logging.getLogger(__name__)


class LocaleSourceLoader(Protocol):
    """Protocol for enumerating and reading locale sources.

    This is a Protocol (structural typing) rather than ABC to allow
    in-memory or archive-backed loaders in tests and tools.

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, sources: dict[str, str]) -> None:
        ...         self.sources = sources
        ...     def discover(self) -> tuple[LocaleKey, ...]:
        ...         return tuple(sorted(LocaleKey.parse(n) for n in self.sources))
        ...     def load(self, key: LocaleKey) -> str:
        ...         return self.sources[str(key)]
        ...     def describe_path(self, key: LocaleKey) -> str:
        ...         return f"<memory>/{key}"
    """

    def discover(self) -> tuple[LocaleKey, ...]:
        """Return every available locale key, sorted."""
        ...

    def load(self, key: LocaleKey) -> str:
        """Load the source text of one locale.

        Raises:
            FileNotFoundError: If the locale has no source
            OSError: If the source cannot be read
        """
        ...

    def describe_path(self, key: LocaleKey) -> str:
        """Return human-readable path for diagnostics."""
        ...


@dataclass(frozen=True, slots=True)
class DirectoryLocaleLoader:
    """Loads locale sources from one directory, one file per locale.

    Files whose names are not locale keys (transliteration tables, collation
    tables, editor backups) are skipped by discover().

    Security:
        Every resolved path is validated against the root directory, so a
        symlink leading outside of it is rejected on load.

    Example:
        >>> loader = DirectoryLocaleLoader("localedata/locales")
        >>> keys = loader.discover()
        >>> source = loader.load(keys[0])

    Attributes:
        root: Directory holding the locale files
        encoding: Text encoding of the files
    """

    root: str | Path
    encoding: str = field(default="utf-8", kw_only=True)
    _resolved_root: Path = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory.

        Raises:
            NotADirectoryError: If root is not an existing directory
        """
        resolved = Path(self.root).resolve()
        if not resolved.is_dir():
            msg = f"Locale directory not found: '{self.root}'"
            raise NotADirectoryError(msg)
        object.__setattr__(self, "_resolved_root", resolved)

    def discover(self) -> tuple[LocaleKey, ...]:
        """Return the locale keys of every regular file in root, sorted."""
        keys: list[LocaleKey] = []
        for path in sorted(self._resolved_root.iterdir()):
            if not path.is_file():
                continue
            if not LocaleKey.is_valid(path.name):
                logger.debug("Skipping non-locale file: %s", path.name)
                continue
            keys.append(LocaleKey.parse(path.name))
        logger.info("Discovered %d locale files in %s", len(keys), self._resolved_root)
        return tuple(sorted(keys))

    def _path_for(self, key: LocaleKey) -> Path:
        path = (self._resolved_root / key.name).resolve()
        if not path.is_relative_to(self._resolved_root):
            msg = f"Path traversal detected: '{key}' resolves outside '{self._resolved_root}'"
            raise ValueError(msg)
        return path

    def load(self, key: LocaleKey) -> str:
        """Read one locale file.

        Raises:
            FileNotFoundError: If the locale has no file
            ValueError: If the file resolves outside root
            OSError: If the file cannot be read
            LocaleDecodeError: If the file is not valid in encoding
        """
        path = self._path_for(key)
        logger.debug("Loading %s", path)
        try:
            return path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            source_name = self.describe_path(key)
            diagnostic = ErrorTemplate.undecodable_source(source_name, self.encoding, e)
            raise LocaleDecodeError(diagnostic, source_name=source_name) from e

    def describe_path(self, key: LocaleKey) -> str:
        """Return the file path of one locale."""
        return str(Path(self.root) / key.name)
