"""Tests for DirectoryLocaleLoader: discovery, reading and traversal protection."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from localeforge.diagnostics import DiagnosticCode, LocaleDecodeError
from localeforge.locale_key import LocaleKey
from localeforge.localization import DirectoryLocaleLoader, LocaleSourceLoader


class TestDirectoryLocaleLoader:
    """Filesystem loader over one flat directory."""

    def test_discover_skips_non_locale_files(self, locales_dir: Path) -> None:
        """translit tables are not locales."""
        keys = DirectoryLocaleLoader(locales_dir).discover()

        assert [str(k) for k in keys] == ["de_DE", "fr_BE", "fr_FR"]

    def test_discover_skips_directories(self, locales_dir: Path) -> None:
        """Only regular files are considered."""
        (locales_dir / "nl_NL").mkdir()

        assert LocaleKey.parse("nl_NL") not in DirectoryLocaleLoader(locales_dir).discover()

    def test_skipped_entries_logged_at_debug(
        self, locales_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Skipped names are reported for diagnosis."""
        with caplog.at_level(logging.DEBUG, logger="localeforge.localization.loading"):
            DirectoryLocaleLoader(locales_dir).discover()

        assert "Skipping non-locale file: translit_combining" in caplog.text

    def test_load_reads_text(self, locales_dir: Path) -> None:
        """Sources are returned as text."""
        source = DirectoryLocaleLoader(locales_dir).load(LocaleKey.parse("fr_BE"))

        assert 'copy "fr_FR"' in source

    def test_load_missing_file(self, locales_dir: Path) -> None:
        """Unknown keys raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DirectoryLocaleLoader(locales_dir).load(LocaleKey.parse("nl_NL"))

    def test_encoding(self, tmp_path: Path) -> None:
        """Files are decoded with the configured encoding."""
        (tmp_path / "de_DE").write_bytes('LC_TIME\nmon "M\xe4rz"\nEND LC_TIME\n'.encode("latin-1"))
        loader = DirectoryLocaleLoader(tmp_path, encoding="latin-1")

        assert "M\xe4rz" in loader.load(LocaleKey.parse("de_DE"))

    def test_undecodable_file_names_the_file(self, locales_dir: Path) -> None:
        """Bytes invalid in the encoding become a LocaleError naming the file."""
        (locales_dir / "de_DE").write_bytes(b'LC_TIME\nd_fmt "\xe9"\nEND LC_TIME\n')
        loader = DirectoryLocaleLoader(locales_dir)

        with pytest.raises(LocaleDecodeError, match="invalid byte 0xe9 at offset 15") as error:
            loader.load(LocaleKey("de", "DE"))

        expected_name = loader.describe_path(LocaleKey("de", "DE"))
        assert error.value.source_name == expected_name
        assert error.value.diagnostic is not None
        assert error.value.diagnostic.code is DiagnosticCode.UNDECODABLE_SOURCE
        assert error.value.diagnostic.source_name == expected_name
        assert isinstance(error.value.__cause__, UnicodeDecodeError)

    def test_symlink_outside_root_rejected(self, tmp_path: Path) -> None:
        """A locale file resolving outside the root is refused."""
        root = tmp_path / "locales"
        root.mkdir()
        outside = tmp_path / "secret"
        outside.write_text("LC_TIME\nEND LC_TIME\n", encoding="utf-8")
        try:
            (root / "de_DE").symlink_to(outside)
        except OSError:
            pytest.skip("symlinks not supported")

        with pytest.raises(ValueError, match="Path traversal"):
            DirectoryLocaleLoader(root).load(LocaleKey.parse("de_DE"))

    def test_missing_root(self, tmp_path: Path) -> None:
        """The root must be an existing directory."""
        with pytest.raises(NotADirectoryError, match="not found"):
            DirectoryLocaleLoader(tmp_path / "missing")

    def test_describe_path(self, locales_dir: Path) -> None:
        """Diagnostics name the file path."""
        loader = DirectoryLocaleLoader(str(locales_dir))

        assert loader.describe_path(LocaleKey.parse("fr_FR")) == str(locales_dir / "fr_FR")

    def test_satisfies_protocol(self, locales_dir: Path) -> None:
        """The directory loader is a LocaleSourceLoader."""
        loader: LocaleSourceLoader = DirectoryLocaleLoader(locales_dir)

        assert loader.discover()
