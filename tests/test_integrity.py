"""Tests for generated-output integrity: checksums, stale detection, immutable errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from localeforge.diagnostics import LocaleError
from localeforge.integrity import (
    DataIntegrityError,
    ImmutabilityViolationError,
    IntegrityContext,
    StaleOutputError,
    compute_checksum,
    verify_output,
)

# ============================================================================
# CHECKSUMS
# ============================================================================


class TestComputeChecksum:
    """SHA-256 over UTF-8 bytes."""

    def test_empty(self) -> None:
        """Known digest of the empty string."""
        assert compute_checksum("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_sensitive_to_content(self) -> None:
        """Any change alters the digest."""
        assert compute_checksum("é") != compute_checksum("e")
        assert len(compute_checksum("é")) == 64


# ============================================================================
# STALE OUTPUT
# ============================================================================


class TestVerifyOutput:
    """Comparison of committed output with regenerated text."""

    def test_up_to_date(self, tmp_path: Path) -> None:
        """Matching content returns the shared checksum."""
        path = tmp_path / "locales.py"
        path.write_text("X = 1\n", encoding="utf-8")

        assert verify_output(path, "X = 1\n") == compute_checksum("X = 1\n")

    def test_modified(self, tmp_path: Path) -> None:
        """A differing file is stale."""
        path = tmp_path / "locales.py"
        path.write_text("X = 2\n", encoding="utf-8")

        with pytest.raises(StaleOutputError, match="was modified; regenerate") as error:
            verify_output(path, "X = 1\n")

        context = error.value.context
        assert context is not None
        assert context.component == "codegen"
        assert context.operation == "verify"
        assert context.key == str(path)
        assert context.expected == compute_checksum("X = 1\n")
        assert context.actual == compute_checksum("X = 2\n")
        assert context.timestamp is not None

    def test_missing(self, tmp_path: Path) -> None:
        """A missing file is stale, with no actual checksum."""
        path = tmp_path / "locales.py"

        with pytest.raises(StaleOutputError, match="is missing") as error:
            verify_output(str(path), "X = 1\n")

        assert error.value.context is not None
        assert error.value.context.actual is None

    def test_not_a_locale_error(self) -> None:
        """Stale output is an integrity condition, not a parse failure."""
        assert not issubclass(StaleOutputError, LocaleError)
        assert issubclass(StaleOutputError, DataIntegrityError)


# ============================================================================
# IMMUTABILITY
# ============================================================================


class TestIntegrityErrorImmutability:
    """Integrity errors cannot be altered after construction."""

    def test_setattr_rejected(self) -> None:
        """Attributes are frozen."""
        error = StaleOutputError("stale", IntegrityContext("codegen", "verify"))

        with pytest.raises(ImmutabilityViolationError, match="Cannot modify"):
            error._context = None  # type: ignore[misc]

    def test_delattr_rejected(self) -> None:
        """Attributes cannot be deleted."""
        error = DataIntegrityError("broken")

        with pytest.raises(ImmutabilityViolationError, match="Cannot delete"):
            del error._context

    def test_can_be_raised_and_chained(self) -> None:
        """Exception machinery attributes stay writable."""
        with pytest.raises(StaleOutputError) as error:
            try:
                raise KeyError("x")
            except KeyError as cause:
                raise StaleOutputError("stale") from cause

        assert isinstance(error.value.__cause__, KeyError)

    def test_repr(self) -> None:
        """repr shows message and context."""
        error = DataIntegrityError("broken")

        assert repr(error) == "DataIntegrityError('broken', context=None)"

    def test_context_is_frozen(self) -> None:
        """IntegrityContext is a frozen dataclass."""
        context = IntegrityContext("codegen", "verify")

        with pytest.raises(AttributeError):
            context.key = "x"  # type: ignore[misc]
