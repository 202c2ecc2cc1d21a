"""Generated output integrity: checksums and stale-output detection.

A committed copy of the generated module can drift from the locale sources
it was generated from. verify_output() regenerates in memory and compares
SHA-256 checksums; a mismatch is a "stale generated output" condition, not a
parser defect.

StaleOutputError is not a LocaleError: the sources parse and unify, only
the committed copy is out of date.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import final

__all__ = [
    "DataIntegrityError",
    "ImmutabilityViolationError",
    "IntegrityContext",
    "StaleOutputError",
    "compute_checksum",
    "verify_output",
]

logger = logging.getLogger(__name__)


# Set by the interpreter while an exception propagates; must stay writable.
_EXCEPTION_MACHINERY = frozenset(
    {"__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__"}
)


@dataclass(frozen=True, slots=True)
class IntegrityContext:
    """What was being checked when an integrity error was raised.

    ``actual`` is None when there was nothing to checksum (missing file);
    ``timestamp`` is a time.monotonic() reading.
    """

    component: str
    operation: str
    key: str | None = None
    expected: str | None = None
    actual: str | None = None
    timestamp: float | None = None


class DataIntegrityError(Exception):
    """Root of the integrity errors; frozen once constructed.

    Only the attributes Python itself sets on raise/chain can change
    afterwards. Anything else raises ImmutabilityViolationError.
    """

    __slots__ = ("_context", "_frozen")

    _context: IntegrityContext | None
    _frozen: bool

    def __init__(self, message: str, context: IntegrityContext | None = None) -> None:
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: object) -> None:
        if name not in _EXCEPTION_MACHINERY and getattr(self, "_frozen", False):
            msg = f"Cannot modify integrity error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        msg = f"Cannot delete integrity error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    @property
    def context(self) -> IntegrityContext | None:
        return self._context

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.args[0]!r}, context={self._context!r})"


@final
class ImmutabilityViolationError(DataIntegrityError):
    """Raised on any attempt to alter an integrity error."""


@final
class StaleOutputError(DataIntegrityError):
    """The committed module no longer matches what the sources generate."""


def compute_checksum(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoding of text.

    Example:
        >>> compute_checksum("")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def verify_output(path: str | Path, expected_text: str) -> str:
    """Check that path holds exactly expected_text.

    Args:
        path: Committed generated file
        expected_text: Freshly generated content

    Returns:
        The checksum shared by both

    Raises:
        StaleOutputError: If the file is missing or its checksum differs
    """
    path = Path(path)
    expected = compute_checksum(expected_text)
    actual: str | None = None
    if path.is_file():
        actual = compute_checksum(path.read_text(encoding="utf-8"))

    if actual != expected:
        context = IntegrityContext(
            component="codegen",
            operation="verify",
            key=str(path),
            expected=expected,
            actual=actual,
            timestamp=time.monotonic(),
        )
        reason = "is missing" if actual is None else "was modified"
        msg = f"{path} {reason}; regenerate it with `localeforge generate`"
        raise StaleOutputError(msg, context)

    logger.debug("Verified %s (sha256 %s)", path, expected)
    return expected
