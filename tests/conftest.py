"""Pytest configuration for the localeforge test suite.

Hypothesis profiles (one place for max_examples):
    dev      500 examples, random seed (default)
    ci        50 examples, derandomized, failure blobs printed (CI=true)
    verbose  100 examples with Hypothesis progress output

HYPOTHESIS_PROFILE=<name> overrides the detection.

Tests marked @pytest.mark.fuzz are skipped unless selected with
``pytest -m fuzz``.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)

settings.register_profile("dev", max_examples=500, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in ("dev", "ci", "verbose"):
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests unless the -m expression mentions fuzz."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

FR_FR_SOURCE = """\
comment_char %
escape_char /

% French locale for France
LC_TIME
abday "dim.";"lun.";"mar.";"mer.";"jeu.";"ven.";"sam."
d_fmt "%d//%m//%Y"
first_weekday 2
END LC_TIME

LC_NUMERIC
decimal_point ","
thousands_sep "<U202F>"
grouping 3;3
END LC_NUMERIC
"""

FR_BE_SOURCE = """\
comment_char %
escape_char /

LC_TIME
copy "fr_FR"
END LC_TIME

LC_NUMERIC
decimal_point ","
thousands_sep "."
END LC_NUMERIC
"""

DE_DE_SOURCE = """\
comment_char %
escape_char /

LC_TIME
d_fmt "%d.%m.%Y"
first_weekday 2
alt_digits "0";"1"
alt_digits "2";"3"
END LC_TIME

LC_NUMERIC
decimal_point ","
thousands_sep "."
grouping 3;3
END LC_NUMERIC
"""


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """Directory with three well-formed locale files and one non-locale file."""
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "fr_FR").write_text(FR_FR_SOURCE, encoding="utf-8")
    (directory / "fr_BE").write_text(FR_BE_SOURCE, encoding="utf-8")
    (directory / "de_DE").write_text(DE_DE_SOURCE, encoding="utf-8")
    (directory / "translit_combining").write_text("LC_CTYPE\nEND LC_CTYPE\n", encoding="utf-8")
    return directory
