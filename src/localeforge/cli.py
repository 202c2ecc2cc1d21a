"""Command-line interface.

Usage:
    localeforge [-v] generate LOCALES_DIR -o OUT
    localeforge [-v] check LOCALES_DIR OUT
    localeforge [-v] list LOCALES_DIR
    localeforge [-v] schema LOCALES_DIR

Exit codes:
    0: Success.
    1: Generated output is stale (check).
    2: Locale sources failed to parse or unify, or could not be read.

Python 3.13+.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from localeforge.codegen import emit_python_module
from localeforge.core.babel_compat import is_babel_available
from localeforge.diagnostics import (
    DiagnosticFormatter,
    LocaleError,
    LocaleSyntaxError,
    OutputFormat,
)
from localeforge.integrity import StaleOutputError, compute_checksum, verify_output
from localeforge.localization import DirectoryLocaleLoader
from localeforge.pipeline import build_locales

__all__ = ["main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STALE = 1
EXIT_FAILURE = 2


def _generate_source(locales_dir: str) -> str:
    return emit_python_module(build_locales(DirectoryLocaleLoader(locales_dir)))


def _cmd_generate(args: argparse.Namespace) -> int:
    source = _generate_source(args.locales_dir)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")
    logger.info("Wrote %s (sha256 %s)", output, compute_checksum(source))
    return EXIT_OK


def _cmd_check(args: argparse.Namespace) -> int:
    source = _generate_source(args.locales_dir)
    try:
        verify_output(args.output, source)
    except StaleOutputError as e:
        print(f"stale: {e}", file=sys.stderr)
        return EXIT_STALE
    print(f"{args.output} is up to date")
    return EXIT_OK


def _cmd_list(args: argparse.Namespace) -> int:
    keys = DirectoryLocaleLoader(args.locales_dir).discover()
    with_names = is_babel_available()
    for key in keys:
        display = key.display_name() if with_names else None
        print(f"{key}\t{display}" if display else str(key))
    return EXIT_OK


def _cmd_schema(args: argparse.Namespace) -> int:
    unified = build_locales(DirectoryLocaleLoader(args.locales_dir))
    print(json.dumps(unified.schema.to_dict(), indent=2, sort_keys=True))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localeforge",
        description="Unify POSIX locale sources into typed Python data.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (repeat for debug output)",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output format (default: rust)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Write the generated Python module")
    generate.add_argument("locales_dir", help="Directory of locale source files")
    generate.add_argument("-o", "--output", required=True, help="Output .py file")
    generate.set_defaults(handler=_cmd_generate)

    check = commands.add_parser("check", help="Fail if the generated module is stale")
    check.add_argument("locales_dir", help="Directory of locale source files")
    check.add_argument("output", help="Committed generated .py file")
    check.set_defaults(handler=_cmd_check)

    list_ = commands.add_parser("list", help="List locale keys")
    list_.add_argument("locales_dir", help="Directory of locale source files")
    list_.set_defaults(handler=_cmd_list)

    schema = commands.add_parser("schema", help="Print the canonical schema as JSON")
    schema.add_argument("locales_dir", help="Directory of locale source files")
    schema.set_defaults(handler=_cmd_schema)

    return parser


def _report(error: LocaleError, formatter: DiagnosticFormatter) -> None:
    if error.diagnostic is not None:
        print(formatter.format(error.diagnostic), file=sys.stderr)
    else:
        print(f"error: {error}", file=sys.stderr)
    if (
        isinstance(error, LocaleSyntaxError)
        and error.parse_error is not None
        and formatter.output_format is not OutputFormat.JSON
    ):
        print(error.format_with_context(), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))
    try:
        return int(args.handler(args))
    except LocaleError as e:
        _report(e, formatter)
        return EXIT_FAILURE
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
