#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/cli.py
"""Command line interface for adf2md.

Usage::

    adf2md page.json -o page.md --base-url https://example.atlassian.net/wiki/
    adf2md page.json --preview page.html --stylesheet material.css

Options can also be set through environment variables named
``ADF2MD_<OPTION_NAME>`` (e.g. ``ADF2MD_BASE_URL``, ``ADF2MD_RICH=true``).
Explicit command line arguments take precedence.

Findings such as orphaned footnotes are printed to stderr and do not
change the exit code. The exit code is 1 when the input cannot be loaded,
converted or the output cannot be written.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from adf2md import __version__
from adf2md.api import convert_document, load_document
from adf2md.constants import ENV_PREFIX
from adf2md.exceptions import Adf2MdError
from adf2md.logging_utils import configure_logging
from adf2md.options import ConversionOptions, PreviewOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def get_env_default(dest: str, default: Any = None, convert: Callable[[str], Any] = str) -> Any:
    """Return the ``ADF2MD_<DEST>`` environment value or ``default``.

    Invalid values are logged and ignored.
    """
    env_key = f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"
    env_value = os.environ.get(env_key)
    if env_value is None:
        return default
    try:
        return convert(env_value)
    except (TypeError, ValueError) as e:
        logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")
        return default


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="adf2md",
        description="Convert structured rich-document JSON (Atlassian Document Format) to Markdown.",
    )
    parser.add_argument("input", help="Input JSON document, or '-' for stdin")
    parser.add_argument("-o", "--out", help="Write Markdown to this file instead of stdout")
    parser.add_argument(
        "--base-url",
        default=get_env_default("base_url", ""),
        help="Base URL used to resolve relative links",
    )
    parser.add_argument(
        "--max-nesting-depth",
        type=int,
        default=get_env_default("max_nesting_depth", ConversionOptions.max_nesting_depth, int),
        help="Maximum document nesting depth (default: %(default)s)",
    )
    parser.add_argument(
        "--no-property-tables",
        dest="property_tables",
        action="store_false",
        default=get_env_default("property_tables", True, _env_bool),
        help="Always render tables as GFM pipe tables",
    )
    parser.add_argument(
        "--no-escape",
        dest="escape_special",
        action="store_false",
        default=get_env_default("escape_special", True, _env_bool),
        help="Emit text runs without backslash-escaping Markdown syntax",
    )
    parser.add_argument(
        "--annotation-definitions",
        dest="emit_annotation_definitions",
        action="store_true",
        default=get_env_default("emit_annotation_definitions", False, _env_bool),
        help="Keep annotation definitions as numbered lines after each annotated block",
    )
    parser.add_argument("--preview", metavar="HTML", help="Also write an HTML preview page")
    parser.add_argument(
        "--stylesheet",
        default=get_env_default("stylesheet"),
        help="Stylesheet to inline into the preview page",
    )
    parser.add_argument(
        "--log-level",
        default=get_env_default("log_level", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", default=get_env_default("log_file"), help="Also write logs to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument(
        "--rich",
        action="store_true",
        default=get_env_default("rich", False, _env_bool),
        help="Use rich formatting for logs and findings",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_findings(findings: Sequence[str], rich_output: bool) -> None:
    if not findings:
        return
    if rich_output:
        from rich.console import Console
        from rich.table import Table

        table = Table(title="Findings")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Message", style="yellow")
        for number, message in enumerate(findings, start=1):
            table.add_row(str(number), message)
        Console(stderr=True).print(table)
        return
    for message in findings:
        print(f"Warning: {message}", file=sys.stderr)


def _read_input(source: str, max_depth: int) -> Any:
    if source == "-":
        return load_document(sys.stdin, max_depth=max_depth)
    return load_document(Path(source), max_depth=max_depth)


def main(args: Optional[list[str]] = None) -> int:
    """Run the command line interface.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    log_level = logging.DEBUG if parsed.trace else parsed.log_level
    configure_logging(log_level, log_file=parsed.log_file, trace_mode=parsed.trace, rich_output=parsed.rich)

    try:
        options = ConversionOptions(
            base_url=parsed.base_url,
            max_nesting_depth=parsed.max_nesting_depth,
            property_tables=parsed.property_tables,
            emit_annotation_definitions=parsed.emit_annotation_definitions,
            escape_special=parsed.escape_special,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        document = _read_input(parsed.input, options.max_nesting_depth)
        converted = convert_document(document, options)

        if parsed.out:
            out_path = Path(parsed.out)
            out_path.write_text(converted.markdown + "\n", encoding="utf-8")
            logger.info("Wrote Markdown to %s", out_path)
        else:
            sys.stdout.write(converted.markdown + "\n")

        if parsed.preview:
            from adf2md.preview import render_preview, write_preview_page

            preview_options = PreviewOptions(stylesheet_path=Path(parsed.stylesheet) if parsed.stylesheet else None)
            preview = render_preview(converted.markdown, preview_options, annotations=converted.annotations)
            write_preview_page(preview, parsed.preview, preview_options)
    except Adf2MdError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    _print_findings(converted.findings, parsed.rich)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
