#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for importing presentations.

Examples
--------
Import into a throwaway in-memory store and print the result::

    $ pptx2slides deck.pptx

Import into a JSON store file with an explicit title and owner::

    $ pptx2slides deck.pptx --store slides.json --title "Kickoff" --user-id 42

Use a config file::

    $ pptx2slides deck.pptx --config .pptx2slides.toml

"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from pptx2slides.config import discover_config_file, load_config_file, split_config
from pptx2slides.constants import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PACKAGE_ERROR,
    EXIT_PERSISTENCE_ERROR,
    EXIT_SUCCESS,
)
from pptx2slides.exceptions import PackageReadError, PersistenceError, Pptx2SlidesError, ValidationError
from pptx2slides.logging_utils import configure_logging
from pptx2slides.options import ImportOptions
from pptx2slides.pipeline import import_presentation
from pptx2slides.progress import ProgressEvent
from pptx2slides.store import open_store

logger = logging.getLogger(__name__)


def _user_id(value: str) -> Any:
    """Keep numeric ids numeric, as the store's clients expect."""
    return int(value) if value.isdigit() else value


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``pptx2slides`` command."""
    parser = argparse.ArgumentParser(
        prog="pptx2slides",
        description="Import a PowerPoint (.pptx) file into slide and presentation records.",
    )
    parser.add_argument("input", help="Path to the .pptx file")
    parser.add_argument("--title", help="Presentation title (default: the file's base name)")
    parser.add_argument("--user-id", type=_user_id, help="Owner id stored on the presentation")
    parser.add_argument("--store", help="JSON store file to write to (default: in-memory, printed only)")
    parser.add_argument("--config", help="Config file (.toml, .yaml, .json or pyproject.toml)")
    parser.add_argument(
        "--no-rollback",
        action="store_true",
        help="Keep slides already stored when a later write fails",
    )
    parser.add_argument("--compact", action="store_true", help="Print JSON on a single line")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace, cli_config: dict[str, Any]) -> None:
    # --trace takes highest precedence, then --verbose, then --log-level, then the config file
    if parsed_args.trace or parsed_args.verbose:
        log_level: Any = logging.DEBUG
    else:
        log_level = parsed_args.log_level or cli_config.get("log_level", "WARNING")

    configure_logging(
        log_level,
        log_file=parsed_args.log_file or cli_config.get("log_file"),
        trace_mode=parsed_args.trace,
    )


def _log_progress(event: ProgressEvent) -> None:
    logger.debug(str(event))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return a process exit code."""
    parsed_args = create_parser().parse_args(argv)

    try:
        config_path = discover_config_file(parsed_args.config)
        config = load_config_file(config_path) if config_path else {}
        option_values, cli_config = split_config(config)
        options = ImportOptions.from_dict(option_values)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FILE_ERROR

    _setup_logging_level(parsed_args, cli_config)
    if config_path:
        logger.debug(f"Using config file {config_path}")

    if parsed_args.no_rollback:
        options = options.create_updated(rollback_on_failure=False)

    input_path = Path(parsed_args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        store = open_store(parsed_args.store or cli_config.get("store"))
        presentation = import_presentation(
            input_path,
            store=store,
            title=parsed_args.title,
            user_id=parsed_args.user_id,
            options=options,
            progress_callback=_log_progress,
        )
    except PackageReadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_PACKAGE_ERROR
    except PersistenceError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_PERSISTENCE_ERROR
    except Pptx2SlidesError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    indent = None if parsed_args.compact else 2
    print(json.dumps(presentation, indent=indent, ensure_ascii=False))
    return EXIT_SUCCESS
