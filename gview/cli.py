"""Command-line front door for gview.

Parses options, sets up logging, and opens the repository around the
working directory before handing over to the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_config
from .diagnostics import configure_logging
from .errors import GviewError, RepositoryUnavailable
from .repository import RepositoryCursor
from .runtime import run_browser
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gview", description="Browse the files and history of a git repository.")
    parser.add_argument(
        "-c",
        "--commit",
        default=None,
        help="Commit id or unambiguous prefix to start from (default: HEAD).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        choices=available_theme_names(),
        help="UI theme.",
    )
    parser.add_argument(
        "--style",
        default=None,
        help="Pygments style for file content.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file (also $GVIEW_LOG_FILE).",
    )
    return parser


def main(argv: list[str] | None = None, cwd: Path | None = None) -> int:
    """Run gview; returns the process exit status.

    Outside a repository there is nothing to browse, so it exits quietly.
    An unresolvable ``--commit`` is reported on stderr.
    """
    args = build_parser().parse_args(argv)
    config = load_config(
        theme=args.theme,
        style=args.style,
        log_file=args.log_file or os.environ.get("GVIEW_LOG_FILE") or None,
    )
    configure_logging(config.log_file)

    try:
        cursor = RepositoryCursor.discover(cwd or Path.cwd())
    except RepositoryUnavailable as exc:
        logger.info("nothing to browse: %s", exc)
        return 0

    if args.commit is not None:
        try:
            cursor.set_commit_by_id(args.commit)
        except GviewError as exc:
            print(exc, file=sys.stderr)
            return 0

    run_browser(cursor, config)
    return 0
