"""Command-line front door for lazyrefs.

Parses CLI options, configures file logging, resolves the repository, and
dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import DataLoadError, LazyRefsError
from .repo.git import discover_repo_root
from .runtime import run_browser
from .runtime.config import load_theme_name, save_theme_name
from .runtime.logging_setup import configure_logging
from .ui_theme import available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse the branches, tags, and commits of a git repository.")
    parser.add_argument("path", nargs="?", default=None, help="Path inside a git repository. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}). Saved as the new default.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level for the session log file (default: WARNING).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write the session log to this path.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser on a repository.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    try:
        log_path = configure_logging(args.log_level, args.log_file)
    except OSError as exc:
        raise SystemExit(f"Cannot open log file: {exc}") from exc
    logger.info("Logging to %s", log_path)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        path = path.parent

    try:
        repo_root = discover_repo_root(path)
    except DataLoadError as exc:
        raise SystemExit(f"Not a git repository: {path}") from exc

    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        save_theme_name(theme_name)
    else:
        theme_name = load_theme_name()

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazyrefs needs an interactive terminal.")

    try:
        run_browser(repo_root, theme_name, args.no_color)
    except DataLoadError as exc:
        logger.exception("Failed to load repository data for %s", repo_root)
        raise SystemExit(f"Failed to load repository data: {exc}") from exc
    except LazyRefsError as exc:
        logger.exception("Failed to start browser for %s", repo_root)
        raise SystemExit(f"Failed to start browser: {exc}") from exc


if __name__ == "__main__":
    main()
