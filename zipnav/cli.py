"""Command-line front door for zipnav.

Parses CLI options, resolves the start location (directory or ZIP archive),
and prints either a child listing or a full outline of it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .archive import ArchiveTreeError
from .navigation import resolve_start
from .render import render_listing, render_outline
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse directories and ZIP archives through one tree view."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory or ZIP archive. Defaults to the last directory, then the current one.",
    )
    parser.add_argument("--inside", metavar="INNER", help="Directory inside the archive to list.")
    parser.add_argument("--tree", action="store_true", help="Print a full outline instead of one level.")
    parser.add_argument("--max-depth", type=_positive_int, default=None, help="Outline depth limit.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--show-hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List dot-files (remembered for later runs).",
    )
    parser.add_argument(
        "--size-labels",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show file size labels (remembered for later runs).",
    )
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Drop archive entries with unusable paths instead of failing.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Logging verbosity.")
    return parser


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the requested view.

    ``default_path`` is primarily for tests; when omitted the configured last
    directory, then the current working directory, is used.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if default_path is None:
        default_path = config.load_last_directory() or Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    show_hidden = args.show_hidden
    if show_hidden is None:
        show_hidden = config.load_show_hidden()
    else:
        config.save_show_hidden(show_hidden)
    show_size_labels = args.size_labels
    if show_size_labels is None:
        show_size_labels = config.load_show_size_labels()
    else:
        config.save_show_size_labels(show_size_labels)
    theme_name = config.load_theme_name()
    if args.theme:
        theme_name = normalize_theme_name(args.theme)
        config.save_theme_name(theme_name)
    theme = resolve_theme(theme_name, no_color=args.no_color)

    try:
        node = resolve_start(path, args.inside, show_hidden=show_hidden)
        if args.tree:
            output = render_outline(node, theme, max_depth=args.max_depth)
        else:
            output = render_listing(node, theme, show_size_labels=show_size_labels)
    except ArchiveTreeError as exc:
        logger.debug("archive failure", exc_info=True)
        raise SystemExit(f"{path}: {exc}") from exc
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    sys.stdout.write(output + "\n")
    config.save_last_directory(Path(node.real_dir()))


if __name__ == "__main__":
    main()
