"""Command-line front door for ujust-picker.

Parses the version flag, loads config and the recipe catalog, runs the
interactive picker, then hands the chosen recipe to the runner once the
terminal has been restored.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios

from .catalog import load_catalog
from .config import load_config
from .logging_setup import setup_logging
from .loop import run_picker
from .runner import RecipeRunner
from .version import version_line

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ujust-picker",
        description="Browse, search, preview, and run ujust recipes.",
        add_help=False,
    )
    parser.add_argument("-v", "--version", action="version", version=version_line())
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the picker; exits with status 1 only when the terminal fails to start.

    The chosen recipe's own exit status is logged but never becomes ours.
    """
    _args, ignored = build_parser().parse_known_args(argv)
    setup_logging()
    if ignored:
        logger.debug("ignoring unrecognised arguments: %s", ignored)

    config = load_config()
    catalog = load_catalog(config.recipe_dir, config.extension, config.exclude)
    runner = RecipeRunner(config.runner)

    try:
        chosen = run_picker(catalog, runner, config)
    except (termios.error, OSError) as exc:
        logger.error("terminal initialisation failed: %s", exc)
        print(f"Error running program: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if chosen is None:
        return
    sys.stdout.write(f"Running recipe: {chosen}...\n\n")
    sys.stdout.flush()
    runner.execute(chosen)


if __name__ == "__main__":
    main()
