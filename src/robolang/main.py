"""robolang CLI entry point."""

import sys

from pydantic import ValidationError
from rich.console import Console

from robolang.args import Args, bind_and_run
from robolang.cli import EXIT_FILE_ERROR, run_check
from robolang.config_loader import load_settings
from robolang.log import get_logger, init_logging
from robolang.version import show_version


def run(args: Args) -> None:
    """Configure logging and settings, then check the given programs."""
    if args.version:
        show_version()

    init_logging(args)
    logger = get_logger(__name__)
    console = Console()

    if not args.paths:
        console.print("error: no program files given", markup=False)
        sys.exit(EXIT_FILE_ERROR)

    try:
        settings = load_settings(
            max_depth=args.max_depth,
            working_dir=args.working_dir,
        )
    except (ValueError, ValidationError) as e:
        logger.exception("Invalid settings")
        console.print(f"error: {e}", markup=False)
        sys.exit(EXIT_FILE_ERROR)

    logger.debug(
        "Checking %d paths with max depth %d",
        len(args.paths),
        settings.max_depth,
    )
    sys.exit(
        run_check(
            args.paths,
            json_output=args.json_output,
            max_depth=settings.max_depth,
            console=console,
        ),
    )


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(run)


if __name__ == "__main__":
    main()
