"""Logging helper module."""

from logging import (
    DEBUG,
    INFO,
    Logger,
    basicConfig,
    getLogger,
)

from robolang.args import Args


def init_logging(args: Args) -> None:
    """Initialize logging for the checker.

    Should be called once when the application starts.
    """
    # Records go to a file so they never mix with the diagnostics on stdout
    basicConfig(
        level=INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename="robolang.log",
        filemode="w",
    )

    root_logger = getLogger()
    if args.verbose:
        root_logger.setLevel(DEBUG)
        root_logger.info("Debug logging enabled.")


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)
