"""Parse and organize checker args."""

from collections.abc import Callable
from pathlib import Path

import typed_argparse as tap


class Args(tap.TypedArgs):
    """Checker args."""

    paths: list[Path] | None = tap.arg(
        positional=True,
        nargs="*",
        help="Program files, or directories to search for *.robot files",
        default=[],
    )
    json_output: bool = tap.arg(help="Print results as JSON", default=False)
    max_depth: int | None = tap.arg(
        help="Deepest block nesting accepted (overrides config files)",
        default=None,
    )
    path: Path | None = tap.arg(
        help="Working directory used to find .robolang/config.toml",
        default=None,
    )
    verbose: bool = tap.arg(help="Enables verbose (DEBUG) logging", default=False)
    version: bool = tap.arg(help="Show version and exit", default=False)

    @property
    def working_dir(self) -> Path:
        """Get working directory."""
        if self.path:
            work_dir = self.path
            if not work_dir.is_absolute():
                work_dir = Path.cwd().joinpath(work_dir).resolve()
        else:
            work_dir = Path.cwd().resolve()

        if not work_dir.is_dir():
            msg = (
                f"Specified path '{self.path}' resolved to '{work_dir}' which is "
                "not a valid directory."
            )
            raise ValueError(msg)

        return work_dir


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    tap.Parser(Args).bind(app_main).run()
