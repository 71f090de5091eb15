"""Version utility for the robolang checker."""

import sys
from importlib.metadata import PackageNotFoundError, version


def get_robolang_version() -> str:
    """Get the installed robolang version.

    Returns:
        Version string or "unknown" if version cannot be determined

    """
    try:
        return version("robolang")
    except PackageNotFoundError:
        return "unknown"


def show_version() -> None:
    """Display the checker version and exit."""
    app_version = get_robolang_version()
    if app_version == "unknown":
        print("robolang (version unknown)")  # noqa: T201
    else:
        print(f"robolang {app_version}")  # noqa: T201
    sys.exit(0)
