"""Configuration loader for the robolang checker."""

import logging
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from robolang.semantic.validator import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT

logger = logging.getLogger(__name__)

CONFIG_DIR = ".robolang"
"""Directory holding config.toml, in the working or home directory."""


class RobolangSettings(BaseModel):
    """Checker settings."""

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)
    """Deepest block nesting accepted."""


def _read_config(config_path: Path) -> RobolangSettings | None:
    """Read settings from a TOML file, or None if missing or unusable."""
    if not config_path.exists():
        return None
    try:
        with config_path.open("rb") as f:
            return RobolangSettings.model_validate(tomllib.load(f))
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.debug("Failed to load config %s: %s", config_path, e)
        return None


def load_settings(
    *,
    max_depth: int | None,
    working_dir: Path,
    home_dir: Path | None = None,
) -> RobolangSettings:
    """Load settings with priority: CLI > local > global > defaults.

    Args:
        max_depth: Value given on the command line, if any.
        working_dir: Directory searched for the local configuration.
        home_dir: Directory searched for the global configuration
            (defaults to the user's home).

    Returns:
        Effective settings.

    """
    # Priority 1: Command line argument
    if max_depth is not None:
        return RobolangSettings(max_depth=max_depth)

    # Priority 2: Local configuration
    local = _read_config(working_dir / CONFIG_DIR / "config.toml")
    if local is not None:
        return local

    # Priority 3: Global configuration
    home = home_dir if home_dir is not None else Path.home()
    global_settings = _read_config(home / CONFIG_DIR / "config.toml")
    if global_settings is not None:
        return global_settings

    return RobolangSettings()
