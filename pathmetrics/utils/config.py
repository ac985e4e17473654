"""Exclusion config file lookup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

APP_DIR_NAME = "pathmetrics"
CONFIG_FILENAME = "excluded_paths.yml"


def config_search_paths(
    env: dict[str, str] | None = None,
    home: Path | None = None,
) -> list[Path]:
    """Return candidate config locations in order of preference.

    Args:
        env: Environment mapping (defaults to ``os.environ``)
        home: Home directory override (defaults to ``Path.home()``)
    """
    env = dict(os.environ) if env is None else env
    paths: list[Path] = []

    xdg_config = env.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / APP_DIR_NAME / CONFIG_FILENAME)

    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            home = None
    if home is not None:
        paths.append(home / ".config" / APP_DIR_NAME / CONFIG_FILENAME)
        paths.append(home / f".{APP_DIR_NAME}" / CONFIG_FILENAME)

    return paths


def find_config_path(
    env: dict[str, str] | None = None,
    home: Path | None = None,
) -> Path | None:
    """Return the first existing config file, or None when none exists."""
    candidates = config_search_paths(env=env, home=home)
    logger.debug("Searching for config file in %s", [str(p) for p in candidates])

    for candidate in candidates:
        if candidate.is_file():
            logger.info("Found config file %s", candidate)
            return candidate

    logger.info("No config file found, using default exclusions")
    return None
