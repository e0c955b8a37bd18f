"""Load optional settings from `.todo_graph/config.yaml`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .constants import (
    CONFIG_FILE,
    CYCLE_GUARD_MODES,
    DEFAULT_CYCLE_GUARD_MODE,
    DEFAULT_LOG_LEVEL,
    STATE_DIR_NAME,
)
from .filters import VisibilityFilter
from .io_utils import _load_data_with_error

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def load_graph_config(project_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        project_dir: Directory holding the `.todo_graph/` folder.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = project_dir.resolve() / STATE_DIR_NAME / CONFIG_FILE
    data, err = _load_data_with_error(path, {})
    if err:
        return {}, err
    return data, None


def get_cycle_guard_mode(config: dict[str, Any]) -> str:
    """Return the configured cycle guard mode, or the default if unset or invalid."""
    raw = config.get("cycle_guard")
    if isinstance(raw, str) and raw in CYCLE_GUARD_MODES:
        return raw
    return DEFAULT_CYCLE_GUARD_MODE


def get_visibility_config(config: dict[str, Any]) -> VisibilityFilter:
    raw = config.get("visibility")
    try:
        return VisibilityFilter(raw)
    except ValueError:
        return VisibilityFilter.ALL


def get_log_level(config: dict[str, Any]) -> str:
    raw = config.get("log_level")
    if isinstance(raw, str) and raw.upper() in VALID_LOG_LEVELS:
        return raw.upper()
    return DEFAULT_LOG_LEVEL
