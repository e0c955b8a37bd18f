from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedPayloadError
from .models import TaskRecord


def _read_structured(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as handle:
        if path.suffix in {".yaml", ".yml"}:
            return yaml.safe_load(handle)
        return json.load(handle)


def _load_data_with_error(
    path: Path,
    default: dict[str, Any],
) -> tuple[dict[str, Any], str | None]:
    """
    Load a JSON/YAML mapping and return (data, error_message).

    A missing file is not an error. Parse and IO failures are reported instead
    of raised so callers can fall back to defaults.
    """
    if not path.exists():
        return default, None
    try:
        data = _read_structured(path)
        if not isinstance(data, dict):
            return default, f"{path.name}: expected object, got {type(data).__name__}"
        return data, None
    except OSError as exc:
        return default, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except json.JSONDecodeError as exc:
        return default, f"{path.name}: JSONDecodeError: {exc}"
    except Exception as exc:
        if isinstance(exc, yaml.YAMLError):
            return default, f"{path.name}: YAMLError: {exc}"
        return default, f"{path.name}: {exc.__class__.__name__}: {exc}"


def parse_tasks(raw: Any) -> list[TaskRecord]:
    """Convert a list of task mappings (or ``{"tasks": [...]}``) into records."""
    if isinstance(raw, dict):
        raw = raw.get("tasks")
    if not isinstance(raw, list):
        raise MalformedPayloadError("task data must be a list of task records or {'tasks': [...]}")
    return [TaskRecord.from_dict(item) for item in raw]


def load_tasks(path: Path) -> list[TaskRecord]:
    """Read a JSON or YAML task file.

    Raises:
        OSError: If the file cannot be read.
        MalformedPayloadError: If the content is not a task list.
    """
    try:
        raw = _read_structured(path)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise MalformedPayloadError(f"{path.name}: could not parse task file: {exc}") from exc
    return parse_tasks(raw)
