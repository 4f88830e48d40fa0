"""Load and validate .rwweb/config.yaml."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml


# Default config values
DEFAULTS: dict[str, Any] = {
    "store": {
        "path": ".rwweb/rwweb.db",
    },
    "canvas": {
        "state_file": ".rwweb/canvas.yaml",
        "viewport": {"width": 1200, "height": 800},
        "empty_item": {"x": 100, "y": 100, "width": 400, "height": 50},
        "drop_item": {"width": 200, "height": 150},
        "friend_item": {"width": 200, "height": 150},
        "column_gap": 60,
        "row_gap": 20,
    },
    "welcome": {
        "enabled": True,
        "geometry": {"x": 50, "y": 50, "width": 500, "height": 150},
    },
    "suggest": {
        "limit": 10,
    },
    "log_level": "WARNING",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Geometry blocks and the keys each must carry
_GEOMETRY_KEYS: dict[str, tuple[str, ...]] = {
    "viewport": ("width", "height"),
    "empty_item": ("x", "y", "width", "height"),
    "drop_item": ("width", "height"),
    "friend_item": ("width", "height"),
}


class ConfigError(Exception):
    """Raised when config is invalid or missing."""


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base recursively. Override wins on conflicts."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_geometry(name: str, block: object, keys: tuple[str, ...]) -> None:
    if not isinstance(block, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    missing = set(keys) - set(block.keys())
    if missing:
        raise ConfigError(f"'{name}' missing required keys: {sorted(missing)}")
    for key in keys:
        if not _is_number(block[key]):
            raise ConfigError(f"'{name}.{key}' must be a number")
    for key in ("width", "height"):
        if key in keys and block[key] <= 0:
            raise ConfigError(f"'{name}.{key}' must be positive")


def _validate(config: dict) -> None:
    """Validate required fields in config."""
    store = config.get("store")
    if not isinstance(store, dict) or not isinstance(store.get("path"), str):
        raise ConfigError("'store.path' must be a string")

    canvas = config.get("canvas")
    if not isinstance(canvas, dict):
        raise ConfigError("'canvas' must be a mapping")
    if not isinstance(canvas.get("state_file"), str):
        raise ConfigError("'canvas.state_file' must be a string")
    for block, keys in _GEOMETRY_KEYS.items():
        _validate_geometry(f"canvas.{block}", canvas.get(block), keys)
    for key in ("column_gap", "row_gap"):
        if not _is_number(canvas.get(key)) or canvas[key] < 0:
            raise ConfigError(f"'canvas.{key}' must be a non-negative number")

    welcome = config.get("welcome")
    if not isinstance(welcome, dict):
        raise ConfigError("'welcome' must be a mapping")
    if not isinstance(welcome.get("enabled"), bool):
        raise ConfigError("'welcome.enabled' must be true or false")
    _validate_geometry("welcome.geometry", welcome.get("geometry"), ("x", "y", "width", "height"))

    limit = config.get("suggest", {}).get("limit")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ConfigError("'suggest.limit' must be an integer >= 1")

    level = config.get("log_level")
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Unsupported log_level '{level}'. Must be one of {list(LOG_LEVELS)}."
        )


def load_config(project_root: Path | None = None) -> dict:
    """Load config from .rwweb/config.yaml under project_root.

    Falls back to cwd if project_root is None. Merges with DEFAULTS
    so callers always get a full config dict.
    """
    root = Path(project_root) if project_root else Path.cwd()
    config_path = root / ".rwweb" / "config.yaml"

    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    # An empty file means "all defaults"
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(raw).__name__}")

    config = _deep_merge(copy.deepcopy(DEFAULTS), raw)
    _validate(config)
    return config


def default_config() -> dict:
    """Return a validated copy of DEFAULTS (no file needed)."""
    config = copy.deepcopy(DEFAULTS)
    _validate(config)
    return config


def resolve_paths(config: dict, project_root: Path) -> dict[str, Path]:
    """Resolve the state file paths relative to project_root.

    Returns ``{"db": Path, "canvas_state": Path}``.
    """
    return {
        "db": project_root / config["store"]["path"],
        "canvas_state": project_root / config["canvas"]["state_file"],
    }
