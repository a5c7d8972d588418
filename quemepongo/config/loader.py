"""YAML config loader with runtime get/set."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from quemepongo.config.schema import AppConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing path (or a file that does not exist) yields the defaults.
    """
    if path is None:
        return AppConfig()
    path = Path(path)
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return AppConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'projection.years'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(value, str):
        value = _coerce(old_value, value)
    target[parts[-1]] = value
    return AppConfig(**data)


def _coerce(old_value: Any, value: str) -> Any:
    # bool before int: bool is an int subclass
    if isinstance(old_value, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(old_value, int):
        return int(value)
    if isinstance(old_value, float):
        return float(value)
    if isinstance(old_value, list):
        items = [v.strip() for v in value.split(",") if v.strip()]
        if old_value and isinstance(old_value[0], int):
            return [int(v) for v in items]
        return items
    return value
