"""YAML configuration access for storage settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml


def load_config(config_path: Path | str) -> Mapping[str, Any]:
    """
    Parse a YAML configuration file into a nested mapping.

    An empty file yields an empty mapping, so every setting falls back to its
    default. A file whose top level is not a mapping is rejected.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, Mapping):
        raise ValueError(f"Expected a mapping at the top level of {config_path}")
    return config


def get_by_dotted_path(config: Mapping[str, Any], dotted_key: str, default: Any = None) -> Any:
    """
    Fetch a value from a nested mapping, returning ``default`` when any segment is absent.

    Examples
    --------
    >>> get_by_dotted_path({"storage": {"backend": "numpy"}}, "storage.backend")
    'numpy'
    """
    current: Any = config
    for key in dotted_key.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current
