"""
Navigation settings file.

A NavMeshConfig is stored as JSON, by default in
``project_settings/navigation.json`` under a project directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from trinav.errors import ConfigError
from trinav.log import Log, SinkLike
from trinav.types import NavMeshConfig

SETTINGS_DIR = "project_settings"
SETTINGS_FILE = "navigation.json"


def settings_path(project_path: Union[str, Path]) -> Path:
    """Path to the navigation settings file of a project."""
    return Path(project_path) / SETTINGS_DIR / SETTINGS_FILE


def load_config(path: Union[str, Path], log_sink: SinkLike = None) -> NavMeshConfig:
    """
    Load a config from a JSON file.

    A missing file yields the default config.

    Raises:
        ConfigError: The file is not valid JSON or holds invalid values.
    """
    log = Log(log_sink)
    path = Path(path)
    if not path.exists():
        log.debug(f"[NavigationSettings] {path} not found, using defaults")
        return NavMeshConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid navigation settings in {path}: {e}") from e

    config = NavMeshConfig.from_dict(data)
    log.info(f"[NavigationSettings] Loaded from {path}")
    return config


def save_config(config: NavMeshConfig, path: Union[str, Path], log_sink: SinkLike = None) -> None:
    """Write a config as JSON, creating parent directories."""
    config.validate()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    Log(log_sink).info(f"[NavigationSettings] Saved to {path}")
