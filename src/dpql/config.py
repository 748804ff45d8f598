"""Runtime settings for DPQL tools.

Settings come from an optional YAML file. Lookup order:

1. Explicit path passed to ``load_settings`` (must exist)
2. ``DPQL_CONFIG`` environment variable (must exist)
3. ``config/dpql.yaml`` relative to the working directory (optional)
4. Built-in defaults

``DPQL_PORT`` overrides ``server_port`` whichever file is used.

Example ``config/dpql.yaml``::

    csv_delimiter: ";"
    csv_encoding: utf-8-sig
    server_host: 0.0.0.0
    server_port: 8080
    max_upload_bytes: 10485760
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/dpql.yaml")
CONFIG_ENV_VAR = "DPQL_CONFIG"
PORT_ENV_VAR = "DPQL_PORT"


@dataclass(frozen=True)
class Settings:
    csv_delimiter: str = ","
    csv_encoding: str = "utf-8-sig"
    server_host: str = "127.0.0.1"
    server_port: int = 8765
    max_upload_bytes: int = 10 * 1024 * 1024


_CASTS = {
    "csv_delimiter": str,
    "csv_encoding": str,
    "server_host": str,
    "server_port": int,
    "max_upload_bytes": int,
}


def _settings_from_mapping(data: Dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}
    for key, raw in data.items():
        if key not in known:
            logger.warning("Ignoring unknown setting: %s", key)
            continue
        try:
            values[key] = _CASTS[key](raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for setting '{key}': {raw!r}") from e
    return Settings(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from YAML, falling back to defaults.

    Args:
        path: Explicit settings file. When given, it must exist.

    Returns:
        A Settings instance.

    Raises:
        FileNotFoundError: If an explicit (or ``DPQL_CONFIG``) path does not exist.
        ValueError: If the YAML cannot be parsed or a value has the wrong type.
    """
    explicit = path if path is not None else os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit)
        if not config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")
    else:
        config_path = DEFAULT_CONFIG_PATH

    settings = Settings()
    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse settings file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {config_path} must contain a mapping")
        settings = _settings_from_mapping(data)
        logger.debug("Loaded settings from %s", config_path)

    port_override = os.environ.get(PORT_ENV_VAR)
    if port_override:
        try:
            settings = replace(settings, server_port=int(port_override))
        except ValueError as e:
            raise ValueError(f"Invalid {PORT_ENV_VAR}: {port_override!r}") from e

    return settings


__all__ = ["Settings", "load_settings", "DEFAULT_CONFIG_PATH"]
