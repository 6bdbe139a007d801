"""Layered TOML configuration files.

``default.toml`` holds base values and ``{RECEIPTS_ENV}.toml`` overrides them
key by key. Both live in ``RECEIPTS_CONFIG_DIR`` (``./config`` by default).
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "RECEIPTS_CONFIG_DIR"
ENVIRONMENT_VAR = "RECEIPTS_ENV"
DEFAULT_ENVIRONMENT = "development"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return base updated with override, merging nested tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(config_dir: Path | None = None, environment: str | None = None) -> dict[str, Any]:
    """Read default.toml and the environment's override file.

    Args:
        config_dir: Directory holding the files (RECEIPTS_CONFIG_DIR or ./config)
        environment: Override file stem (RECEIPTS_ENV or "development")

    Raises:
        FileNotFoundError: If default.toml is missing
        tomllib.TOMLDecodeError: If a file is not valid TOML
    """
    config_dir = config_dir or Path(os.environ.get(CONFIG_DIR_VAR, "config"))
    environment = environment or os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)

    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {default_path}")

    config: dict[str, Any] = {}
    for path in (default_path, config_dir / f"{environment}.toml"):
        if path.is_file():
            with path.open("rb") as f:
                config = deep_merge(config, tomllib.load(f))
    return config
