"""Scenario configuration loading for devsim."""

from pathlib import Path
from typing import Optional

import yaml

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default.yaml"


def load_config(config_path: Optional[str] = None) -> dict:
    """Load a scenario from a YAML file.

    Args:
        config_path: Path to configuration file, the bundled default
            scenario when omitted

    Returns:
        Configuration dictionary (empty for an empty file)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Merge two configuration dictionaries.

    Nested dictionaries are merged key by key; lists and scalars from the
    override replace the base value.

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = base_config.copy()
    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged
