# devsim/utils/io.py
"""
IO helpers for writing simulation results.
"""
from pathlib import Path
from typing import Any

import yaml


def save_yaml(obj: Any, file_path: str) -> Path:
    """Save object as YAML, creating parent directories."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.safe_dump(obj, f, default_flow_style=False, sort_keys=False)
    return path
