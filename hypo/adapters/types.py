"""
Shared adapter types.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError


class KitError(ValueError):
    """Raised when a kit file cannot be loaded."""


def load_kit_model(path: Path, model: type) -> BaseModel:
    """Read a YAML kit and validate it against a pydantic model."""
    data = _load_yaml(path)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise KitError(f"Invalid kit '{path}': {exc}") from exc


def resolve_kit_path(path: Optional[str], default: Path) -> Path:
    return Path(path) if path is not None else default


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise KitError(f"Kit '{path}' is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise KitError(f"Kit '{path}' must contain a mapping.")
    return data
