"""
Runner configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class RunnerConfig:
    """Configuration for ExperimentRunner."""
    verbose: bool = True
    log_dir: Optional[str] = None  # None = console only
    run_id: Optional[str] = None  # generated when not set
    max_rounds: Optional[int] = None  # None = run until convergence
    diagnostics: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunnerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        config = cls(**data)
        config.validate()
        return config

    def merged(self, **overrides: Any) -> "RunnerConfig":
        """Return a copy with every override that is not None applied."""
        config = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        config.validate()
        return config

    def validate(self) -> None:
        for name in ("verbose", "diagnostics"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be a boolean.")
        for name in ("log_dir", "run_id"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"'{name}' must be a string.")
        if self.max_rounds is not None:
            if isinstance(self.max_rounds, bool) or not isinstance(self.max_rounds, int):
                raise ConfigError("'max_rounds' must be an integer.")
            if self.max_rounds < 0:
                raise ConfigError("'max_rounds' must not be negative.")


def load_config(path: str) -> RunnerConfig:
    try:
        data = yaml.safe_load(Path(path).read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config '{path}' is not valid YAML: {exc}") from exc
    if data is None:
        return RunnerConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping.")
    return RunnerConfig.from_dict(data)
