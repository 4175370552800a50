"""
Configuration for size_carton.

Classes:
    PackingConfig — packer and statistics constants
    AppConfig     — packing config plus repository / logging settings

A YAML file may override any value:

    packing:
      shrink_factor: 0.98
      container: 20ft
      optimal_threshold_pct: 90
      good_threshold_pct: 70
    repository:
      api_url: http://localhost:3000
      timeout: 10
    log_level: INFO

Environment variables SIZE_CARTON_API_URL and SIZE_CARTON_LOG_LEVEL
provide the defaults for the repository URL and log level.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from size_carton.algorithms.grid_packer import DEFAULT_SHRINK_FACTOR
from size_carton.core.containers import CONTAINERS
from size_carton.core.errors import ConfigError
from size_carton.monitoring.metrics import GOOD_THRESHOLD_PCT, OPTIMAL_THRESHOLD_PCT
from size_carton.utils.logger import check_level

DEFAULT_API_URL = "http://localhost:3000"


# ─────────────────────────────────────────────────────────────────────────────
# Packing
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PackingConfig:
    """
    Tunable constants of the packer and the efficiency rating.

    Attributes:
        shrink_factor:         Wall clearance, usable = interior * factor.
        container:             Default container class.
        optimal_threshold_pct: Utilization above this is "optimal".
        good_threshold_pct:    Utilization above this is "good".
    """
    shrink_factor: float = DEFAULT_SHRINK_FACTOR
    container: str = "20ft"
    optimal_threshold_pct: float = OPTIMAL_THRESHOLD_PCT
    good_threshold_pct: float = GOOD_THRESHOLD_PCT

    def __post_init__(self):
        if not 0.0 < self.shrink_factor <= 1.0:
            raise ConfigError(f"shrink_factor must be in (0, 1], got {self.shrink_factor}")
        if self.container not in CONTAINERS:
            raise ConfigError(
                f"Unknown container {self.container!r}. Available: {list(CONTAINERS)}"
            )
        if self.good_threshold_pct > self.optimal_threshold_pct:
            raise ConfigError("good_threshold_pct must not exceed optimal_threshold_pct")

    def to_dict(self) -> dict:
        return {"shrink_factor": self.shrink_factor, "container": self.container,
                "optimal_threshold_pct": self.optimal_threshold_pct,
                "good_threshold_pct": self.good_threshold_pct}

    @classmethod
    def from_dict(cls, d: dict) -> "PackingConfig":
        return cls(**_known_keys(d, {f.name for f in fields(cls)}, "packing"))


# ─────────────────────────────────────────────────────────────────────────────
# Application
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    packing: PackingConfig = field(default_factory=PackingConfig)
    api_url: str = field(default_factory=lambda: os.getenv("SIZE_CARTON_API_URL", DEFAULT_API_URL))
    timeout: float = 10.0
    log_level: str = field(default_factory=lambda: os.getenv("SIZE_CARTON_LOG_LEVEL", "INFO").upper())

    def __post_init__(self):
        check_level(self.log_level)

    def to_dict(self) -> dict:
        return {
            "packing": self.packing.to_dict(),
            "repository": {"api_url": self.api_url, "timeout": self.timeout},
            "log_level": self.log_level,
        }


def _known_keys(d, allowed: set, section: str) -> dict:
    if not isinstance(d, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")
    unknown = sorted(set(d) - allowed)
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {', '.join(unknown)}")
    return dict(d)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """
    Build an AppConfig from defaults, environment and an optional YAML file.

    Raises:
        ConfigError: Unreadable file, unknown keys or out-of-range values.
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load config {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    unknown = sorted(set(raw) - {"packing", "repository", "log_level"})
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(unknown)}")

    kwargs = {}
    if "packing" in raw:
        try:
            kwargs["packing"] = PackingConfig.from_dict(raw["packing"] or {})
        except TypeError as exc:
            raise ConfigError(f"Invalid packing config: {exc}") from exc
    repo = _known_keys(raw.get("repository") or {}, {"api_url", "timeout"}, "repository")
    if "api_url" in repo:
        kwargs["api_url"] = str(repo["api_url"])
    if "timeout" in repo:
        try:
            kwargs["timeout"] = float(repo["timeout"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid repository timeout: {repo['timeout']!r}") from exc
    if "log_level" in raw:
        kwargs["log_level"] = str(raw["log_level"]).upper()
    return AppConfig(**kwargs)
