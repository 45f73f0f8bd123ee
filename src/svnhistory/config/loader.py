"""Load and merge configuration from .svnhistory.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from svnhistory.config.schema import (
    LOG_LEVELS,
    NODE_KIND_STRATEGIES,
    OUTPUT_FORMATS,
    BackendConfig,
    LoggingConfig,
    NormalizerConfig,
    OutputConfig,
    RepositoryConfig,
    SvnHistoryConfig,
)

CONFIG_FILENAME = ".svnhistory.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: SvnHistoryConfig) -> None:
    """Apply SVNHISTORY_* environment variable overrides."""
    if val := os.environ.get("SVNHISTORY_URL"):
        cfg.repository.url = val
    if val := os.environ.get("SVNHISTORY_USERNAME"):
        cfg.repository.username = val
    if val := os.environ.get("SVNHISTORY_PASSWORD"):
        cfg.repository.password = val
    if val := os.environ.get("SVNHISTORY_FORMAT"):
        cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("SVNHISTORY_TIMEOUT"):
        try:
            cfg.backend.timeout = int(val)
        except ValueError as exc:
            raise ConfigError(f"SVNHISTORY_TIMEOUT must be an integer, got {val!r}") from exc
    if val := os.environ.get("SVNHISTORY_LOG_LEVEL"):
        cfg.logging.level = val


def validate(cfg: SvnHistoryConfig) -> None:
    """Reject values outside the enumerated choices."""
    if cfg.normalizer.node_kind_strategy not in NODE_KIND_STRATEGIES:
        raise ConfigError(
            f"normalizer.node_kind_strategy must be one of {NODE_KIND_STRATEGIES}, "
            f"got {cfg.normalizer.node_kind_strategy!r}"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {OUTPUT_FORMATS}, got {cfg.output.format!r}"
        )
    cfg.logging.level = str(cfg.logging.level).upper()
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {LOG_LEVELS}, got {cfg.logging.level!r}")
    if not isinstance(cfg.backend.timeout, int) or cfg.backend.timeout <= 0:
        raise ConfigError(f"backend.timeout must be a positive integer, got {cfg.backend.timeout!r}")


def load_config(
    base_dir: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> SvnHistoryConfig:
    """Load, validate, and return a SvnHistoryConfig."""
    config_path = find_config_file(base_dir or Path.cwd(), config_override)

    if config_path is None:
        cfg = SvnHistoryConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = SvnHistoryConfig(
            version=raw.get("version", "1.0"),
            repository=_build_section(raw, RepositoryConfig, "repository"),
            backend=_build_section(raw, BackendConfig, "backend"),
            normalizer=_build_section(raw, NormalizerConfig, "normalizer"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )

    _merge_env_overrides(cfg)
    validate(cfg)
    return cfg
