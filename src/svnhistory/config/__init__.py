"""Configuration loading, schema, and defaults."""

from svnhistory.config.loader import ConfigError, load_config
from svnhistory.config.schema import SvnHistoryConfig

__all__ = [
    "ConfigError",
    "SvnHistoryConfig",
    "load_config",
]
