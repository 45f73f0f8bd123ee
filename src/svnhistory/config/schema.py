"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

NodeKindStrategy = Literal["extension", "backend"]
OutputFormat = Literal["terminal", "json", "yaml"]

NODE_KIND_STRATEGIES = ("extension", "backend")
OUTPUT_FORMATS = ("terminal", "json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RepositoryConfig:
    url: str = ""
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass
class BackendConfig:
    svn_binary: str = "svn"
    timeout: int = 60  # seconds per svn command
    trust_server_cert: bool = False


@dataclass
class NormalizerConfig:
    node_kind_strategy: NodeKindStrategy = "extension"
    sort_changes: bool = False  # sort changes by path instead of backend order


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_paths: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = ""


@dataclass
class SvnHistoryConfig:
    version: str = "1.0"
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
