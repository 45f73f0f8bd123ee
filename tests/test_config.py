"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from svnhistory.config.loader import ConfigError, load_config
from svnhistory.config.schema import SvnHistoryConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("URL", "USERNAME", "PASSWORD", "FORMAT", "TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"SVNHISTORY_{var}", raising=False)


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert isinstance(cfg, SvnHistoryConfig)
        assert cfg.repository.url == ""
        assert cfg.backend.svn_binary == "svn"
        assert cfg.backend.timeout == 60
        assert cfg.normalizer.node_kind_strategy == "extension"
        assert cfg.normalizer.sort_changes is False
        assert cfg.output.format == "terminal"
        assert cfg.logging.level == "WARNING"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".svnhistory.toml").write_text(
            'version = "1.0"\n'
            '[repository]\n'
            'url = "file:///storage/repo"\n'
            'username = "railsmonk"\n'
            '[normalizer]\n'
            'node_kind_strategy = "backend"\n'
            'sort_changes = true\n'
            '[logging]\n'
            'level = "debug"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.repository.url == "file:///storage/repo"
        assert cfg.repository.username == "railsmonk"
        assert cfg.normalizer.node_kind_strategy == "backend"
        assert cfg.normalizer.sort_changes is True
        assert cfg.logging.level == "DEBUG"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".svnhistory.toml").write_text('[backend]\ncolour = "blue"\ntimeout = 5\n')
        assert load_config(tmp_path).backend.timeout == 5

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".svnhistory.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_strategy_raises(self, tmp_path: Path):
        (tmp_path / ".svnhistory.toml").write_text('[normalizer]\nnode_kind_strategy = "guess"\n')
        with pytest.raises(ConfigError, match="node_kind_strategy"):
            load_config(tmp_path)

    def test_invalid_timeout_raises(self, tmp_path: Path):
        (tmp_path / ".svnhistory.toml").write_text("[backend]\ntimeout = 0\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_credentials(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SVNHISTORY_URL", "svn://host/repo")
        monkeypatch.setenv("SVNHISTORY_USERNAME", "login")
        monkeypatch.setenv("SVNHISTORY_PASSWORD", "pass")
        cfg = load_config(tmp_path)
        assert cfg.repository.url == "svn://host/repo"
        assert cfg.repository.username == "login"
        assert cfg.repository.password == "pass"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SVNHISTORY_FORMAT", "yaml")
        assert load_config(tmp_path).output.format == "yaml"

    def test_bad_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SVNHISTORY_FORMAT", "xml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_timeout_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SVNHISTORY_TIMEOUT", "15")
        assert load_config(tmp_path).backend.timeout == 15

    def test_bad_timeout_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SVNHISTORY_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            load_config(tmp_path)
