"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from size_carton.config import AppConfig, PackingConfig, load_config
from size_carton.core.errors import ConfigError


def write_yaml(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestPackingConfig:
    def test_defaults(self):
        cfg = PackingConfig()
        assert cfg.shrink_factor == 0.98
        assert cfg.container == "20ft"
        assert (cfg.optimal_threshold_pct, cfg.good_threshold_pct) == (90.0, 70.0)

    @pytest.mark.parametrize("kwargs", [
        {"shrink_factor": 0.0},
        {"shrink_factor": 1.5},
        {"container": "53ft"},
        {"good_threshold_pct": 95.0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            PackingConfig(**kwargs)

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="shrink"):
            PackingConfig.from_dict({"shrink": 0.9})


class TestLoadConfig:
    def test_no_file_uses_env(self, monkeypatch):
        monkeypatch.setenv("SIZE_CARTON_API_URL", "http://repo.example:8080")
        monkeypatch.setenv("SIZE_CARTON_LOG_LEVEL", "debug")
        cfg = load_config()
        assert cfg.api_url == "http://repo.example:8080"
        assert cfg.log_level == "DEBUG"
        assert cfg.packing == PackingConfig()

    def test_full_file(self, tmp_path):
        path = write_yaml(tmp_path, """
packing:
  shrink_factor: 0.95
  container: 40ft
  optimal_threshold_pct: 85
repository:
  api_url: http://localhost:4000
  timeout: 3
log_level: warning
""")
        cfg = load_config(path)
        assert cfg.packing.shrink_factor == 0.95
        assert cfg.packing.container == "40ft"
        assert cfg.packing.optimal_threshold_pct == 85
        assert cfg.api_url == "http://localhost:4000"
        assert cfg.timeout == 3.0
        assert cfg.log_level == "WARNING"
        assert cfg.to_dict()["repository"]["timeout"] == 3.0

    def test_empty_file(self, tmp_path):
        assert isinstance(load_config(write_yaml(tmp_path, "")), AppConfig)

    @pytest.mark.parametrize("text", [
        "packing:\n  shrink_factor: 2\n",
        "packing:\n  colour: red\n",
        "extras:\n  a: 1\n",
        "repository:\n  retries: 3\n",
        "repository:\n  timeout: soon\n",
        "- just\n- a list\n",
        "packing: [1, 2]\n",
        "log_level: chatty\n",
    ])
    def test_invalid_files(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_config(write_yaml(tmp_path, text))

    def test_unknown_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("SIZE_CARTON_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError, match="log level"):
            load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot load"):
            load_config(tmp_path / "absent.yaml")

    def test_example_config_is_valid(self):
        example = Path(__file__).resolve().parents[1] / "config" / "packing.example.yaml"
        cfg = load_config(example)
        assert cfg.packing.shrink_factor == pytest.approx(0.98)
