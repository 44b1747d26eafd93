#!/usr/bin/env python3
"""Tests for configuration loading and provider composition."""

import pytest

from carservice import ServiceArea, get_interval
from carservice.advisory import CachedAdvisoryProvider, StaticAdvisoryProvider
from carservice.advisory.gemini import DEFAULT_MODEL
from carservice.config import Config, ConfigError, build_provider, load_config, load_schema
from carservice.db import DEFAULT_DATABASE_URL


@pytest.fixture(autouse=True)
def no_default_file(monkeypatch, tmp_path):
    """Run from an empty directory so ./carservice.yaml is never picked up."""
    monkeypatch.chdir(tmp_path)


def write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestLoadSchema:
    """Tests for load_schema."""

    def test_config_schema(self):
        assert "ai" in load_schema("config")["properties"]


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        config = load_config(environ={})
        assert config.ai_enabled is False
        assert config.gemini_api_key is None
        assert config.gemini_model == DEFAULT_MODEL
        assert config.database_url == DEFAULT_DATABASE_URL
        assert get_interval(ServiceArea.ENGINE_OIL, config.intervals).every_km == 15000

    def test_reads_file(self, tmp_path):
        path = write(tmp_path, """
ai:
  enabled: true
  gemini:
    apiKey: file-key
    model: gemini-2.0-flash
    timeoutSeconds: 10
database:
  url: sqlite:///other.db
intervals:
  brake_fluid:
    everyMonths: 36
""")
        config = load_config(path, environ={})
        assert config.ai_enabled is True
        assert config.gemini_api_key == "file-key"
        assert config.gemini_model == "gemini-2.0-flash"
        assert config.gemini_timeout == 10
        assert config.database_url == "sqlite:///other.db"
        assert get_interval(ServiceArea.BRAKE_FLUID, config.intervals).every_months == 36

    def test_path_from_environment(self, tmp_path):
        path = write(tmp_path, "database:\n  url: sqlite:///env.db\n")
        config = load_config(environ={"CARSERVICE_CONFIG": str(path)})
        assert config.database_url == "sqlite:///env.db"

    def test_default_file_in_working_directory(self, tmp_path):
        (tmp_path / "carservice.yaml").write_text("database:\n  url: sqlite:///cwd.db\n")
        assert load_config(environ={}).database_url == "sqlite:///cwd.db"

    def test_environment_overrides(self, tmp_path):
        path = write(tmp_path, "ai:\n  enabled: false\n  gemini:\n    apiKey: file-key\n")
        config = load_config(path, environ={
            "CARSERVICE_AI_ENABLED": "yes",
            "GEMINI_API_KEY": "env-key",
            "GEMINI_MODEL": "models/gemini-x",
            "CARSERVICE_DATABASE_URL": "sqlite:///override.db",
        })
        assert config.ai_enabled is True
        assert config.gemini_api_key == "env-key"
        assert config.gemini_model == "models/gemini-x"
        assert config.database_url == "sqlite:///override.db"

    def test_bad_boolean(self):
        with pytest.raises(ConfigError, match="CARSERVICE_AI_ENABLED"):
            load_config(environ={"CARSERVICE_AI_ENABLED": "maybe"})

    def test_ai_without_key(self):
        with pytest.raises(ConfigError, match="API key"):
            load_config(environ={"CARSERVICE_AI_ENABLED": "1"})

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(write(tmp_path, "ai:\n  enable: true\n"), environ={})

    def test_unknown_interval_area(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write(tmp_path, "intervals:\n  wipers:\n    everyKm: 1000\n"), environ={})

    def test_yaml_error(self, tmp_path):
        with pytest.raises(ConfigError, match="YAML"):
            load_config(write(tmp_path, "ai: [unclosed\n"), environ={})


class TestBuildProvider:
    """Tests for build_provider."""

    def test_disabled_is_static(self):
        assert isinstance(build_provider(Config()), StaticAdvisoryProvider)

    def test_enabled_is_cached_gemini(self, tmp_path):
        config = Config(
            ai_enabled=True,
            gemini_api_key="key",
            database_url=f"sqlite:///{tmp_path / 'cache.db'}",
        )
        provider = build_provider(config)
        assert isinstance(provider, CachedAdvisoryProvider)
        assert (tmp_path / "cache.db").exists()
