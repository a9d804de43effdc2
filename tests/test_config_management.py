"""Tests for config validation, adapter options and the YAML config manager."""

import pytest
import yaml

from mtran_client.config_management import (
    AdapterOptions,
    ConfigManager,
    ServerConfig,
    validate_config,
)
from mtran_client.errors import ConfigError
from mtran_client.urls import DEFAULT_URL


class TestValidateConfig:
    def test_none_rejected(self):
        with pytest.raises(ConfigError, match="Configuration must not be empty"):
            validate_config(None)

    @pytest.mark.parametrize("config", [{}, {"apiUrl": ""}, {"apiUrl": "  "}, {"token": "abc"}])
    def test_missing_url_rejected(self, config):
        with pytest.raises(ConfigError, match="API URL"):
            validate_config(config)

    def test_non_mapping_rejected(self):
        with pytest.raises(ConfigError):
            validate_config("localhost:8989")

    def test_host_mapping(self):
        config = validate_config({"apiUrl": "localhost:9000", "token": "abc"})
        assert config == ServerConfig(api_url="localhost:9000", token="abc")

    def test_snake_case_mapping_and_blank_token(self):
        config = validate_config({"api_url": "mt.lan", "token": ""})
        assert config.api_url == "mt.lan"
        assert config.token is None

    @pytest.mark.parametrize("token,expected", [(123, "123"), (0, "0"), ("abc", "abc"), (None, None)])
    def test_token_coerced_to_text(self, token, expected):
        assert validate_config({"apiUrl": "mt.lan", "token": token}).token == expected
        assert validate_config(ServerConfig("mt.lan", token)).token == expected

    def test_server_config_passthrough(self):
        config = ServerConfig("mt.lan")
        assert validate_config(config) is config


class TestAdapterOptions:
    def test_defaults(self):
        options = AdapterOptions.from_mapping({})
        assert options.default_url == DEFAULT_URL
        assert options.preflight_health_check is False
        assert options.empty_text_policy == "return-empty"
        assert options.translate_timeout_ms == 15000
        assert options.health_timeout_ms == 5000

    def test_overrides(self):
        options = AdapterOptions.from_mapping(
            {
                "default_url": "http://mt.lan:1",
                "preflight_health_check": True,
                "empty_text_policy": "reject",
                "translate_timeout_ms": "2500",
            }
        )
        assert options.default_url == "http://mt.lan:1"
        assert options.preflight_health_check is True
        assert options.empty_text_policy == "reject"
        assert options.translate_timeout_ms == 2500

    def test_unknown_policy(self):
        with pytest.raises(ConfigError, match="empty_text_policy"):
            AdapterOptions.from_mapping({"empty_text_policy": "ignore"})

    @pytest.mark.parametrize(
        "settings",
        [
            {"translate_timeout_ms": 0},
            {"health_timeout_ms": -5},
            {"translate_timeout_ms": "soon"},
            {"health_timeout_ms": None},
        ],
    )
    def test_invalid_timeouts(self, settings):
        with pytest.raises(ConfigError, match="timeout_ms"):
            AdapterOptions.from_mapping(settings)


@pytest.fixture
def clean_token_env(monkeypatch):
    monkeypatch.delenv("MTRAN_TOKEN", raising=False)


@pytest.fixture
def config_file(tmp_path, monkeypatch, clean_token_env):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump({"translation": {"mtran": {"api_url": "localhost:9000", "token": "file-token"}}})
    )
    return path


class TestConfigManager:
    def test_loads_yaml(self, logger, config_file):
        manager = ConfigManager(logger)
        assert manager.config_file == "config.yaml"
        assert manager.extract("translation.mtran.api_url") == "localhost:9000"
        assert manager.extract("translation.mtran.token") == "file-token"

    def test_extract_default(self, logger, config_file):
        manager = ConfigManager(logger)
        assert manager.extract("translation.nope.deeper", "fallback") == "fallback"

    def test_env_token_applied_to_translator_config_only(self, logger, config_file, monkeypatch):
        monkeypatch.setenv("MTRAN_TOKEN", "env-token")
        manager = ConfigManager(logger)

        assert manager.translator_config()["translation"]["mtran"]["token"] == "env-token"
        assert manager.extract("translation.mtran.token") == "file-token"
        assert manager.config["translation"]["mtran"]["token"] == "file-token"

    def test_translator_config_without_env_token(self, logger, config_file):
        manager = ConfigManager(logger)
        config = manager.translator_config()

        assert config == manager.config
        assert config is not manager.config

    def test_dev_mode_file(self, logger, tmp_path, monkeypatch, clean_token_env):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.dev.yaml").write_text("translation:\n  provider: mtran\n")
        manager = ConfigManager(logger, dev=True)
        assert manager.extract("translation.provider") == "mtran"
        assert manager.extract("translation.mtran") == {}

    def test_missing_file(self, logger, tmp_path, monkeypatch, log_stream):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError):
            ConfigManager(logger)
        assert "config.yaml not found" in log_stream.getvalue()

    def test_config_without_translation_section(self, logger, tmp_path, monkeypatch, clean_token_env):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("translation:\n")
        manager = ConfigManager(logger)
        assert manager.translator_config() == {"translation": {"mtran": {}}}

    def test_manager_has_no_write_back(self, logger, config_file, monkeypatch):
        """Nothing on the manager persists config, so the env token cannot reach disk."""
        monkeypatch.setenv("MTRAN_TOKEN", "secret-env")
        before = config_file.read_text()

        manager = ConfigManager(logger)
        manager.translator_config()

        for name in ("save_config_file", "update_config", "reload"):
            assert not hasattr(manager, name)
        assert config_file.read_text() == before
