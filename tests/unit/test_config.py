"""Unit tests for client configuration."""

import pytest

from core.config import Configuration, expand_env, load_config


class TestExpandEnv:
    """Test ${VAR} and ${VAR:-default} expansion."""

    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv("SECTESTER_TEST_VAR", "value")
        assert expand_env("${SECTESTER_TEST_VAR}") == "value"

    def test_unset_variable_is_empty(self, monkeypatch):
        monkeypatch.delenv("SECTESTER_TEST_VAR", raising=False)
        assert expand_env("${SECTESTER_TEST_VAR}") == ""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("SECTESTER_TEST_VAR", raising=False)
        assert expand_env("${SECTESTER_TEST_VAR:-fallback}") == "fallback"

    def test_non_strings_untouched(self):
        assert expand_env(5000) == 5000
        assert expand_env(None) is None
        assert expand_env("plain") == "plain"


class TestConfiguration:
    """Test Configuration validation."""

    def test_defaults(self):
        config = Configuration(hostname="app.example.com")

        assert config.polling_interval == 5000
        assert config.timeout is None
        assert config.exchange == "EventBus"
        assert config.api_url == "https://app.example.com"

    def test_hostname_with_scheme(self):
        config = Configuration(hostname="http://localhost:8000/")
        assert config.api_url == "http://localhost:8000"

    def test_hostname_required(self):
        with pytest.raises(ValueError):
            Configuration(hostname="")

    @pytest.mark.parametrize("polling_interval", [0, -1])
    def test_non_positive_polling_interval_rejected(self, polling_interval):
        with pytest.raises(ValueError):
            Configuration(hostname="app.example.com", polling_interval=polling_interval)

    def test_zero_polling_interval_from_dict_rejected(self):
        with pytest.raises(ValueError):
            Configuration.from_dict({"hostname": "app.example.com", "polling_interval": "0"})

    def test_from_dict_converts_and_drops_unknown(self):
        config = Configuration.from_dict(
            {
                "hostname": "app.example.com",
                "polling_interval": "250",
                "timeout": "60000",
                "colour": "blue",
            }
        )

        assert config.polling_interval == 250
        assert config.timeout == 60000
        assert not hasattr(config, "colour")

    def test_from_dict_without_hostname(self):
        with pytest.raises(ValueError, match="hostname"):
            Configuration.from_dict({"api_key": "k"})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SECTESTER_HOSTNAME", "env.example.com")
        monkeypatch.setenv("SECTESTER_API_KEY", "env-key")
        monkeypatch.setenv("SECTESTER_POLLING_INTERVAL", "1000")
        monkeypatch.delenv("SECTESTER_BUS_URL", raising=False)
        monkeypatch.delenv("SECTESTER_EXCHANGE", raising=False)
        monkeypatch.delenv("SECTESTER_TIMEOUT", raising=False)

        config = Configuration.from_env()

        assert config.hostname == "env.example.com"
        assert config.api_key == "env-key"
        assert config.polling_interval == 1000
        assert config.bus_url == "redis://localhost:6379"


class TestLoadConfig:
    """Test YAML loading."""

    def test_load_yaml_with_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SECTESTER_API_KEY", "yaml-key")
        monkeypatch.delenv("SECTESTER_HOSTNAME", raising=False)
        path = tmp_path / "sectester.yaml"
        path.write_text(
            "hostname: ${SECTESTER_HOSTNAME:-app.example.com}\n"
            "api_key: ${SECTESTER_API_KEY}\n"
            "exchange: Tenant\n"
            "timeout: 600000\n"
        )

        config = load_config(path)

        assert config.hostname == "app.example.com"
        assert config.api_key == "yaml-key"
        assert config.exchange == "Tenant"
        assert config.timeout == 600000

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Empty config file"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
