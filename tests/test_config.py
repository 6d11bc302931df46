"""Tests for provider configuration loading and validation."""

import logging

import pytest
import yaml
from pydantic import ValidationError

from commerce_usps.config import (
    Conditions,
    Options,
    ProviderConfig,
    default_configuration,
    load_config,
    resolve_env_vars,
)


class TestProviderConfig:
    """Tests for ProviderConfig defaults and validation."""

    def test_defaults(self):
        """Defaults are test mode, no tracing, nothing excluded."""
        cfg = ProviderConfig()
        assert cfg.api_information.user_id == ""
        assert cfg.api_information.password == ""
        assert cfg.is_test_mode is True
        assert cfg.options.log.request is False
        assert cfg.options.log.response is False
        assert cfg.excluded_services == frozenset()

    def test_default_configuration_mapping(self):
        """default_configuration() mirrors the model defaults."""
        assert default_configuration() == {
            "api_information": {"user_id": "", "password": "", "mode": "test"},
            "options": {"log": {"request": False, "response": False}},
            "conditions": {"conditions": ()},
        }

    def test_live_mode(self):
        """Live mode switches off test mode."""
        cfg = ProviderConfig(api_information={"user_id": "u", "mode": "live"})
        assert cfg.is_test_mode is False

    def test_invalid_mode_rejected(self):
        """Modes other than test/live fail validation."""
        with pytest.raises(ValidationError):
            ProviderConfig(api_information={"mode": "staging"})

    def test_numeric_user_id_coerced(self):
        """YAML may read a numeric user ID as int."""
        cfg = ProviderConfig(api_information={"user_id": 123456})
        assert cfg.api_information.user_id == "123456"

    def test_is_configured_needs_both(self):
        """Both user ID and password are required."""
        assert ProviderConfig(api_information={"user_id": "u", "password": "p"}).is_configured()
        assert not ProviderConfig(api_information={"user_id": "u"}).is_configured()
        assert not ProviderConfig(api_information={"password": "p"}).is_configured()

    def test_frozen(self):
        """Configuration cannot be mutated after construction."""
        cfg = ProviderConfig()
        with pytest.raises(ValidationError):
            cfg.api_information = None


class TestOptions:
    """Tests for log option normalization."""

    def test_checkbox_list(self):
        """A list of checked boxes turns the named flags on."""
        options = Options(log=["request"])
        assert options.log.request is True
        assert options.log.response is False

    def test_checkbox_mapping(self):
        """Unchecked boxes submitted as 0 stay off."""
        options = Options(log={"request": "request", "response": 0})
        assert options.log.request is True
        assert options.log.response is False


class TestConditions:
    """Tests for excluded service normalization."""

    def test_list(self):
        """Codes are stringified and stripped."""
        assert Conditions(conditions=[6, " 1 "]).conditions == ("6", "1")

    def test_checkbox_mapping(self):
        """Only checked entries of a checkbox mapping are kept."""
        assert Conditions(conditions={"6": "6", "1": 0}).conditions == ("6",)

    def test_single_value(self):
        """A lone code becomes a one-element tuple."""
        assert Conditions(conditions="6").conditions == ("6",)

    def test_none(self):
        """None means nothing is excluded."""
        assert Conditions(conditions=None).conditions == ()

    def test_unknown_code_warns(self, caplog):
        """Unknown CLASSIDs are kept but logged."""
        with caplog.at_level(logging.WARNING, logger="commerce_usps.config"):
            cond = Conditions(conditions=["999"])
        assert cond.conditions == ("999",)
        assert "not a known CLASSID" in caplog.text

    def test_excluded_services(self):
        """ProviderConfig exposes exclusions as a frozenset."""
        cfg = ProviderConfig(conditions={"conditions": ["6", "6", "1"]})
        assert cfg.excluded_services == frozenset({"6", "1"})


class TestResolveEnvVars:
    """Tests for ${VAR} resolution in config values."""

    def test_resolves_env_var(self, monkeypatch):
        """${VAR} syntax resolves from environment."""
        monkeypatch.setenv("TEST_USPS_USER", "123ACME")
        assert resolve_env_vars("${TEST_USPS_USER}") == "123ACME"

    def test_passthrough_no_vars(self):
        """Strings without ${} pass through unchanged."""
        assert resolve_env_vars("plain-value") == "plain-value"

    def test_missing_env_var_returns_empty(self):
        """Missing env vars resolve to empty string."""
        assert resolve_env_vars("${DEFINITELY_NOT_SET_XYZ}") == ""


class TestLoadConfig:
    """Tests for YAML config file loading."""

    def _write(self, tmp_path, data, name="commerce_usps.yaml"):
        config_file = tmp_path / name
        config_file.write_text(yaml.dump(data))
        return config_file

    def test_load_from_explicit_path(self, tmp_path):
        """Load config from an explicit path."""
        config_file = self._write(tmp_path, {
            "api_information": {"user_id": "123ACME", "password": "pw", "mode": "live"},
            "options": {"log": ["request", "response"]},
            "conditions": {"conditions": ["6", "7"]},
        })

        cfg = load_config(config_path=str(config_file))

        assert cfg is not None
        assert cfg.api_information.user_id == "123ACME"
        assert cfg.is_test_mode is False
        assert cfg.options.log.request is True
        assert cfg.options.log.response is True
        assert cfg.excluded_services == frozenset({"6", "7"})

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty YAML file loads as the default configuration."""
        config_file = tmp_path / "commerce_usps.yaml"
        config_file.write_text("")

        assert load_config(config_path=str(config_file)) == ProviderConfig()

    def test_missing_explicit_path_raises(self, tmp_path):
        """An explicit path that does not exist is an error."""
        with pytest.raises(FileNotFoundError):
            load_config(config_path=str(tmp_path / "missing.yaml"))

    def test_returns_none_when_no_config(self, tmp_path, monkeypatch):
        """Returns None when no config file is found."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config() is None

    def test_finds_config_in_cwd(self, tmp_path, monkeypatch):
        """A commerce_usps.yaml in the working directory is picked up."""
        self._write(tmp_path, {"api_information": {"user_id": "cwd-user"}})
        monkeypatch.chdir(tmp_path)

        cfg = load_config()

        assert cfg is not None
        assert cfg.api_information.user_id == "cwd-user"

    def test_finds_config_in_home(self, tmp_path, monkeypatch):
        """~/.commerce_usps/config.yaml is the fallback location."""
        home = tmp_path / "home"
        (home / ".commerce_usps").mkdir(parents=True)
        (home / ".commerce_usps" / "config.yaml").write_text(
            yaml.dump({"api_information": {"user_id": "home-user"}})
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(home))

        cfg = load_config()

        assert cfg is not None
        assert cfg.api_information.user_id == "home-user"

    def test_dollar_var_resolution(self, tmp_path, monkeypatch):
        """${VAR} in YAML values resolve from environment."""
        monkeypatch.setenv("MY_USPS_PASSWORD", "secret-123")
        config_file = self._write(tmp_path, {
            "api_information": {"user_id": "u", "password": "${MY_USPS_PASSWORD}"},
        })

        cfg = load_config(config_path=str(config_file))

        assert cfg.api_information.password == "secret-123"

    def test_env_var_override(self, tmp_path, monkeypatch):
        """COMMERCE_USPS_ env vars override YAML values."""
        config_file = self._write(tmp_path, {"api_information": {"user_id": "yaml-user"}})
        monkeypatch.setenv("COMMERCE_USPS_API_INFORMATION_USER_ID", "env-user")
        monkeypatch.setenv("COMMERCE_USPS_API_INFORMATION_MODE", "live")

        cfg = load_config(config_path=str(config_file))

        assert cfg.api_information.user_id == "env-user"
        assert cfg.is_test_mode is False

    def test_env_log_flag_override(self, tmp_path, monkeypatch):
        """Nested log flags are overridable and merge with YAML checkboxes."""
        config_file = self._write(tmp_path, {"options": {"log": ["request"]}})
        monkeypatch.setenv("COMMERCE_USPS_OPTIONS_LOG_RESPONSE", "true")

        cfg = load_config(config_path=str(config_file))

        assert cfg.options.log.request is True
        assert cfg.options.log.response is True

    def test_env_conditions_override(self, tmp_path, monkeypatch):
        """Excluded services take a comma-separated list."""
        config_file = self._write(tmp_path, {})
        monkeypatch.setenv("COMMERCE_USPS_CONDITIONS_CONDITIONS", "6, 7,")

        cfg = load_config(config_path=str(config_file))

        assert cfg.excluded_services == frozenset({"6", "7"})
