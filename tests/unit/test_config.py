"""Tests for settings.json handling and economic configuration."""

import json

import pytest
from pydantic import ValidationError

from finiquito.sdk import (
    EconomicConfig,
    clear_setting,
    get_config_dir,
    get_setting,
    get_settings_path,
    load_economic_config,
    load_settings,
    save_economic_config,
    set_setting,
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point FINIQUITO_CONFIG_PATH at an empty temp directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("FINIQUITO_CONFIG_PATH", str(path))
    return path


class TestConfigDir:

    def test_env_var_wins(self, config_dir):
        assert get_config_dir() == config_dir
        assert get_settings_path() == config_dir / "settings.json"

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FINIQUITO_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "finiquito"


class TestSettings:

    def test_missing_file_is_empty(self, config_dir):
        assert load_settings() == {}
        assert get_setting("uma") is None

    def test_set_and_clear(self, config_dir):
        set_setting("uma", 120.5)
        assert json.loads((config_dir / "settings.json").read_text()) == {"uma": 120.5}
        assert clear_setting("uma") is True
        assert clear_setting("uma") is False
        assert load_settings() == {}


class TestEconomicConfig:

    def test_defaults_from_tables(self, config_dir):
        config = load_economic_config()
        assert config.uma == 117.31
        assert config.minimum_wage == 315.04

    def test_partial_override(self, config_dir):
        set_setting("minimum_wage", 278.80)
        config = load_economic_config()
        assert config.uma == 117.31
        assert config.minimum_wage == 278.80

    def test_round_trip(self, config_dir):
        save_economic_config(EconomicConfig(uma=108.57, minimum_wage=248.93))
        assert load_economic_config() == EconomicConfig(uma=108.57, minimum_wage=248.93)

    def test_invalid_stored_value(self, config_dir):
        set_setting("uma", -1)
        with pytest.raises(ValidationError):
            load_economic_config()
