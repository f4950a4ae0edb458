"""Configuration management for Finiquito Calc.

Configuration lives in settings.json, holding the economy-wide values the
user may override:
   - uma: current UMA value
   - minimum_wage: general daily minimum wage

Unset values fall back to the defaults in the statutory rule tables.

Config directory resolution:
1. FINIQUITO_CONFIG_PATH environment variable (if set)
2. ~/.config/finiquito/ (XDG_CONFIG_HOME fallback)

The calculation engine never reads this file; callers load an
EconomicConfig and pass its values in.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .schemas import EconomicConfig
from .taxes import TaxRules, load_tax_rules


APP_NAME = "finiquito"
SETTINGS_FILENAME = "settings.json"

ECONOMIC_KEYS = ("uma", "minimum_wage")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. FINIQUITO_CONFIG_PATH environment variable
    2. ~/.config/finiquito/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    # 1. Check environment variable
    env_path = os.environ.get("FINIQUITO_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    # 2. Fall back to XDG config path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def default_economic_config(rules: Optional[TaxRules] = None) -> EconomicConfig:
    """Economic values from the statutory tables."""
    rules = rules or load_tax_rules()
    return EconomicConfig(uma=rules.uma.current, minimum_wage=rules.minimum_wage)


def load_economic_config(rules: Optional[TaxRules] = None) -> EconomicConfig:
    """Load UMA and minimum wage, falling back to table defaults per key.

    Raises:
        pydantic.ValidationError: If a stored value is not a positive number
    """
    defaults = default_economic_config(rules)
    settings = load_settings()
    return EconomicConfig(
        uma=settings.get("uma", defaults.uma),
        minimum_wage=settings.get("minimum_wage", defaults.minimum_wage),
    )


def save_economic_config(config: EconomicConfig) -> Path:
    """Persist UMA and minimum wage to settings.json."""
    settings = load_settings()
    settings.update(config.model_dump(include=set(ECONOMIC_KEYS)))
    return save_settings(settings)
