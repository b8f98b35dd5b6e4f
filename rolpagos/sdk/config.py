"""Configuration management for Rol de Pagos.

Machine settings live in settings.json:
   - data_dir: where periods, employees and payroll rows are stored
   - legal_rules: overrides merged over the bundled year file
     (e.g. {"aporte_personal_rate": "0.0945"})
   - dias_metodo: 'comercial' (30-day accounting month) or 'calendario'

Config directory resolution:
1. ROL_PAGOS_CONFIG_PATH environment variable (if set)
2. ~/.config/rol-pagos/ (XDG_CONFIG_HOME fallback)

Data directory resolution:
1. settings.json "data_dir" key
2. XDG_DATA_HOME/rol-pagos/ or ~/.local/share/rol-pagos/
"""

import json
import os
from pathlib import Path
from typing import Any

APP_NAME = "rol-pagos"
SETTINGS_FILENAME = "settings.json"


class SettingsError(Exception):
    """Raised when settings.json cannot be parsed."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. ROL_PAGOS_CONFIG_PATH environment variable
    2. ~/.config/rol-pagos/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("ROL_PAGOS_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

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
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "data_dir", "dias_metodo")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_data_path() -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" when set, otherwise
    XDG_DATA_HOME/rol-pagos/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
