"""Configuration file management for costmgr."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_RATES_URL = "http://localhost:3000/rates"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "costmgr" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    default_config: dict[str, Any] = {
        "rates": {},
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def _load_or_empty(config_path: Path | None) -> dict[str, Any]:
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return {}


def get_rates_url(config_path: Path | None = None) -> str:
    """Get the exchange rates URL preference.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        The stored URL, or DEFAULT_RATES_URL if unset or empty.
    """
    rates = _load_or_empty(config_path).get("rates", {})
    url = rates.get("url") if isinstance(rates, dict) else None
    if not isinstance(url, str) or not url.strip():
        return DEFAULT_RATES_URL
    return url.strip()


def set_rates_url(url: str, config_path: Path | None = None) -> None:
    """Store the exchange rates URL preference.

    An empty value clears the preference.

    Args:
        url: Rates endpoint URL.
        config_path: Path to config file. If None, uses default location.
    """
    url = url.strip()
    if not url:
        clear_rates_url(config_path)
        return

    config = _load_or_empty(config_path)
    config.setdefault("rates", {})["url"] = url
    save_config(config, config_path)


def clear_rates_url(config_path: Path | None = None) -> None:
    """Remove the exchange rates URL preference, restoring the default.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    config = _load_or_empty(config_path)
    rates = config.get("rates")
    if isinstance(rates, dict):
        rates.pop("url", None)
    else:
        config["rates"] = {}
    save_config(config, config_path)
