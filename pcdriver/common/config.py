"""
Configuration Dataclasses

Type-safe configuration for the PC driver.
Settings come from a YAML file with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .logging_setup import get_service_logger

logger = get_service_logger("config")

DRIVER_CODE = "PC"
DRIVER_VERSION = "1.0.0"

CONFIG_ENV_VAR = "PCDRIVER_CONFIG"
ENABLE_REBOOT_ENV_VAR = "PCDRIVER_ENABLE_REBOOT"
LOG_LEVEL_ENV_VAR = "PCDRIVER_LOG_LEVEL"

DEFAULT_CONFIG_PATHS = (
    "/etc/pcdriver/config.yaml",
    "config.yaml",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class DriverSettings:
    """Driver identity and administrative switches"""
    product_key: str = DRIVER_CODE
    version: str = DRIVER_VERSION
    enable_reboot: bool = False  # Administrative only, never set by a caller
    log_level: str = field(default_factory=lambda: os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"))
    speech_rate: int = 0  # Backend-relative, 0 = platform default
    cpu_sample_seconds: float = 0.1


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _section(data: dict, key: str) -> dict:
    """Get a top-level section, which must be a mapping when present"""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{key}' must be a mapping, got {type(section).__name__}")
    return section


def load_driver_settings(data: dict) -> DriverSettings:
    """Load DriverSettings from dictionary (e.g., from YAML file)"""
    driver = _section(data, "driver")
    reboot = _section(data, "reboot")
    speech = _section(data, "speech")
    metrics = _section(data, "metrics")
    logging_data = _section(data, "logging")

    try:
        settings = DriverSettings(
            product_key=str(driver.get("product_key", DRIVER_CODE)),
            version=str(driver.get("version", DRIVER_VERSION)),
            enable_reboot=_as_bool(reboot.get("enabled", False)),
            log_level=str(logging_data.get("level", os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"))),
            speech_rate=int(speech.get("rate", 0)),
            cpu_sample_seconds=float(metrics.get("cpu_sample_seconds", 0.1)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid setting value: {e}") from e

    env_reboot = os.environ.get(ENABLE_REBOOT_ENV_VAR)
    if env_reboot is not None:
        settings.enable_reboot = _as_bool(env_reboot)

    return settings


def find_config_path() -> Path | None:
    """Find configuration file"""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    for path in DEFAULT_CONFIG_PATHS:
        path = Path(path)
        if path.exists():
            return path

    return None


def load_config(config_path: str | Path | None = None) -> DriverSettings:
    """
    Load driver settings from a YAML file.

    A missing file yields the defaults; a file that cannot be read or
    parsed, or whose sections are not mappings, raises ConfigError.

    Args:
        config_path: Explicit path, otherwise searched via find_config_path()

    Returns:
        Driver settings
    """
    path = Path(config_path) if config_path else find_config_path()
    if path is None:
        return load_driver_settings({})

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Config file not found: {path}")
        return load_driver_settings({})
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    return load_driver_settings(data)
