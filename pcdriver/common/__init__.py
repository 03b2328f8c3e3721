"""
Common Utilities

Shared modules used across the driver:
- config.py - Driver settings and YAML loading
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
"""

from .config import (
    DRIVER_CODE,
    DRIVER_VERSION,
    DriverSettings,
    load_config,
    load_driver_settings,
)
from .exceptions import (
    DriverError,
    ConfigError,
    ServiceError,
    InvalidRequestError,
    ServiceNotImplementedError,
    UnsupportedError,
)
from .logging_setup import (
    setup_logging,
    get_service_logger,
    set_log_level,
    log_point_read,
    log_service_call,
)

__all__ = [
    # Config
    "DRIVER_CODE",
    "DRIVER_VERSION",
    "DriverSettings",
    "load_config",
    "load_driver_settings",
    # Exceptions
    "DriverError",
    "ConfigError",
    "ServiceError",
    "InvalidRequestError",
    "ServiceNotImplementedError",
    "UnsupportedError",
    # Logging
    "setup_logging",
    "get_service_logger",
    "set_log_level",
    "log_point_read",
    "log_service_call",
]
