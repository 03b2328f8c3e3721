"""
Structured Logging Setup

Consistent logging configuration across the driver components.
Uses JSON format for structured logs by default.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "service",
    "message", "taskName",
))


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", "unknown"),
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds service name to all logs"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs.setdefault("extra", {})
        kwargs["extra"]["service"] = self.extra.get("service", "unknown")
        return msg, kwargs


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    json_format: bool = True,
) -> logging.Logger:
    """
    Set up structured logging for a driver component.

    Args:
        service_name: Name of the component (e.g., "driver", "system.reboot")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (True for production, False for dev)

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(f"pcdriver.{service_name}")
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    # stderr keeps stdout free for CLI JSON output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_service_logger(service_name: str) -> ServiceLoggerAdapter:
    """
    Get a logger adapter with service context.

    Args:
        service_name: Name of the component

    Returns:
        Logger adapter with service name in all logs
    """
    log_level = os.environ.get("PCDRIVER_LOG_LEVEL", "INFO")
    json_format = os.environ.get("PCDRIVER_LOG_FORMAT", "json").lower() == "json"

    logger = setup_logging(service_name, log_level, json_format)
    return ServiceLoggerAdapter(logger, {"service": service_name})


def set_log_level(log_level: str) -> None:
    """Apply a log level to every pcdriver logger already created"""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("pcdriver.") and isinstance(logger, logging.Logger):
            logger.setLevel(numeric_level)
            for handler in logger.handlers:
                handler.setLevel(numeric_level)


def log_point_read(
    logger: logging.Logger,
    requested: int,
    returned: dict[str, Any],
) -> None:
    """Log a point read"""
    logger.debug(
        f"Read {len(returned)}/{requested} points",
        extra={"points": sorted(returned)},
    )


def log_service_call(
    logger: logging.Logger,
    service_name: str,
    result: str | None = None,
    error: Exception | None = None,
    request_id: int | None = None,
) -> None:
    """Log a control service invocation"""
    if error is None:
        logger.info(
            f"Service {service_name} -> {result}",
            extra={"service_name": service_name, "result": result, "request_id": request_id},
        )
    else:
        logger.warning(
            f"Service {service_name} failed: {error}",
            extra={"service_name": service_name, "error": str(error), "request_id": request_id},
        )
