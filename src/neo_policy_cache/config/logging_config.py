"""Centralized logging configuration for neo-policy-cache.

Provides consistent, configurable logging for the cache library with
environment-based control over verbosity and log levels.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional

from .cache_config import _parse_bool


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Log verbosity modes."""
    QUIET = "QUIET"      # Only errors and critical
    NORMAL = "NORMAL"    # Standard logging (warnings and above)
    VERBOSE = "VERBOSE"  # Info level logging
    DEBUG = "DEBUG"      # Full debug logging


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map verbosity mode to log level."""
    verbosity_map = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return verbosity_map[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Centralized logging configuration manager."""

    ROOT_LOGGER = "neo_policy_cache"

    # Per-operation loggers that stay quiet unless operation logging is on
    OPERATION_LOGGERS = [
        "neo_policy_cache.application.services.cache_manager",
    ]

    @classmethod
    def build_config(
        cls,
        environ: Optional[Dict[str, str]] = None,
        prefix: str = "POLICY_CACHE"
    ) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping from environment variables.

        ``LOG_LEVEL`` wins when set; otherwise ``LOG_VERBOSITY`` decides.
        ``{prefix}_LOG_CACHE_OPERATIONS`` is the same switch ``CacheConfig``
        reads, so enabling it also lets per-operation debug logs through.
        """
        environ = os.environ if environ is None else environ

        explicit_level = environ.get("LOG_LEVEL")
        if explicit_level and explicit_level.upper() in LogLevel.__members__:
            effective_log_level = explicit_level.upper()
        else:
            effective_log_level = get_log_level_from_verbosity(environ.get("LOG_VERBOSITY", "NORMAL"))

        try:
            log_format = LogFormat(environ.get("LOG_FORMAT", "simple").lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        log_operations = _parse_bool(environ.get(f"{prefix}_LOG_CACHE_OPERATIONS", "false"))

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": FORMAT_STRINGS[log_format],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                cls.ROOT_LOGGER: {
                    "level": effective_log_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        if not log_operations and effective_log_level == LogLevel.DEBUG.value:
            for module in cls.OPERATION_LOGGERS:
                logging_config["loggers"][module] = {
                    "level": LogLevel.INFO.value,
                    "handlers": ["console"],
                    "propagate": False,
                }

        return logging_config

    @classmethod
    def configure(
        cls,
        environ: Optional[Dict[str, str]] = None,
        prefix: str = "POLICY_CACHE"
    ) -> None:
        """Configure logging based on environment variables."""
        logging_config = cls.build_config(environ, prefix)
        logging.config.dictConfig(logging_config)

        logger = logging.getLogger(__name__)
        level = logging_config["loggers"][cls.ROOT_LOGGER]["level"]
        if level == LogLevel.DEBUG.value:
            logger.debug(f"Logging configured: level={level}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Silence all logging from a module."""
        cls.set_module_level(module_name, "CRITICAL")


def setup_logging() -> None:
    """Setup logging configuration from environment variables.

    Call once at application startup; the library itself never
    configures logging on import.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for the given module name."""
    return logging.getLogger(name)
