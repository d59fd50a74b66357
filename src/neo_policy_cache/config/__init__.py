"""Policy cache configuration."""

from .cache_config import CacheConfig, ConfigSource, create_cache_config
from .logging_config import (
    LogFormat,
    LogLevel,
    LogVerbosity,
    LoggingConfig,
    get_logger,
    setup_logging,
)

__all__ = [
    "CacheConfig",
    "ConfigSource",
    "create_cache_config",
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
]
