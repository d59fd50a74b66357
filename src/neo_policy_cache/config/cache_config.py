"""Cache configuration management.

ONLY cache configuration functionality - handles cache settings,
defaults, validation, and environment-based configuration.

Following maximum separation architecture - one file = one purpose.
"""

import json
import os
from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..infrastructure.policies.policy_factory import EvictionPolicyType


class ConfigSource(Enum):
    """Configuration source types."""
    ENVIRONMENT = "environment"
    FILE = "file"
    DEFAULTS = "defaults"
    OVERRIDE = "override"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


@dataclass
class CacheConfig:
    """Main cache configuration.

    Centralizes cache settings with environment variable support,
    file-based configuration, and validation.
    """

    # Core cache settings
    capacity: int = 10000
    eviction_policy: EvictionPolicyType = EvictionPolicyType.LRU

    # Whether overwriting an existing key at capacity evicts a victim
    overwrite_counts_as_insert: bool = False

    # Development settings
    log_cache_operations: bool = False

    # Configuration metadata
    config_source: ConfigSource = ConfigSource.DEFAULTS
    config_file_path: Optional[str] = None
    environment_prefix: str = "POLICY_CACHE"

    def __post_init__(self):
        """Post-initialization coercion and validation."""
        if isinstance(self.eviction_policy, str):
            self.eviction_policy = EvictionPolicyType(self.eviction_policy.lower())
        if isinstance(self.config_source, str):
            self.config_source = ConfigSource(self.config_source)
        self._validate_configuration()

    def _validate_configuration(self):
        """Validate configuration values."""
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ValueError("capacity must be an integer")

        if self.capacity <= 0:
            raise ValueError("capacity must be positive")

    @classmethod
    def from_environment(
        cls,
        prefix: str = "POLICY_CACHE",
        defaults: Optional['CacheConfig'] = None
    ) -> 'CacheConfig':
        """Create configuration from environment variables.

        Args:
            prefix: Environment variable prefix
            defaults: Default configuration to override

        Returns:
            Configuration instance
        """
        base_config = defaults or cls()

        # Map environment variables to config fields
        env_mapping = {
            f"{prefix}_CAPACITY": ("capacity", int),
            f"{prefix}_EVICTION_POLICY": ("eviction_policy", lambda x: EvictionPolicyType(x.lower())),
            f"{prefix}_OVERWRITE_COUNTS_AS_INSERT": ("overwrite_counts_as_insert", _parse_bool),
            f"{prefix}_LOG_CACHE_OPERATIONS": ("log_cache_operations", _parse_bool),
        }

        config_dict = {}

        for env_var, (field_name, converter) in env_mapping.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                try:
                    config_dict[field_name] = converter(env_value)
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid value for {env_var}: {env_value} - {e}")

        config_dict.update({
            "config_source": ConfigSource.ENVIRONMENT,
            "environment_prefix": prefix
        })

        return cls(**{**base_config.__dict__, **config_dict})

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        defaults: Optional['CacheConfig'] = None
    ) -> 'CacheConfig':
        """Create configuration from file (JSON or YAML).

        Args:
            file_path: Path to configuration file
            defaults: Default configuration to override

        Returns:
            Configuration instance
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r') as f:
            if file_path.suffix.lower() in ['.yaml', '.yml']:
                config_data = yaml.safe_load(f) or {}
            elif file_path.suffix.lower() == '.json':
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {file_path.suffix}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {file_path}")

        base_config = defaults or cls()
        config_data.update({
            "config_source": ConfigSource.FILE,
            "config_file_path": str(file_path)
        })

        return cls(**{**base_config.__dict__, **config_data})

    @classmethod
    def from_dict(
        cls,
        config_dict: Dict[str, Any],
        source: ConfigSource = ConfigSource.OVERRIDE
    ) -> 'CacheConfig':
        """Create configuration from dictionary.

        Unknown keys are rejected so typos surface early.
        """
        known_fields = set(cls.__dataclass_fields__)
        unknown = set(config_dict) - known_fields
        if unknown:
            raise ValueError(f"Unknown cache configuration keys: {', '.join(sorted(unknown))}")

        return cls(**{**config_dict, "config_source": source})

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        data = asdict(self)
        data["eviction_policy"] = self.eviction_policy.value
        data["config_source"] = self.config_source.value
        return data


def create_cache_config(
    source: str = "defaults",
    file_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    prefix: str = "POLICY_CACHE"
) -> CacheConfig:
    """Create cache configuration from the requested source.

    Args:
        source: "defaults", "environment" or "file"
        file_path: Configuration file, required when source is "file"
        overrides: Values applied on top of the loaded configuration
        prefix: Environment variable prefix

    Returns:
        Configured cache configuration
    """
    if source == "environment":
        config = CacheConfig.from_environment(prefix)
    elif source == "file":
        if file_path is None:
            raise ValueError("file_path is required when source is 'file'")
        config = CacheConfig.from_file(file_path)
    elif source == "defaults":
        config = CacheConfig()
    else:
        raise ValueError(f"Unknown configuration source: {source}")

    if overrides:
        merged = {**config.__dict__, **overrides}
        config = CacheConfig(**merged)

    return config
