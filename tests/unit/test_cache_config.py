"""Tests for cache configuration loading."""

import json

import pytest

from neo_policy_cache import (
    CacheConfig,
    ConfigSource,
    EvictionPolicyType,
    create_cache_config,
)


class TestCacheConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Test default configuration values."""
        config = CacheConfig()

        assert config.capacity == 10000
        assert config.eviction_policy == EvictionPolicyType.LRU
        assert config.overwrite_counts_as_insert is False
        assert config.config_source == ConfigSource.DEFAULTS

    def test_string_policy_is_coerced(self):
        """Test policy names are normalised to the enum."""
        assert CacheConfig(eviction_policy="FIFO").eviction_policy == EvictionPolicyType.FIFO

    @pytest.mark.parametrize("capacity", [0, -5, True])
    def test_invalid_capacity(self, capacity):
        """Test capacity must be a positive integer."""
        with pytest.raises(ValueError):
            CacheConfig(capacity=capacity)

    def test_to_dict(self):
        """Test enums are flattened for serialization."""
        data = CacheConfig(capacity=3, eviction_policy="lfu").to_dict()

        assert data["capacity"] == 3
        assert data["eviction_policy"] == "lfu"
        assert data["config_source"] == "defaults"


class TestConfigSources:
    """Test environment, file and dict sources."""

    def test_from_environment(self, monkeypatch):
        """Test prefixed environment variables override defaults."""
        monkeypatch.setenv("POLICY_CACHE_CAPACITY", "50")
        monkeypatch.setenv("POLICY_CACHE_EVICTION_POLICY", "FIFO")
        monkeypatch.setenv("POLICY_CACHE_OVERWRITE_COUNTS_AS_INSERT", "yes")

        config = CacheConfig.from_environment()

        assert config.capacity == 50
        assert config.eviction_policy == EvictionPolicyType.FIFO
        assert config.overwrite_counts_as_insert is True
        assert config.config_source == ConfigSource.ENVIRONMENT

    def test_from_environment_custom_prefix(self, monkeypatch):
        """Test a custom prefix isolates configuration."""
        monkeypatch.setenv("PLANS_CACHE_CAPACITY", "7")

        config = CacheConfig.from_environment(prefix="PLANS_CACHE")

        assert config.capacity == 7
        assert config.environment_prefix == "PLANS_CACHE"

    def test_from_environment_invalid_value(self, monkeypatch):
        """Test malformed environment values name the variable."""
        monkeypatch.setenv("POLICY_CACHE_CAPACITY", "lots")

        with pytest.raises(ValueError, match="POLICY_CACHE_CAPACITY"):
            CacheConfig.from_environment()

    def test_from_yaml_file(self, tmp_path):
        """Test YAML configuration files."""
        path = tmp_path / "cache.yaml"
        path.write_text("capacity: 5\neviction_policy: lfu\n")

        config = CacheConfig.from_file(path)

        assert config.capacity == 5
        assert config.eviction_policy == EvictionPolicyType.LFU
        assert config.config_source == ConfigSource.FILE
        assert config.config_file_path == str(path)

    def test_from_json_file(self, tmp_path):
        """Test JSON configuration files."""
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"capacity": 9, "log_cache_operations": True}))

        config = CacheConfig.from_file(path)

        assert config.capacity == 9
        assert config.log_cache_operations is True

    def test_from_file_errors(self, tmp_path):
        """Test missing, unsupported and non-mapping files."""
        with pytest.raises(FileNotFoundError):
            CacheConfig.from_file(tmp_path / "missing.yaml")

        toml = tmp_path / "cache.toml"
        toml.write_text("capacity = 1")
        with pytest.raises(ValueError, match="Unsupported"):
            CacheConfig.from_file(toml)

        listing = tmp_path / "cache.yml"
        listing.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            CacheConfig.from_file(listing)

    def test_from_dict_rejects_unknown_keys(self):
        """Test typos in configuration keys surface early."""
        with pytest.raises(ValueError, match="capacty"):
            CacheConfig.from_dict({"capacty": 10})

    def test_create_cache_config_with_overrides(self, monkeypatch):
        """Test overrides apply on top of the chosen source."""
        monkeypatch.setenv("POLICY_CACHE_CAPACITY", "40")

        config = create_cache_config("environment", overrides={"eviction_policy": "fifo"})

        assert config.capacity == 40
        assert config.eviction_policy == EvictionPolicyType.FIFO

    def test_create_cache_config_unknown_source(self):
        """Test unknown sources are rejected."""
        with pytest.raises(ValueError):
            create_cache_config("consul")
        with pytest.raises(ValueError, match="file_path"):
            create_cache_config("file")
