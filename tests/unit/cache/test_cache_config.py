"""Tests for cache configuration loading and TTL parsing."""

import pytest

from infra_cost.cache.config import (
    DAY_MS,
    DEFAULT_TTL_MS,
    HOUR_MS,
    MINUTE_MS,
    CacheConfig,
    is_valid_ttl,
    load_cache_config,
    parse_ttl,
    validate_cache_settings,
)
from infra_cost.cache.errors import CacheConfigurationError


class TestParseTtl:
    """Test TTL string parsing."""

    @pytest.mark.parametrize(
        "ttl,expected",
        [
            ("30s", 30 * 1000),
            ("5m", 5 * MINUTE_MS),
            ("2h", 2 * HOUR_MS),
            ("1d", DAY_MS),
            (" 15m ", 15 * MINUTE_MS),
        ],
    )
    def test_valid_ttl(self, ttl, expected):
        assert parse_ttl(ttl) == expected

    @pytest.mark.parametrize("ttl", ["", "4", "h", "4x", "1.5h", "-2h", "2 h", None])
    def test_invalid_ttl_falls_back_to_four_hours(self, ttl):
        assert parse_ttl(ttl) == DEFAULT_TTL_MS == 4 * HOUR_MS

    def test_is_valid_ttl(self):
        assert is_valid_ttl("4h")
        assert not is_valid_ttl("four hours")


class TestCacheConfig:
    """Test CacheConfig defaults and validation."""

    def test_defaults(self):
        config = CacheConfig()

        assert config.type == "file"
        assert config.ttl == 4 * HOUR_MS
        assert config.max_entries == 1000
        assert config.prefix == "infra-cost"
        assert config.cache_dir.endswith("cache")
        assert config.redis_url is None
        assert config.enabled is True

    def test_type_is_normalized(self):
        assert CacheConfig(type="MEMORY").type == "memory"

    def test_unknown_type_is_accepted_with_warning(self, caplog):
        config = CacheConfig(type="sqlite")

        assert config.type == "sqlite"
        assert "Unknown cache type" in caplog.text

    @pytest.mark.parametrize(
        "overrides",
        [{"ttl": 0}, {"ttl": -5}, {"max_entries": 0}, {"prefix": ""}],
    )
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(CacheConfigurationError):
            CacheConfig(**overrides)

    def test_merged_with_ignores_none(self):
        config = CacheConfig(type="memory", ttl=HOUR_MS)

        merged = config.merged_with(type=None, ttl=2 * HOUR_MS)

        assert merged.type == "memory"
        assert merged.ttl == 2 * HOUR_MS
        assert config.ttl == HOUR_MS

    def test_from_dict_uses_file_names(self):
        config = CacheConfig.from_dict(
            {
                "enabled": False,
                "ttl": "30m",
                "type": "memory",
                "directory": "/tmp/infra-cost-cache",
                "max_entries": 50,
                "redis_url": "redis://localhost:6379",
            }
        )

        assert config.enabled is False
        assert config.ttl == 30 * MINUTE_MS
        assert config.type == "memory"
        assert config.cache_dir == "/tmp/infra-cost-cache"
        assert config.max_entries == 50
        assert config.redis_url == "redis://localhost:6379"

    def test_from_dict_replaces_invalid_values_with_defaults(self, caplog):
        config = CacheConfig.from_dict(
            {"type": 5, "max_entries": "abc", "ttl": "soon", "enabled": "maybe", "directory": ""}
        )

        assert config == CacheConfig()
        assert "Ignoring cache setting 'type'" in caplog.text
        assert "Ignoring cache setting 'max_entries'" in caplog.text
        assert "Ignoring cache setting 'ttl'" in caplog.text

    def test_from_dict_keeps_valid_values_next_to_invalid_ones(self):
        config = CacheConfig.from_dict({"type": "memory", "max_entries": -3, "ttl": "2h"})

        assert config.type == "memory"
        assert config.max_entries == 1000
        assert config.ttl == 2 * HOUR_MS

    def test_from_config_file_with_bad_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  type: 5\n  max_entries: abc\n", encoding="utf-8")

        assert CacheConfig.from_config_file(str(config_file)) == CacheConfig()

    @pytest.mark.parametrize(
        "overrides", [{"type": 5}, {"max_entries": "abc"}, {"max_entries": True}]
    )
    def test_wrong_types_raise_configuration_error(self, overrides):
        with pytest.raises(CacheConfigurationError):
            CacheConfig(**overrides)

    def test_from_dict_empty(self):
        assert CacheConfig.from_dict({}) == CacheConfig()

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("INFRA_COST_CACHE_ENABLED", "false")
        monkeypatch.setenv("INFRA_COST_CACHE_TTL", "2h")
        monkeypatch.setenv("INFRA_COST_CACHE_TYPE", "memory")
        monkeypatch.setenv("INFRA_COST_CACHE_DIR", "/tmp/env-cache")
        monkeypatch.setenv("INFRA_COST_CACHE_MAX_ENTRIES", "25")
        monkeypatch.setenv("INFRA_COST_CACHE_REDIS_URL", "redis://cache:6379")

        config = CacheConfig.from_environment()

        assert config.enabled is False
        assert config.ttl == 2 * HOUR_MS
        assert config.type == "memory"
        assert config.cache_dir == "/tmp/env-cache"
        assert config.max_entries == 25
        assert config.redis_url == "redis://cache:6379"

    def test_from_environment_ignores_invalid_numbers(self, monkeypatch):
        monkeypatch.setenv("INFRA_COST_CACHE_MAX_ENTRIES", "lots")

        assert CacheConfig.from_environment().max_entries == 1000

    def test_from_config_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  ttl: 1d\n  type: memory\n", encoding="utf-8")

        config = CacheConfig.from_config_file(str(config_file))

        assert config.ttl == DAY_MS
        assert config.type == "memory"


class TestLoadCacheConfig:
    """Test configuration precedence."""

    def test_environment_overrides_file_and_options_override_environment(
        self, tmp_path, monkeypatch
    ):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "cache:\n  ttl: 1d\n  type: memory\n  max_entries: 10\n", encoding="utf-8"
        )
        monkeypatch.setenv("INFRA_COST_CACHE_TTL", "1h")
        monkeypatch.setenv("INFRA_COST_CACHE_TYPE", "file")

        config = load_cache_config(str(config_file), type="memory")

        assert config.ttl == HOUR_MS
        assert config.type == "memory"
        assert config.max_entries == 10

    def test_defaults_without_file(self, tmp_path):
        config = load_cache_config(str(tmp_path / "missing.yaml"))

        assert config == CacheConfig()


class TestValidateCacheSettings:
    """Test validation of the config file cache section."""

    def test_valid_settings(self):
        assert validate_cache_settings({"ttl": "4h", "type": "file", "max_entries": 100}) == []

    def test_invalid_ttl(self):
        errors = validate_cache_settings({"ttl": "4 hours"})

        assert errors == ['Cache TTL must be in format like "4h", "30m", "1d"']

    def test_unknown_type(self):
        errors = validate_cache_settings({"type": "sqlite"})

        assert errors == ["Cache type must be one of: file, memory, redis"]

    def test_redis_requires_url(self):
        assert validate_cache_settings({"type": "redis"}) == [
            'Redis URL is required when cache type is "redis"'
        ]
        assert validate_cache_settings({"type": "redis", "redis_url": "redis://localhost"}) == []

    def test_invalid_max_entries(self):
        assert validate_cache_settings({"max_entries": 0}) == [
            "Cache max_entries must be a positive integer"
        ]

    def test_wrong_value_types(self):
        errors = validate_cache_settings(
            {"type": 5, "max_entries": "abc", "enabled": "yes", "directory": 3}
        )

        assert errors == [
            "Cache type must be one of: file, memory, redis",
            "Cache max_entries must be a positive integer",
            "Cache enabled must be true or false",
            "Cache directory must be a non-empty string",
        ]
