"""Tests for the YAML configuration file reader."""

from pathlib import Path
from unittest.mock import patch

from infra_cost.utils.config import DEFAULT_CACHE_CONFIG, Config


class TestConfig:
    """Test Config loading and lookups."""

    def test_missing_file_yields_empty_config(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert config.get_all() == {}
        assert config.get("cache.ttl", "4h") == "4h"

    def test_default_path_is_used(self):
        # The default location is redirected to a missing file for every test
        assert Config().get_all() == {}

    def test_dot_notation_lookup(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  ttl: 2h\n  type: memory\n", encoding="utf-8")

        config = Config(str(config_file))

        assert config.get("cache.ttl") == "2h"
        assert config.get("cache") == {"ttl": "2h", "type": "memory"}
        assert config.get("cache.ttl.hours") is None
        assert config.get("providers.aws", "default") == "default"

    def test_invalid_yaml_is_reported_and_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache: [unclosed\n", encoding="utf-8")

        config = Config(str(config_file))

        with patch("infra_cost.utils.config.console") as mock_console:
            assert config.get_all() == {}

        assert "not valid YAML" in mock_console.print.call_args.args[0]

    def test_non_mapping_top_level_is_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- cache\n- ttl\n", encoding="utf-8")

        config = Config(str(config_file))

        with patch("infra_cost.utils.config.console") as mock_console:
            assert config.get_all() == {}

        assert "expected a mapping" in mock_console.print.call_args.args[0]

    def test_tilde_paths_are_expanded(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  directory: ~/cost-cache\n", encoding="utf-8")

        config = Config(str(config_file))

        assert config.get("cache.directory") == str(Path.home() / "cost-cache")

    def test_reload_picks_up_changes(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  ttl: 2h\n", encoding="utf-8")
        config = Config(str(config_file))
        assert config.get("cache.ttl") == "2h"

        config_file.write_text("cache:\n  ttl: 30m\n", encoding="utf-8")
        assert config.get("cache.ttl") == "2h"

        config.reload_config()
        assert config.get("cache.ttl") == "30m"


class TestGetCacheConfig:
    """Test the merged cache section."""

    def test_defaults_without_section(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert config.get_cache_config() == DEFAULT_CACHE_CONFIG

    def test_section_overrides_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  ttl: 1d\n  redis_url: redis://localhost\n", encoding="utf-8")

        cache_config = Config(str(config_file)).get_cache_config()

        assert cache_config["ttl"] == "1d"
        assert cache_config["type"] == "file"
        assert cache_config["max_entries"] == 1000
        assert cache_config["redis_url"] == "redis://localhost"

    def test_defaults_are_not_mutated(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache:\n  ttl: 1d\n", encoding="utf-8")

        Config(str(config_file)).get_cache_config()

        assert DEFAULT_CACHE_CONFIG["ttl"] == "4h"

    def test_non_mapping_section_is_ignored(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("cache: enabled\n", encoding="utf-8")

        assert Config(str(config_file)).get_cache_config() == DEFAULT_CACHE_CONFIG
