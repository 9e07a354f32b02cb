"""Configuration utilities for infra-cost."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from rich.console import Console

console = Console(stderr=True)

CONFIG_DIR = Path.home() / ".infra-cost"
CONFIG_FILE_YAML = CONFIG_DIR / "config.yaml"

# Default cache configuration, in the user-facing format of the config file
DEFAULT_CACHE_CONFIG = {
    "enabled": True,
    "ttl": "4h",
    "type": "file",
    "max_entries": 1000,
}


class Config:
    """Reads the infra-cost YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to config file. Defaults to ~/.infra-cost/config.yaml
        """
        self.config_file = Path(config_path).expanduser() if config_path else CONFIG_FILE_YAML
        self.config_data: Dict[str, Any] = {}
        self._config_loaded = False

    def _ensure_config_loaded(self):
        """Ensure configuration is loaded from file."""
        if not self._config_loaded:
            self._load_config()
            self._config_loaded = True

    def reload_config(self):
        """Force reload configuration from file."""
        self._config_loaded = False
        self._ensure_config_loaded()

    def _load_config(self):
        """Load the configuration from the YAML file, if there is one."""
        if not self.config_file.exists():
            self.config_data = {}
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            console.print(
                f"[red]Error: Configuration file {self.config_file} is not valid YAML: {e}[/red]"
            )
            loaded = {}
        except OSError as e:
            console.print(f"[red]Error reading configuration file {self.config_file}: {e}[/red]")
            loaded = {}

        if not isinstance(loaded, dict):
            console.print(
                f"[yellow]Warning: Ignoring configuration file {self.config_file}, "
                f"expected a mapping at the top level[/yellow]"
            )
            loaded = {}

        self.config_data = loaded
        self._expand_tilde_paths()

    def _expand_tilde_paths(self):
        """Expand tilde (~) paths in configuration sections to the home directory."""
        for section_data in self.config_data.values():
            if isinstance(section_data, dict):
                for key, value in section_data.items():
                    if isinstance(value, str) and value.startswith("~"):
                        section_data[key] = str(Path(value).expanduser())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation like "cache.ttl")
            default: Default value if key doesn't exist

        Returns:
            Configuration value
        """
        self._ensure_config_loaded()

        value: Any = self.config_data
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def get_all(self) -> Dict[str, Any]:
        """Get the full configuration mapping."""
        self._ensure_config_loaded()
        return self.config_data.copy()

    def get_cache_config(self) -> Dict[str, Any]:
        """
        Get the cache section merged over the defaults.

        Returns:
            Cache settings in the config file format
        """
        self._ensure_config_loaded()

        cache_config = DEFAULT_CACHE_CONFIG.copy()
        section = self.config_data.get("cache")
        if isinstance(section, dict):
            cache_config.update(section)
        return cache_config
