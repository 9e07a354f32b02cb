"""Core utility modules for infra-cost."""

# Configuration utilities
from .config import CONFIG_DIR, CONFIG_FILE_YAML, DEFAULT_CACHE_CONFIG, Config

# Logging
from .logging_config import LoggingConfig, setup_logging

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE_YAML",
    "DEFAULT_CACHE_CONFIG",
    "Config",
    "LoggingConfig",
    "setup_logging",
]
