"""Shared pytest configuration for infra-cost tests."""

import os

import pytest

from infra_cost.cache.manager import reset_global_cache


@pytest.fixture(autouse=True)
def isolated_cache_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's cache configuration and global cache."""
    for name in list(os.environ):
        if name.startswith("INFRA_COST_CACHE_"):
            monkeypatch.delenv(name, raising=False)

    # The default config file location is resolved at import time
    monkeypatch.setattr(
        "infra_cost.utils.config.CONFIG_FILE_YAML", tmp_path / "no-config" / "config.yaml"
    )

    reset_global_cache()
    yield
    reset_global_cache()
