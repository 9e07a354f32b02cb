"""Test fixtures package for infra-cost.

- providers: mock cloud provider adapters and sample payloads
- cache: cache managers and entries backed by isolated storage

Usage:
    from tests.fixtures.providers import mock_provider, create_mock_provider
    from tests.fixtures.cache import memory_cache_manager, make_entry
"""
