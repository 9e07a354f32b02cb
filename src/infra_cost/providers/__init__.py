"""Cloud provider adapter interface and payload types."""

from .base import CloudProviderAdapter
from .types import CloudProvider

__all__ = ["CloudProviderAdapter", "CloudProvider"]
