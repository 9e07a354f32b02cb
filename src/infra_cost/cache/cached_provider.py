"""Cached cloud provider wrapper.

This module provides a wrapper that presents the cloud provider adapter
interface while caching the result of every read operation with a
per-operation TTL. Cache faults degrade to a miss or a skipped write; errors
raised by the wrapped provider propagate unchanged.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from rich.console import Console

from ..providers.base import CloudProviderAdapter
from ..providers.types import (
    AccountInfo,
    BudgetAlert,
    BudgetInfo,
    CloudProvider,
    CostBreakdown,
    CostTrendAnalysis,
    FinOpsRecommendation,
    InventoryFilters,
    RawCostData,
    ResourceInventory,
)
from .config import DAY_MS, HOUR_MS, MINUTE_MS, CacheConfig, load_cache_config, parse_ttl
from .errors import GracefulDegradationMixin
from .formatting import format_cache_stats
from .key_builder import ACCOUNT_PLACEHOLDER, DEFAULT_PROVIDER, inventory_data_type, trend_data_type
from .manager import CostCacheManager, get_global_cache
from .models import CacheStats

logger = logging.getLogger(__name__)

console = Console(stderr=True)

ACCOUNT_INFO = "account-info"
RAW_COST_DATA = "raw-cost-data"
COST_BREAKDOWN = "cost-breakdown"
OPTIMIZATION_RECOMMENDATIONS = "optimization-recommendations"
BUDGETS = "budgets"
BUDGET_ALERTS = "budget-alerts"
FINOPS_RECOMMENDATIONS = "finops-recommendations"


class CachedProviderWrapper(CloudProviderAdapter, GracefulDegradationMixin):
    """
    Wraps a cloud provider adapter with transparent caching.

    Every cache key is scoped by the resolved account id, so the first
    cached operation resolves account info. Account info itself is cached
    under a profile-scoped placeholder key since the account id is unknown
    before it is fetched.

    Read and write caching are toggled independently: disabling reads
    forces fresh fetches, disabling writes keeps fresh results out of the
    cache. A cache configured with ``enabled: false`` starts with both off.
    """

    # TTL per operation in milliseconds, None selects the manager default
    ACCOUNT_INFO_TTL = DAY_MS
    INVENTORY_TTL = HOUR_MS
    RECOMMENDATIONS_TTL = 6 * HOUR_MS
    BUDGETS_TTL = 2 * HOUR_MS
    BUDGET_ALERTS_TTL = 30 * MINUTE_MS

    def __init__(
        self,
        provider: CloudProviderAdapter,
        profile: str,
        region: str,
        provider_name: Optional[Union[str, CloudProvider]] = None,
        use_cache: bool = True,
        write_cache: bool = True,
        cache_manager: Optional[CostCacheManager] = None,
        cache_config: Optional[CacheConfig] = None,
        verbose: bool = False,
    ):
        """
        Initialize the cached provider wrapper.

        Args:
            provider: Adapter to wrap
            profile: Credentials profile the adapter uses
            region: Region the adapter queries
            provider_name: Provider segment of cache keys, defaults to "aws"
            use_cache: Serve reads from the cache
            write_cache: Store fresh results in the cache
            cache_manager: Cache manager to use (defaults to the global one)
            cache_config: Configuration for the global cache manager
            verbose: Print cache diagnostics to stderr
        """
        super().__init__()
        self._provider = provider
        self._profile = profile
        self._region = region
        self._provider_name = getattr(provider_name, "value", provider_name) or DEFAULT_PROVIDER
        self._cache = cache_manager or get_global_cache(cache_config)
        if not self._cache.get_config().enabled:
            logger.debug("Caching disabled by configuration")
            use_cache = write_cache = False
        self._use_cache = use_cache
        self._write_cache = write_cache
        self._verbose = verbose
        self._account_id: Optional[str] = None

        logger.debug(
            f"Initialized CachedProviderWrapper for {self._provider_name} "
            f"(profile: {profile}, region: {region})"
        )

    @property
    def account_id(self) -> Optional[str]:
        """Account id resolved from account info, None until the first fetch."""
        return self._account_id

    # Cached operations

    async def get_account_info(self) -> AccountInfo:
        key = self._generate_key(ACCOUNT_PLACEHOLDER, ACCOUNT_INFO)

        cached = await self._read_cache(key, ACCOUNT_INFO)
        if isinstance(cached, dict) and cached.get("id"):
            self._account_id = cached["id"]
            return cached
        if cached is not None:
            logger.warning(f"Discarding malformed cached account info under {key}")
            await self.with_graceful_degradation(
                lambda: self._cache.invalidate(key), lambda: False, "invalidation"
            )

        self._log("Fetching account info from provider...")
        account_info = await self._provider.get_account_info()
        self._account_id = account_info["id"]

        await self._write_cache_entry(
            key, account_info, self._account_id, ACCOUNT_INFO, self.ACCOUNT_INFO_TTL
        )
        return account_info

    async def get_raw_cost_data(self) -> RawCostData:
        return await self._cached_call(RAW_COST_DATA, self._provider.get_raw_cost_data)

    async def get_cost_breakdown(self) -> CostBreakdown:
        return await self._cached_call(COST_BREAKDOWN, self._provider.get_cost_breakdown)

    async def get_resource_inventory(
        self, filters: Optional[InventoryFilters] = None
    ) -> ResourceInventory:
        return await self._cached_call(
            self._build_data_type(inventory_data_type, filters),
            lambda: self._provider.get_resource_inventory(filters),
            ttl=self.INVENTORY_TTL,
        )

    async def get_optimization_recommendations(self) -> List[str]:
        return await self._cached_call(
            OPTIMIZATION_RECOMMENDATIONS,
            self._provider.get_optimization_recommendations,
            ttl=self.RECOMMENDATIONS_TTL,
        )

    async def get_budgets(self) -> List[BudgetInfo]:
        return await self._cached_call(BUDGETS, self._provider.get_budgets, ttl=self.BUDGETS_TTL)

    async def get_budget_alerts(self) -> List[BudgetAlert]:
        return await self._cached_call(
            BUDGET_ALERTS, self._provider.get_budget_alerts, ttl=self.BUDGET_ALERTS_TTL
        )

    async def get_cost_trend_analysis(self, months: Optional[int] = None) -> CostTrendAnalysis:
        return await self._cached_call(
            trend_data_type(months),
            lambda: self._provider.get_cost_trend_analysis(months),
        )

    async def get_finops_recommendations(self) -> List[FinOpsRecommendation]:
        return await self._cached_call(
            FINOPS_RECOMMENDATIONS,
            self._provider.get_finops_recommendations,
            ttl=self.RECOMMENDATIONS_TTL,
        )

    # Pass-through operations

    async def validate_credentials(self) -> bool:
        return await self._provider.validate_credentials()

    async def get_resource_costs(self, resource_id: str) -> float:
        # Derived from inventory and cost data, which are cached on their own
        return await self._provider.get_resource_costs(resource_id)

    # Cache management

    async def refresh_cache(self) -> int:
        """
        Discard this account's cached data and fetch it again.

        Invalidates the placeholder account-info entry, re-resolves the
        account id, invalidates every entry of the account (and of the
        previously known account if the id changed), then pre-warms the
        cost breakdown.

        Returns:
            Number of invalidated entries
        """
        self._log("Refreshing cache...")
        previous_account_id = self._account_id
        invalidated = 0

        placeholder_key = self._generate_key(ACCOUNT_PLACEHOLDER, ACCOUNT_INFO)
        if placeholder_key is not None:
            removed = await self.with_graceful_degradation(
                lambda: self._cache.invalidate(placeholder_key),
                lambda: False,
                "invalidation",
            )
            invalidated += int(removed)

        self._account_id = None
        account_id = await self._ensure_account_id()

        stale_accounts = [account_id]
        if previous_account_id and previous_account_id != account_id:
            stale_accounts.append(previous_account_id)

        for stale_account in stale_accounts:
            invalidated += await self.with_graceful_degradation(
                lambda: self._cache.invalidate_account(stale_account),
                lambda: 0,
                "invalidation",
            )

        self._log(f"Invalidated {invalidated} cache entries, pre-warming cost breakdown...")
        await self.get_cost_breakdown()
        return invalidated

    async def get_cache_stats(self) -> str:
        """Get the shared cache statistics, formatted for display."""
        stats = await self.with_graceful_degradation(
            self._cache.get_stats, CacheStats, "stats"
        )
        return format_cache_stats(stats)

    async def clear_cache(self) -> None:
        """Clear the entire shared cache, not only this wrapper's account."""
        await self.with_graceful_degradation(self._cache.clear, lambda: None, "clear")
        self._log("Cache cleared")

    def set_cache_enabled(self, enabled: bool) -> None:
        self._use_cache = enabled

    def is_cache_enabled(self) -> bool:
        return self._use_cache

    def set_write_cache_enabled(self, enabled: bool) -> None:
        self._write_cache = enabled

    def is_write_cache_enabled(self) -> bool:
        return self._write_cache

    def get_provider(self) -> CloudProviderAdapter:
        """Get the wrapped adapter, for calls that should bypass the cache."""
        return self._provider

    # Internals

    async def _ensure_account_id(self) -> str:
        if self._account_id is None:
            await self.get_account_info()
        return self._account_id

    async def _cached_call(
        self,
        data_type: Optional[str],
        fetch: Callable[[], Awaitable[Any]],
        ttl: Optional[int] = None,
    ) -> Any:
        """
        Serve an account-scoped read from the cache, fetching on a miss.

        Args:
            data_type: Data-type tag of the operation, None to bypass the cache
            fetch: Zero-argument coroutine function calling the wrapped provider
            ttl: Operation TTL in milliseconds, None for the manager default

        Returns:
            Cached or freshly fetched result
        """
        if data_type is None:
            return await fetch()

        account_id = await self._ensure_account_id()
        key = self._generate_key(account_id, data_type)

        cached = await self._read_cache(key, data_type)
        if cached is not None:
            return cached

        self._log(f"Fetching {data_type} from provider...")
        result = await fetch()

        await self._write_cache_entry(key, result, account_id, data_type, ttl)
        return result

    def _build_data_type(self, build_tag: Callable[..., str], *args: Any) -> Optional[str]:
        try:
            return build_tag(*args)
        except Exception as e:
            logger.warning(f"Failed to build cache data type with {build_tag.__name__}: {e}")
            return None

    def _generate_key(self, account: str, data_type: str) -> Optional[str]:
        try:
            return self._cache.generate_key(
                account=account,
                profile=self._profile,
                region=self._region,
                data_type=data_type,
                provider=self._provider_name,
            )
        except Exception as e:
            logger.warning(f"Failed to generate cache key for {data_type}: {e}")
            return None

    async def _read_cache(self, key: Optional[str], data_type: str) -> Optional[Any]:
        if key is None or not self._use_cache:
            return None

        entry = await self.with_graceful_degradation(
            lambda: self._cache.get_entry(key), lambda: None, "read"
        )
        if entry is None:
            self._log(f"Cache miss for {data_type}")
            return None

        self._log(f"{data_type} retrieved from cache")
        return entry.data

    async def _write_cache_entry(
        self,
        key: Optional[str],
        data: Any,
        account: str,
        data_type: str,
        ttl: Optional[int] = None,
    ) -> None:
        if key is None or not self._write_cache:
            return

        metadata: Dict[str, Any] = {"data_type": data_type, "provider": self._provider_name}
        await self.with_graceful_degradation(
            lambda: self._cache.set(
                key,
                data,
                account=account,
                profile=self._profile,
                region=self._region,
                ttl=ttl,
                metadata=metadata,
            ),
            lambda: None,
            "write",
        )
        self._log(f"Cached {data_type}")

    def _log(self, message: str) -> None:
        logger.debug(message)
        if self._verbose:
            console.print(f"[Cache] {message}", style="dim", markup=False, highlight=False)


def wrap_with_cache(
    provider: CloudProviderAdapter,
    profile: str,
    region: str,
    use_cache: bool = True,
    write_cache: bool = True,
    cache_ttl: Optional[str] = None,
    cache_type: Optional[str] = None,
    cache_dir: Optional[str] = None,
    provider_name: Optional[Union[str, CloudProvider]] = None,
    cache_manager: Optional[CostCacheManager] = None,
    verbose: bool = False,
) -> CachedProviderWrapper:
    """
    Wrap an adapter with caching.

    Args:
        provider: Adapter to wrap
        profile: Credentials profile the adapter uses
        region: Region the adapter queries
        use_cache: Serve reads from the cache
        write_cache: Store fresh results in the cache
        cache_ttl: Default TTL string such as "30m" or "2h"
        cache_type: Backend type, "file" or "memory" (defaults to configuration)
        cache_dir: File backend directory override
        provider_name: Provider segment of cache keys
        cache_manager: Explicit cache manager, bypasses the global one
        verbose: Print cache diagnostics to stderr

    Returns:
        CachedProviderWrapper around ``provider``
    """
    if cache_manager is None:
        # Explicit arguments override the config file and INFRA_COST_CACHE_* variables
        config = load_cache_config(
            type=cache_type,
            ttl=parse_ttl(cache_ttl) if cache_ttl else None,
            cache_dir=cache_dir,
        )
        cache_manager = get_global_cache(config)

    return CachedProviderWrapper(
        provider,
        profile,
        region,
        provider_name=provider_name,
        use_cache=use_cache,
        write_cache=write_cache,
        cache_manager=cache_manager,
        verbose=verbose,
    )
