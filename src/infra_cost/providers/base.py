"""Cloud provider adapter interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .types import (
    AccountInfo,
    BudgetAlert,
    BudgetInfo,
    CostBreakdown,
    CostTrendAnalysis,
    FinOpsRecommendation,
    InventoryFilters,
    RawCostData,
    ResourceInventory,
)


class CloudProviderAdapter(ABC):
    """
    Asynchronous operations every cloud provider adapter implements.

    Implementations wrap a vendor's billing and inventory APIs. Return values
    must be JSON-compatible so they can be cached.
    """

    @abstractmethod
    async def get_account_info(self) -> AccountInfo:
        """Identify the account the adapter's credentials belong to."""

    @abstractmethod
    async def get_raw_cost_data(self) -> RawCostData:
        """Daily cost per service."""

    @abstractmethod
    async def get_cost_breakdown(self) -> CostBreakdown:
        """Cost totals for standard reporting windows, overall and per service."""

    @abstractmethod
    async def validate_credentials(self) -> bool:
        pass

    @abstractmethod
    async def get_resource_inventory(
        self, filters: Optional[InventoryFilters] = None
    ) -> ResourceInventory:
        pass

    @abstractmethod
    async def get_resource_costs(self, resource_id: str) -> float:
        pass

    @abstractmethod
    async def get_optimization_recommendations(self) -> List[str]:
        pass

    @abstractmethod
    async def get_budgets(self) -> List[BudgetInfo]:
        pass

    @abstractmethod
    async def get_budget_alerts(self) -> List[BudgetAlert]:
        pass

    @abstractmethod
    async def get_cost_trend_analysis(self, months: Optional[int] = None) -> CostTrendAnalysis:
        """
        Analyze cost trends.

        Args:
            months: Number of months to analyze, adapter default when None
        """

    @abstractmethod
    async def get_finops_recommendations(self) -> List[FinOpsRecommendation]:
        pass
