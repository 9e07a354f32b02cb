"""Payload shapes returned by cloud provider adapters.

Adapters return plain JSON-compatible values. The TypedDicts below document
the shapes consumers can rely on; the cache never inspects them.
"""

from enum import Enum
from typing import Dict, List, TypedDict


class CloudProvider(str, Enum):
    """Supported cloud providers, valued by their cache key segment."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"
    ALIBABA_CLOUD = "alicloud"
    ORACLE_CLOUD = "oracle"


class _AccountInfoBase(TypedDict):
    id: str
    provider: str


class AccountInfo(_AccountInfoBase, total=False):
    name: str


class CostTotals(TypedDict):
    last_month: float
    this_month: float
    last_7_days: float
    yesterday: float


class CostBreakdown(TypedDict):
    totals: CostTotals
    totals_by_service: Dict[str, Dict[str, float]]


# Service name -> ISO date -> cost
RawCostData = Dict[str, Dict[str, float]]


class InventoryFilters(TypedDict, total=False):
    provider: str
    regions: List[str]
    resource_types: List[str]
    tags: Dict[str, str]
    include_deleted: bool
    include_costs: bool


class ResourceInventory(TypedDict, total=False):
    provider: str
    region: str
    total_resources: int
    resources_by_type: Dict[str, int]
    total_cost: float
    resources: Dict[str, List[Dict[str, object]]]
    last_updated: str


class TimePeriod(TypedDict):
    start: str
    end: str


class BudgetInfo(TypedDict, total=False):
    budget_name: str
    budget_limit: float
    actual_spend: float
    forecasted_spend: float
    time_unit: str  # MONTHLY | QUARTERLY | ANNUALLY
    time_period: TimePeriod
    budget_type: str  # COST | USAGE
    status: str  # OK | ALARM | FORECASTED_ALARM
    thresholds: List[Dict[str, object]]


class BudgetAlert(TypedDict, total=False):
    budget_name: str
    alert_type: str  # THRESHOLD_EXCEEDED | FORECAST_EXCEEDED
    current_spend: float
    budget_limit: float
    threshold: float
    percentage_used: float
    time_remaining: str
    severity: str  # LOW | MEDIUM | HIGH | CRITICAL
    message: str


class CostTrendAnalysis(TypedDict, total=False):
    provider: str
    time_range: TimePeriod
    granularity: str  # DAILY | WEEKLY | MONTHLY
    trend_data: List[Dict[str, object]]
    total_cost: float
    average_daily_cost: float
    projected_monthly_cost: float
    avg_month_over_month_growth: float
    top_services: List[Dict[str, object]]
    cost_anomalies: List[Dict[str, object]]


class PotentialSavings(TypedDict):
    amount: float
    percentage: float
    timeframe: str  # MONTHLY | ANNUALLY


class FinOpsRecommendation(TypedDict, total=False):
    id: str
    type: str
    title: str
    description: str
    potential_savings: PotentialSavings
    effort: str
    priority: str
    resources: List[str]
    implementation_steps: List[str]
    tags: List[str]
