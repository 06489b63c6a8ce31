"""Financial rollup schemas."""
from decimal import Decimal

from pydantic import BaseModel


class PeriodTrend(BaseModel):
    period: str
    forecast_cost: Decimal
    actual_cost: Decimal
    diff_cost: Decimal
    pct_diff: Decimal


class FeatureStats(BaseModel):
    total_story_points: int
    completed_points: int
    status_counts: dict[str, int]


class ProjectSummary(BaseModel):
    project_id: str
    name: str
    code: str
    currency_code: str
    budget: Decimal
    labour_forecast: Decimal
    labour_actual: Decimal
    non_personnel_cost: Decimal
    total_forecast: Decimal
    total_actual: Decimal
    remaining_budget: Decimal
    pct_used: Decimal
    budget_utilization: Decimal
    forecast_variance_pct: Decimal
    trend: list[PeriodTrend]
    features: FeatureStats


class ResourcePeriodBreakdown(BaseModel):
    resource_id: str
    name: str | None
    role: str | None
    forecast_days: Decimal
    actual_days: Decimal
    forecast_pct: Decimal
    actual_pct: Decimal


class PeriodBreakdown(BaseModel):
    project_id: str
    period: str
    days_in_month: int
    resources: list[ResourcePeriodBreakdown]


class TrendPoint(BaseModel):
    period: str
    diff_cost: Decimal


class ProjectOverview(BaseModel):
    """One card on the portfolio dashboard."""

    project_id: str
    name: str
    code: str
    currency_code: str
    budget: Decimal
    forecast_to_date: Decimal
    actual_to_date: Decimal
    pct_budget_diff: Decimal
    pct_forecast_diff: Decimal
    budget_utilization: Decimal
    trend: list[TrendPoint]
