"""Financial rollup engine - deterministic, Decimal only, no database access.

Labour cost is derived from monthly records: forecast cost is forecast days
multiplied by the resource's day rate, actual cost is recorded directly.
Non-personnel cost comes from cost items.
"""
import calendar
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from portfolio.config import get_settings
from portfolio.models import CostItem, Feature, FeatureStatus, MonthlyRecord, Project, Resource
from portfolio.schemas.summary import (
    FeatureStats,
    PeriodBreakdown,
    PeriodTrend,
    ProjectOverview,
    ProjectSummary,
    ResourcePeriodBreakdown,
    TrendPoint,
)

HUNDRED = Decimal(100)
ZERO = Decimal(0)

CURRENCY_SYMBOLS = {"£": "GBP", "$": "USD", "€": "EUR"}


def _dec(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class RollupEngine:
    """Forecast-versus-actual rollups for projects and the portfolio dashboard."""

    def __init__(self) -> None:
        self.settings = get_settings()

    @staticmethod
    def _round(value: Decimal, places: int = 2) -> Decimal:
        quantize = Decimal(10) ** -places
        return value.quantize(quantize, rounding=ROUND_HALF_UP)

    def pct_variance(self, actual: Decimal, reference: Decimal) -> Decimal:
        """Variance % = (actual / reference - 1) × 100, 0 when reference is 0. Never clamped."""
        if reference == 0:
            return self._round(ZERO)
        return self._round((actual / reference - 1) * HUNDRED)

    def budget_utilization(self, actual: Decimal, budget: Decimal) -> Decimal:
        """Share of budget spent, clamped to [0, 100] for progress display."""
        if budget <= 0:
            return self._round(ZERO)
        pct = actual / budget * HUNDRED
        return self._round(min(HUNDRED, max(ZERO, pct)))

    def currency_code(self, value: str | None) -> str:
        value = (value or "").strip()
        if len(value) == 3 and value.isalpha():
            return value.upper()
        return CURRENCY_SYMBOLS.get(value, self.settings.default_currency_code)

    def labour_trend(
        self,
        records: Iterable[MonthlyRecord],
        day_rates: dict[str, Decimal],
    ) -> list[PeriodTrend]:
        """Per-period labour forecast and actual cost, sorted by period.

        Records whose resource is unknown are costed at a day rate of 0.
        """
        forecast: dict[str, Decimal] = {}
        actual: dict[str, Decimal] = {}
        for rec in records:
            rate = _dec(day_rates.get(rec.resource_id))
            forecast[rec.period] = forecast.get(rec.period, ZERO) + _dec(rec.forecast_days) * rate
            actual[rec.period] = actual.get(rec.period, ZERO) + _dec(rec.actual_cost)
        trend = []
        for period in sorted(forecast):
            fc = self._round(forecast[period])
            ac = self._round(actual[period])
            trend.append(
                PeriodTrend(
                    period=period,
                    forecast_cost=fc,
                    actual_cost=ac,
                    diff_cost=self._round(ac - fc),
                    pct_diff=self.pct_variance(ac, fc),
                )
            )
        return trend

    def feature_stats(self, features: Iterable[Feature]) -> FeatureStats:
        features = list(features)
        counts = Counter(f.status for f in features)
        return FeatureStats(
            total_story_points=sum(f.story_points or 0 for f in features),
            completed_points=sum(f.completed_points or 0 for f in features),
            status_counts={s.value: counts.get(s.value, 0) for s in FeatureStatus},
        )

    def project_summary(
        self,
        project: Project,
        records: Iterable[MonthlyRecord],
        day_rates: dict[str, Decimal],
        cost_items: Iterable[CostItem],
        features: Iterable[Feature],
    ) -> ProjectSummary:
        trend = self.labour_trend(records, day_rates)
        labour_forecast = sum((t.forecast_cost for t in trend), ZERO)
        labour_actual = sum((t.actual_cost for t in trend), ZERO)
        non_personnel = self._round(sum((_dec(c.amount) for c in cost_items), ZERO))
        total_forecast = labour_forecast + non_personnel
        total_actual = labour_actual + non_personnel
        budget = _dec(project.budget)
        pct_used = self._round(total_actual / budget * HUNDRED) if budget > 0 else self._round(ZERO)
        return ProjectSummary(
            project_id=project.id,
            name=project.name,
            code=project.code,
            currency_code=self.currency_code(project.currency),
            budget=self._round(budget),
            labour_forecast=labour_forecast,
            labour_actual=labour_actual,
            non_personnel_cost=non_personnel,
            total_forecast=total_forecast,
            total_actual=total_actual,
            remaining_budget=self._round(budget - total_actual),
            pct_used=pct_used,
            budget_utilization=self.budget_utilization(total_actual, budget),
            forecast_variance_pct=self.pct_variance(total_actual, total_forecast),
            trend=trend,
            features=self.feature_stats(features),
        )

    def period_breakdown(
        self,
        project_id: str,
        period: str,
        records: Iterable[MonthlyRecord],
        resources: dict[str, Resource],
    ) -> PeriodBreakdown:
        """Forecast and actual days per resource for one month.

        Actual days are back-derived from actual cost and the day rate.
        Percentages are of calendar days in the month, capped at 100.
        """
        year, month = (int(part) for part in period.split("-"))
        days_in_month = calendar.monthrange(year, month)[1]
        rows = []
        for rec in records:
            if rec.period != period:
                continue
            resource = resources.get(rec.resource_id)
            rate = _dec(resource.day_rate) if resource else ZERO
            forecast_days = _dec(rec.forecast_days)
            actual_days = _dec(rec.actual_cost) / rate if rate > 0 else ZERO
            rows.append(
                ResourcePeriodBreakdown(
                    resource_id=rec.resource_id,
                    name=resource.name if resource else None,
                    role=resource.role if resource else None,
                    forecast_days=self._round(forecast_days),
                    actual_days=self._round(actual_days),
                    forecast_pct=self._days_pct(forecast_days, days_in_month),
                    actual_pct=self._days_pct(actual_days, days_in_month),
                )
            )
        return PeriodBreakdown(
            project_id=project_id,
            period=period,
            days_in_month=days_in_month,
            resources=rows,
        )

    def _days_pct(self, days: Decimal, days_in_month: int) -> Decimal:
        return self._round(min(HUNDRED, days / Decimal(days_in_month) * HUNDRED))

    def portfolio_overview(
        self,
        projects: Iterable[Project],
        records_by_project: dict[str, list[MonthlyRecord]],
        day_rates: dict[str, Decimal],
    ) -> list[ProjectOverview]:
        """One dashboard card per project, totals over every recorded period."""
        cards = []
        for project in projects:
            trend = self.labour_trend(records_by_project.get(project.id, []), day_rates)
            forecast_to_date = sum((t.forecast_cost for t in trend), ZERO)
            actual_to_date = sum((t.actual_cost for t in trend), ZERO)
            budget = _dec(project.budget)
            cards.append(
                ProjectOverview(
                    project_id=project.id,
                    name=project.name,
                    code=project.code,
                    currency_code=self.currency_code(project.currency),
                    budget=self._round(budget),
                    forecast_to_date=forecast_to_date,
                    actual_to_date=actual_to_date,
                    pct_budget_diff=self.pct_variance(actual_to_date, budget),
                    pct_forecast_diff=self.pct_variance(actual_to_date, forecast_to_date),
                    budget_utilization=self.budget_utilization(actual_to_date, budget),
                    trend=[TrendPoint(period=t.period, diff_cost=t.diff_cost) for t in trend],
                )
            )
        return cards
