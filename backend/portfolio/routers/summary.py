"""Financial summary API routes."""
from collections import defaultdict
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, scoped_query
from portfolio.database import get_db
from portfolio.engine.rollup import RollupEngine
from portfolio.models import CostItem, Feature, MonthlyRecord, Project, Resource
from portfolio.schemas.common import PERIOD_PATTERN
from portfolio.schemas.summary import PeriodBreakdown, ProjectOverview, ProjectSummary

router = APIRouter(tags=["summary"])


async def _company_resources(db: AsyncSession, principal: Principal) -> dict[str, Resource]:
    result = await db.execute(scoped_query(Resource, principal))
    return {r.id: r for r in result.scalars().all()}


def _day_rates(resources: dict[str, Resource]) -> dict[str, Decimal]:
    return {rid: r.day_rate for rid, r in resources.items()}


async def _project_rows(db: AsyncSession, model, project_id: str) -> list:
    result = await db.execute(select(model).where(model.project_id == project_id))
    return list(result.scalars().all())


@router.get("/projects/{project_id}/summary", response_model=ProjectSummary)
async def project_summary(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    project = await get_owned(db, Project, project_id, principal)
    resources = await _company_resources(db, principal)
    return RollupEngine().project_summary(
        project,
        await _project_rows(db, MonthlyRecord, project_id),
        _day_rates(resources),
        await _project_rows(db, CostItem, project_id),
        await _project_rows(db, Feature, project_id),
    )


@router.get("/projects/{project_id}/summary/{period}", response_model=PeriodBreakdown)
async def period_breakdown(
    project_id: str,
    period: Annotated[str, Path(pattern=PERIOD_PATTERN)],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    project = await get_owned(db, Project, project_id, principal)
    result = await db.execute(
        select(MonthlyRecord).where(
            MonthlyRecord.project_id == project.id,
            MonthlyRecord.period == period,
        )
    )
    resources = await _company_resources(db, principal)
    return RollupEngine().period_breakdown(project.id, period, result.scalars().all(), resources)


@router.get("/dashboard", response_model=list[ProjectOverview])
async def dashboard(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    """Budget and forecast position of every project in the caller's company."""
    projects = (await db.execute(scoped_query(Project, principal).order_by(Project.created_at))).scalars().all()
    records = (await db.execute(scoped_query(MonthlyRecord, principal))).scalars().all()
    records_by_project: dict[str, list[MonthlyRecord]] = defaultdict(list)
    for rec in records:
        records_by_project[rec.project_id].append(rec)
    resources = await _company_resources(db, principal)
    return RollupEngine().portfolio_overview(projects, records_by_project, _day_rates(resources))
