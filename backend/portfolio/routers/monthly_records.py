"""Monthly forecast/actual record API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import MonthlyRecord, Project, Resource
from portfolio.schemas.common import PERIOD_PATTERN
from portfolio.schemas.monthly_record import (
    MonthlyRecordCreate,
    MonthlyRecordResponse,
    MonthlyRecordUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/monthly-records", tags=["monthly-records"])


async def _find(db: AsyncSession, project_id: str, resource_id: str, period: str) -> MonthlyRecord | None:
    result = await db.execute(
        select(MonthlyRecord).where(
            MonthlyRecord.project_id == project_id,
            MonthlyRecord.resource_id == resource_id,
            MonthlyRecord.period == period,
        )
    )
    return result.scalar_one_or_none()


async def _overwrite(db: AsyncSession, record: MonthlyRecord, data: MonthlyRecordCreate) -> MonthlyRecord:
    record.forecast_days = data.forecast_days
    record.actual_cost = data.actual_cost
    record = await save(db, record)
    await commit(db)
    logger.info("Overwrote monthly record %s (%s)", record.id, record.period)
    return record


@router.get("", response_model=list[MonthlyRecordResponse])
async def list_monthly_records(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
    project_id: str | None = None,
    resource_id: str | None = None,
    period: Annotated[str | None, Query(pattern=PERIOD_PATTERN)] = None,
):
    query = scoped_query(MonthlyRecord, principal)
    if project_id:
        await require_owned(db, Project, project_id, principal)
        query = query.where(MonthlyRecord.project_id == project_id)
    if resource_id:
        await require_owned(db, Resource, resource_id, principal)
        query = query.where(MonthlyRecord.resource_id == resource_id)
    if period:
        query = query.where(MonthlyRecord.period == period)
    result = await db.execute(query)
    return [MonthlyRecordResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=MonthlyRecordResponse, status_code=status.HTTP_201_CREATED)
async def upsert_monthly_record(
    data: MonthlyRecordCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    """Create the record for (project, resource, period), or overwrite the existing one.

    Answers 201 for a new record and 200 for an overwrite.
    """
    await require_owned(db, Project, data.project_id, principal)
    await require_owned(db, Resource, data.resource_id, principal)

    existing = await _find(db, data.project_id, data.resource_id, data.period)
    if existing:
        response.status_code = status.HTTP_200_OK
        return MonthlyRecordResponse.model_validate(await _overwrite(db, existing, data))

    record = MonthlyRecord(**data.model_dump())
    db.add(record)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent request inserted the same triple first.
        await db.rollback()
        existing = await _find(db, data.project_id, data.resource_id, data.period)
        if existing is None:
            raise
        response.status_code = status.HTTP_200_OK
        return MonthlyRecordResponse.model_validate(await _overwrite(db, existing, data))
    await db.refresh(record)
    await commit(db)
    logger.info("Created monthly record %s (%s)", record.id, record.period)
    return MonthlyRecordResponse.model_validate(record)


@router.get("/{record_id}", response_model=MonthlyRecordResponse)
async def get_monthly_record(
    record_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return MonthlyRecordResponse.model_validate(await get_owned(db, MonthlyRecord, record_id, principal))


@router.put("/{record_id}", response_model=MonthlyRecordResponse)
async def update_monthly_record(
    record_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    record = await get_owned(db, MonthlyRecord, record_id, principal)
    record = await apply_updates(db, record, parse_update(MonthlyRecordUpdate, payload))
    await commit(db)
    return MonthlyRecordResponse.model_validate(record)


@router.delete("/{record_id}", status_code=204)
async def delete_monthly_record(
    record_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    record = await get_owned(db, MonthlyRecord, record_id, principal)
    await remove(db, record)
    await commit(db)
    logger.info("Deleted monthly record %s", record_id)
