"""Absence API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import Absence, Resource
from portfolio.schemas.resource import AbsenceCreate, AbsenceResponse, AbsenceUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/absences", tags=["absences"])


@router.get("", response_model=list[AbsenceResponse])
async def list_absences(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
    resource_id: str | None = None,
):
    query = scoped_query(Absence, principal)
    if resource_id:
        await require_owned(db, Resource, resource_id, principal)
        query = query.where(Absence.resource_id == resource_id)
    result = await db.execute(query.order_by(Absence.from_date))
    return [AbsenceResponse.model_validate(a) for a in result.scalars().all()]


@router.post("", response_model=AbsenceResponse, status_code=status.HTTP_201_CREATED)
async def create_absence(
    data: AbsenceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await require_owned(db, Resource, data.resource_id, principal)
    absence = await save(db, Absence(**data.model_dump()))
    await commit(db)
    logger.info("Recorded %s absence %s for resource %s", absence.type, absence.id, absence.resource_id)
    return AbsenceResponse.model_validate(absence)


@router.get("/{absence_id}", response_model=AbsenceResponse)
async def get_absence(
    absence_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return AbsenceResponse.model_validate(await get_owned(db, Absence, absence_id, principal))


@router.put("/{absence_id}", response_model=AbsenceResponse)
async def update_absence(
    absence_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    absence = await get_owned(db, Absence, absence_id, principal)
    absence = await apply_updates(db, absence, parse_update(AbsenceUpdate, payload))
    await commit(db)
    return AbsenceResponse.model_validate(absence)


@router.delete("/{absence_id}", status_code=204)
async def delete_absence(
    absence_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    absence = await get_owned(db, Absence, absence_id, principal)
    await remove(db, absence)
    await commit(db)
    logger.info("Deleted absence %s", absence_id)
