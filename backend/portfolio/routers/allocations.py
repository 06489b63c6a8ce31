"""Allocation API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import Allocation, Project, Resource
from portfolio.schemas.allocation import AllocationCreate, AllocationResponse, AllocationUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/allocations", tags=["allocations"])


@router.get("", response_model=list[AllocationResponse])
async def list_allocations(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
    project_id: str | None = None,
    resource_id: str | None = None,
):
    query = scoped_query(Allocation, principal)
    if project_id:
        await require_owned(db, Project, project_id, principal)
        query = query.where(Allocation.project_id == project_id)
    if resource_id:
        await require_owned(db, Resource, resource_id, principal)
        query = query.where(Allocation.resource_id == resource_id)
    result = await db.execute(query.order_by(Allocation.from_date))
    return [AllocationResponse.model_validate(a) for a in result.scalars().all()]


@router.post("", response_model=AllocationResponse, status_code=status.HTTP_201_CREATED)
async def create_allocation(
    data: AllocationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    """Book a resource onto a project. Both must belong to the caller's company."""
    await require_owned(db, Project, data.project_id, principal)
    await require_owned(db, Resource, data.resource_id, principal)
    allocation = await save(db, Allocation(**data.model_dump()))
    await commit(db)
    logger.info(
        "Allocated resource %s to project %s (%s%%)",
        allocation.resource_id,
        allocation.project_id,
        allocation.allocation_pct,
    )
    return AllocationResponse.model_validate(allocation)


@router.get("/{allocation_id}", response_model=AllocationResponse)
async def get_allocation(
    allocation_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return AllocationResponse.model_validate(await get_owned(db, Allocation, allocation_id, principal))


@router.put("/{allocation_id}", response_model=AllocationResponse)
async def update_allocation(
    allocation_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    allocation = await get_owned(db, Allocation, allocation_id, principal)
    allocation = await apply_updates(db, allocation, parse_update(AllocationUpdate, payload))
    await commit(db)
    return AllocationResponse.model_validate(allocation)


@router.delete("/{allocation_id}", status_code=204)
async def delete_allocation(
    allocation_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    allocation = await get_owned(db, Allocation, allocation_id, principal)
    await remove(db, allocation)
    await commit(db)
    logger.info("Deleted allocation %s", allocation_id)
