"""Non-personnel cost API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import CostItem, Project
from portfolio.schemas.cost_item import CostItemCreate, CostItemResponse, CostItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cost-items", tags=["cost-items"])


@router.get("", response_model=list[CostItemResponse])
async def list_cost_items(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
    project_id: str | None = None,
):
    query = scoped_query(CostItem, principal)
    if project_id:
        await require_owned(db, Project, project_id, principal)
        query = query.where(CostItem.project_id == project_id)
    result = await db.execute(query.order_by(CostItem.created_at))
    return [CostItemResponse.model_validate(c) for c in result.scalars().all()]


@router.post("", response_model=CostItemResponse, status_code=status.HTTP_201_CREATED)
async def create_cost_item(
    data: CostItemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await require_owned(db, Project, data.project_id, principal)
    item = await save(db, CostItem(**data.model_dump()))
    await commit(db)
    logger.info("Recorded %s cost %s on project %s", item.type, item.amount, item.project_id)
    return CostItemResponse.model_validate(item)


@router.get("/{item_id}", response_model=CostItemResponse)
async def get_cost_item(
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return CostItemResponse.model_validate(await get_owned(db, CostItem, item_id, principal))


@router.put("/{item_id}", response_model=CostItemResponse)
async def update_cost_item(
    item_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    item = await get_owned(db, CostItem, item_id, principal)
    item = await apply_updates(db, item, parse_update(CostItemUpdate, payload))
    await commit(db)
    return CostItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=204)
async def delete_cost_item(
    item_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    item = await get_owned(db, CostItem, item_id, principal)
    await remove(db, item)
    await commit(db)
    logger.info("Deleted cost item %s", item_id)
