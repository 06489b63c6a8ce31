"""Resource (people) API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import Absence, Allocation, MonthlyRecord, Resource
from portfolio.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])

RESOURCE_CHILDREN = (Allocation, MonthlyRecord, Absence)


@router.get("", response_model=list[ResourceResponse])
async def list_resources(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    result = await db.execute(scoped_query(Resource, principal).order_by(Resource.created_at))
    return [ResourceResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    data: ResourceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    resource = await save(db, Resource(**data.model_dump(), company_id=principal.company_id))
    await commit(db)
    logger.info("Created resource %s for company %s", resource.id, principal.company_id)
    return ResourceResponse.model_validate(resource)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    resource = await get_owned(db, Resource, resource_id, principal)
    return ResourceResponse.model_validate(resource)


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    resource = await get_owned(db, Resource, resource_id, principal)
    resource = await apply_updates(db, resource, parse_update(ResourceUpdate, payload))
    await commit(db)
    return ResourceResponse.model_validate(resource)


@router.delete("/{resource_id}", status_code=204)
async def delete_resource(
    resource_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    resource = await get_owned(db, Resource, resource_id, principal)
    for model in RESOURCE_CHILDREN:
        await db.execute(delete(model).where(model.resource_id == resource_id))
    await remove(db, resource)
    await commit(db)
    logger.info("Deleted resource %s", resource_id)
