"""Feature (backlog item) API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import Feature, Project
from portfolio.schemas.feature import FeatureCreate, FeatureResponse, FeatureStatusName, FeatureUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/features", tags=["features"])


@router.get("", response_model=list[FeatureResponse])
async def list_features(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
    project_id: str | None = None,
    status: FeatureStatusName | None = None,
):
    query = scoped_query(Feature, principal)
    if project_id:
        await require_owned(db, Project, project_id, principal)
        query = query.where(Feature.project_id == project_id)
    if status:
        query = query.where(Feature.status == status)
    result = await db.execute(query.order_by(Feature.created_at))
    return [FeatureResponse.model_validate(f) for f in result.scalars().all()]


@router.post("", response_model=FeatureResponse, status_code=201)
async def create_feature(
    data: FeatureCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await require_owned(db, Project, data.project_id, principal)
    feature = await save(db, Feature(**data.model_dump()))
    await commit(db)
    logger.info("Created feature %s in project %s", feature.id, feature.project_id)
    return FeatureResponse.model_validate(feature)


@router.get("/{feature_id}", response_model=FeatureResponse)
async def get_feature(
    feature_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return FeatureResponse.model_validate(await get_owned(db, Feature, feature_id, principal))


@router.put("/{feature_id}", response_model=FeatureResponse)
async def update_feature(
    feature_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    feature = await get_owned(db, Feature, feature_id, principal)
    # sprint_ids are stored as sent; they are not checked against the feature's project.
    feature = await apply_updates(db, feature, parse_update(FeatureUpdate, payload))
    await commit(db)
    return FeatureResponse.model_validate(feature)


@router.delete("/{feature_id}", status_code=204)
async def delete_feature(
    feature_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    feature = await get_owned(db, Feature, feature_id, principal)
    await remove(db, feature)
    await commit(db)
    logger.info("Deleted feature %s", feature_id)
