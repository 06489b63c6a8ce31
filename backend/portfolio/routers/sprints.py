"""Sprint API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, require_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.models import Project, Sprint
from portfolio.schemas.sprint import SprintCreate, SprintResponse, SprintUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sprints", tags=["sprints"])


@router.get("", response_model=list[SprintResponse])
async def list_sprints(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    """Sprints of one project, earliest first."""
    await require_owned(db, Project, project_id, principal)
    query = (
        scoped_query(Sprint, principal)
        .where(Sprint.project_id == project_id)
        .order_by(Sprint.start_date)
    )
    result = await db.execute(query)
    return [SprintResponse.model_validate(s) for s in result.scalars().all()]


@router.post("", response_model=SprintResponse, status_code=status.HTTP_201_CREATED)
async def create_sprint(
    data: SprintCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await require_owned(db, Project, data.project_id, principal)
    sprint = await save(db, Sprint(**data.model_dump()))
    await commit(db)
    logger.info("Created sprint %s in project %s", sprint.id, sprint.project_id)
    return SprintResponse.model_validate(sprint)


@router.get("/{sprint_id}", response_model=SprintResponse)
async def get_sprint(
    sprint_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    return SprintResponse.model_validate(await get_owned(db, Sprint, sprint_id, principal))


@router.put("/{sprint_id}", response_model=SprintResponse)
async def update_sprint(
    sprint_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    sprint = await get_owned(db, Sprint, sprint_id, principal)
    sprint = await apply_updates(db, sprint, parse_update(SprintUpdate, payload))
    await commit(db)
    return SprintResponse.model_validate(sprint)


@router.delete("/{sprint_id}", status_code=204)
async def delete_sprint(
    sprint_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    sprint = await get_owned(db, Sprint, sprint_id, principal)
    await remove(db, sprint)
    await commit(db)
    logger.info("Deleted sprint %s", sprint_id)
