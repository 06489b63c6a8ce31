"""Project API routes."""
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal, get_principal
from portfolio.auth.tenancy import get_owned, scoped_query
from portfolio.crud import apply_updates, commit, parse_update, remove, save
from portfolio.database import get_db
from portfolio.exceptions import ValidationError
from portfolio.models import Allocation, CostItem, Feature, MonthlyRecord, Project, Sprint
from portfolio.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

# Removed together with their project.
PROJECT_CHILDREN = (Sprint, Feature, Allocation, CostItem, MonthlyRecord)


async def _ensure_code_free(db: AsyncSession, code: str, project_id: str | None = None) -> None:
    query = select(Project.id).where(Project.code == code)
    if project_id:
        query = query.where(Project.id != project_id)
    if (await db.execute(query)).first():
        raise ValidationError("Project code already exists")


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    result = await db.execute(scoped_query(Project, principal).order_by(Project.created_at))
    return [ProjectResponse.model_validate(p) for p in result.scalars().all()]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    await _ensure_code_free(db, data.code)
    project = await save(
        db,
        Project(
            **data.model_dump(),
            company_id=principal.company_id,
            owner_id=principal.user_id,
        ),
    )
    await commit(db)
    logger.info("Created project %s (%s) for company %s", project.id, project.code, principal.company_id)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    project = await get_owned(db, Project, project_id, principal)
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    project = await get_owned(db, Project, project_id, principal)
    data = parse_update(ProjectUpdate, payload)
    if data.code is not None and data.code != project.code:
        await _ensure_code_free(db, data.code, project.id)
    project = await apply_updates(db, project, data)
    await commit(db)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_principal)],
):
    project = await get_owned(db, Project, project_id, principal)
    for model in PROJECT_CHILDREN:
        await db.execute(delete(model).where(model.project_id == project_id))
    await remove(db, project)
    await commit(db)
    logger.info("Deleted project %s", project_id)
