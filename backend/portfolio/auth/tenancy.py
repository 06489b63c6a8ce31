"""Tenant scoping.

Every record resolves to exactly one company, either through its own
``company_id`` column or through the project/resource it hangs off. The
chain for each model lives in ``OWNER_CHAINS``; the helpers below are the
only place the "does this belong to the caller's company" rule is applied.

Checks run in a fixed order: existence first (404), then ownership (403).
The 403 reveals that a record exists in another tenant; set
``tenant_mask_forbidden`` to answer 404 in that case as well.
"""
import logging
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import Principal
from portfolio.config import get_settings
from portfolio.exceptions import AuthorizationError, NotFoundError
from portfolio.models import (
    Absence,
    Allocation,
    CostItem,
    Feature,
    MonthlyRecord,
    Project,
    Resource,
    Sprint,
    User,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OwnerChain:
    """How a model reaches its company: directly, or via ``foreign_key`` on ``parent``."""

    parent: type | None = None
    foreign_key: str | None = None


OWNER_CHAINS: dict[type, OwnerChain] = {
    Project: OwnerChain(),
    Resource: OwnerChain(),
    User: OwnerChain(),
    Sprint: OwnerChain(Project, "project_id"),
    Feature: OwnerChain(Project, "project_id"),
    CostItem: OwnerChain(Project, "project_id"),
    MonthlyRecord: OwnerChain(Project, "project_id"),
    # Allocations also reference a project; ownership follows the resource leg.
    Allocation: OwnerChain(Resource, "resource_id"),
    Absence: OwnerChain(Resource, "resource_id"),
}


async def owning_company_id(db: AsyncSession, record: Any) -> str | None:
    """Company id at the end of the record's chain, None if a parent is gone."""
    chain = OWNER_CHAINS[type(record)]
    if chain.parent is None:
        return record.company_id
    parent = await db.get(chain.parent, getattr(record, chain.foreign_key))
    if parent is None:
        return None
    return await owning_company_id(db, parent)


def _deny(label: str, record_id: str, principal: Principal) -> None:
    logger.warning(
        "Cross-tenant access to %s %s by %s user %s (company %s)",
        label,
        record_id,
        principal.role,
        principal.user_id,
        principal.company_id,
    )
    if get_settings().tenant_mask_forbidden:
        raise NotFoundError(f"{label} not found")
    raise AuthorizationError("Forbidden")


async def get_owned(db: AsyncSession, model: type[T], record_id: str, principal: Principal) -> T:
    """Load a record the caller's company owns, or raise 404/403."""
    label = model.__name__
    record = await db.get(model, record_id)
    if record is None:
        raise NotFoundError(f"{label} not found")
    company_id = await owning_company_id(db, record)
    if company_id is None:
        raise NotFoundError(f"{label} not found")
    if company_id != principal.company_id:
        _deny(label, record_id, principal)
    return record


# References named in request bodies and query filters go through the same check.
require_owned = get_owned


def owned_ids(model: type, company_id: str) -> Select:
    """Sub-select of ids of the company's own rows of a directly owned model."""
    return select(model.id).where(model.company_id == company_id)


def scoped_query(model: type[T], principal: Principal) -> Select:
    """Select of ``model`` restricted to the caller's company."""
    chain = OWNER_CHAINS[model]
    if chain.parent is None:
        return select(model).where(model.company_id == principal.company_id)
    foreign_key = getattr(model, chain.foreign_key)
    return select(model).where(foreign_key.in_(owned_ids(chain.parent, principal.company_id)))
