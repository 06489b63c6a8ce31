"""Persistence helpers shared by the entity routers."""
import logging
from typing import Any, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.exceptions import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S", bound=BaseModel)


def parse_update(schema: type[S], payload: dict[str, Any]) -> S:
    """Validate a PUT body once the target record has been resolved.

    Update routes take the raw body so that existence and ownership are
    checked before field validation.
    """
    try:
        return schema.model_validate(payload)
    except SchemaError as e:
        raise ValidationError(jsonable_encoder(e.errors(include_url=False))) from e


async def save(db: AsyncSession, record: T) -> T:
    """Add, flush and refresh a record; constraint violations become 400."""
    db.add(record)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Rejected write of %s: %s", type(record).__name__, e.orig)
        raise ValidationError(f"Could not save {type(record).__name__}: {e.orig}") from e
    await db.refresh(record)
    return record


async def apply_updates(db: AsyncSession, record: T, data: BaseModel) -> T:
    """Replace only the fields present in the request body."""
    updates = data.model_dump(exclude_unset=True)
    for k, v in updates.items():
        setattr(record, k, v)
    return await save(db, record)


async def remove(db: AsyncSession, record) -> None:
    await db.delete(record)
    await db.flush()


async def commit(db: AsyncSession) -> None:
    """Commit before the response is built so a failed write never answers 2xx."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Commit rejected: %s", e.orig)
        raise ValidationError(f"Could not save: {e.orig}") from e
