"""Seed a demo company, admin user, project and resource."""
import asyncio
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from portfolio.auth.jwt import get_password_hash
from portfolio.database import close_db, get_session_maker, init_db
from portfolio.logging_config import configure_logging
from portfolio.models import Company, MonthlyRecord, Project, Resource, User, UserRole

logger = logging.getLogger("portfolio.scripts.seed_demo")

DEMO_EMAIL = "admin@portfolio.local"
DEMO_PASSWORD = "admin123"


async def seed():
    configure_logging()
    await init_db()
    try:
        async with get_session_maker()() as db:
            r = await db.execute(select(User).where(User.email == DEMO_EMAIL))
            if r.scalar_one_or_none():
                logger.info("Demo data already present")
                return
            company = Company(name="Demo Company")
            db.add(company)
            await db.flush()
            user = User(
                company_id=company.id,
                name="Admin User",
                email=DEMO_EMAIL,
                password_hash=get_password_hash(DEMO_PASSWORD),
                role=UserRole.ADMIN.value,
            )
            db.add(user)
            await db.flush()
            project = Project(
                company_id=company.id,
                owner_id=user.id,
                name="Demo Project",
                code="DEMO",
                start_date=date(2025, 1, 1),
                end_date=date(2025, 12, 31),
                currency="GBP",
                sprint_length_days=14,
                budget=Decimal("250000"),
            )
            resource = Resource(
                company_id=company.id,
                name="Demo Developer",
                role="Developer",
                day_rate=Decimal("450"),
                skill_tags=["python", "sql"],
                contact="dev@portfolio.local",
            )
            db.add_all([project, resource])
            await db.flush()
            db.add(
                MonthlyRecord(
                    project_id=project.id,
                    resource_id=resource.id,
                    period="2025-06",
                    forecast_days=Decimal("18"),
                    actual_cost=Decimal("7650"),
                )
            )
            await db.commit()
        logger.info("Seeded demo company and admin user (%s / %s)", DEMO_EMAIL, DEMO_PASSWORD)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed())
