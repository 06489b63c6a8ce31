"""SQLAlchemy models."""
from portfolio.models.allocation import Allocation
from portfolio.models.company import Company
from portfolio.models.cost_item import CostItem, CostType
from portfolio.models.feature import Feature, FeatureStatus
from portfolio.models.monthly_record import MonthlyRecord
from portfolio.models.project import Project
from portfolio.models.resource import Absence, AbsenceType, Resource
from portfolio.models.sprint import Sprint
from portfolio.models.user import User, UserRole

__all__ = [
    "Absence",
    "AbsenceType",
    "Allocation",
    "Company",
    "CostItem",
    "CostType",
    "Feature",
    "FeatureStatus",
    "MonthlyRecord",
    "Project",
    "Resource",
    "Sprint",
    "User",
    "UserRole",
]
