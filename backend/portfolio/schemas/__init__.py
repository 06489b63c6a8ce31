"""Pydantic schemas."""
from portfolio.schemas.allocation import AllocationCreate, AllocationResponse, AllocationUpdate
from portfolio.schemas.auth import CurrentUserResponse, LoginRequest, RegisterRequest, Token, UserResponse
from portfolio.schemas.cost_item import CostItemCreate, CostItemResponse, CostItemUpdate
from portfolio.schemas.feature import FeatureCreate, FeatureResponse, FeatureUpdate
from portfolio.schemas.monthly_record import (
    MonthlyRecordCreate,
    MonthlyRecordResponse,
    MonthlyRecordUpdate,
)
from portfolio.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from portfolio.schemas.resource import (
    AbsenceCreate,
    AbsenceResponse,
    AbsenceUpdate,
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
)
from portfolio.schemas.sprint import SprintCreate, SprintResponse, SprintUpdate
from portfolio.schemas.summary import (
    FeatureStats,
    PeriodBreakdown,
    PeriodTrend,
    ProjectOverview,
    ProjectSummary,
    ResourcePeriodBreakdown,
    TrendPoint,
)

__all__ = [
    "AbsenceCreate",
    "AbsenceResponse",
    "AbsenceUpdate",
    "AllocationCreate",
    "AllocationResponse",
    "AllocationUpdate",
    "CostItemCreate",
    "CostItemResponse",
    "CostItemUpdate",
    "CurrentUserResponse",
    "FeatureCreate",
    "FeatureResponse",
    "FeatureStats",
    "FeatureUpdate",
    "LoginRequest",
    "MonthlyRecordCreate",
    "MonthlyRecordResponse",
    "MonthlyRecordUpdate",
    "PeriodBreakdown",
    "PeriodTrend",
    "ProjectCreate",
    "ProjectOverview",
    "ProjectResponse",
    "ProjectSummary",
    "ProjectUpdate",
    "RegisterRequest",
    "ResourceCreate",
    "ResourcePeriodBreakdown",
    "ResourceResponse",
    "ResourceUpdate",
    "SprintCreate",
    "SprintResponse",
    "SprintUpdate",
    "Token",
    "TrendPoint",
    "UserResponse",
]
