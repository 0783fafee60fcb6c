from hiq_rota.db.database import Base

# Import models
from hiq_rota.db.models.locations import Locations
from hiq_rota.db.models.staff_profiles import StaffProfiles, EmploymentType
from hiq_rota.db.models.hi_score_evaluations import HiScoreEvaluations
from hiq_rota.db.models.job_roles import JobRoles, JobRoleMappings
from hiq_rota.db.models.shift_rules import ShiftRules, TroughPeriods
from hiq_rota.db.models.revenue_thresholds import RevenueThresholds
from hiq_rota.db.models.rota_settings import GlobalConstraints, RotaAlgorithmConfigs, WageTargetType
from hiq_rota.db.models.rotas import (
    RotaRequests,
    RotaSchedules,
    RotaShifts,
    RotaRequestStatus,
    RotaScheduleStatus,
)

__all__ = [
    "Base",
    # Models
    "Locations",
    "StaffProfiles",
    "HiScoreEvaluations",
    "JobRoles",
    "JobRoleMappings",
    "ShiftRules",
    "TroughPeriods",
    "RevenueThresholds",
    "GlobalConstraints",
    "RotaAlgorithmConfigs",
    "RotaRequests",
    "RotaSchedules",
    "RotaShifts",
    # Enums
    "EmploymentType",
    "WageTargetType",
    "RotaRequestStatus",
    "RotaScheduleStatus",
]
