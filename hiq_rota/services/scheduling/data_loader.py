"""
Data loader for scheduling service.
Fetches all relevant data from the database and converts to internal types.
"""

from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from hiq_rota.db.models.staff_profiles import StaffProfiles
from hiq_rota.db.models.hi_score_evaluations import HiScoreEvaluations
from hiq_rota.db.models.job_roles import JobRoles, JobRoleMappings
from hiq_rota.db.models.shift_rules import ShiftRules, TroughPeriods
from hiq_rota.db.models.revenue_thresholds import RevenueThresholds
from hiq_rota.db.models.rota_settings import (
    GlobalConstraints as GlobalConstraintsRow,
    RotaAlgorithmConfigs,
)

from .ranking import average_hi_score, is_manager_title
from .types import (
    AlgorithmConfig,
    EmploymentType,
    GlobalConstraints,
    JobRole,
    RevenueThreshold,
    RoleMapping,
    SchedulingContext,
    ShiftRule,
    StaffMember,
    TroughPeriod,
    WageTargetType,
)


def _day_codes(days: Optional[list]) -> list[str]:
    return [str(d).strip().lower()[:3] for d in (days or [])]


def load_hi_scores(db: Session, profile_ids: list[int]) -> dict[int, float]:
    """Average evaluation score per staff profile."""

    if not profile_ids:
        return {}

    stmt = select(HiScoreEvaluations).where(HiScoreEvaluations.profile_id.in_(profile_ids))
    rows = db.execute(stmt).scalars().all()

    scores: dict[int, list] = defaultdict(list)
    for r in rows:
        scores[r.profile_id].append(r.weighted_score)

    return {profile_id: average_hi_score(values) for profile_id, values in scores.items()}


def load_staff(db: Session, location_id: int) -> list[StaffMember]:
    """Load every staff profile for a location, including those not available for the rota."""

    stmt = select(StaffProfiles).where(StaffProfiles.location_id == location_id).order_by(StaffProfiles.id)
    rows = db.execute(stmt).scalars().all()
    hi_scores = load_hi_scores(db, [r.id for r in rows])

    return [
        StaffMember(
            id=r.id,
            first_name=r.first_name,
            last_name=r.last_name or "",
            employment_type=EmploymentType(r.employment_type.value),
            wage_rate=r.wage_rate,
            annual_salary=r.annual_salary,
            contractor_rate=r.contractor_rate,
            is_full_time_student=r.is_full_time_student,
            available_for_rota=r.available_for_rota,
            hi_score=hi_scores.get(r.id, 0.0),
            is_manager=is_manager_title(r.job_title),
            job_title=r.job_title,
            secondary_job_roles=list(r.secondary_job_roles or []),
            max_hours_per_week=r.max_hours_per_week,
        )
        for r in rows
    ]


def load_job_roles(db: Session, location_id: int) -> list[JobRole]:
    stmt = select(JobRoles).where(JobRoles.location_id == location_id).order_by(JobRoles.id)
    rows = db.execute(stmt).scalars().all()

    return [
        JobRole(
            id=r.id,
            title=r.title,
            is_kitchen=r.is_kitchen,
            default_wage_rate=r.default_wage_rate,
            location_id=r.location_id,
        )
        for r in rows
    ]


def load_role_mappings(db: Session, location_id: int) -> list[RoleMapping]:
    stmt = select(JobRoleMappings).where(JobRoleMappings.location_id == location_id).order_by(JobRoleMappings.id)
    rows = db.execute(stmt).scalars().all()

    return [
        RoleMapping(job_title=r.job_title, job_role_id=r.job_role_id, priority=r.priority)
        for r in rows
    ]


def load_shift_rules(db: Session, location_id: int) -> list[ShiftRule]:
    """Load non-archived shift rules for a location."""

    stmt = select(ShiftRules).where(
        and_(
            ShiftRules.location_id == location_id,
            ShiftRules.archived == False
        )
    ).order_by(ShiftRules.id)
    rows = db.execute(stmt).scalars().all()

    return [
        ShiftRule(
            id=r.id,
            job_role_id=r.job_role_id,
            start_time=r.start_time,
            end_time=r.end_time,
            days_of_week=_day_codes(r.days_of_week),
            min_staff=r.min_staff,
            location_id=r.location_id,
            archived=r.archived,
            name=r.name,
            max_staff=r.max_staff,
            priority=r.priority,
            break_minutes=r.break_minutes,
        )
        for r in rows
    ]


def load_trough_periods(db: Session, location_id: int) -> list[TroughPeriod]:
    stmt = select(TroughPeriods).where(TroughPeriods.location_id == location_id).order_by(TroughPeriods.id)
    rows = db.execute(stmt).scalars().all()

    return [
        TroughPeriod(
            start_time=r.start_time,
            end_time=r.end_time,
            days_of_week=_day_codes(r.days_of_week),
        )
        for r in rows
    ]


def load_revenue_thresholds(db: Session, location_id: int) -> list[RevenueThreshold]:
    stmt = select(RevenueThresholds).where(
        RevenueThresholds.location_id == location_id
    ).order_by(RevenueThresholds.revenue_min)
    rows = db.execute(stmt).scalars().all()

    return [
        RevenueThreshold(
            name=r.name,
            revenue_min=r.revenue_min,
            revenue_max=r.revenue_max,
            foh_min_staff=r.foh_min_staff,
            foh_max_staff=r.foh_max_staff,
            kitchen_min_staff=r.kitchen_min_staff,
            kitchen_max_staff=r.kitchen_max_staff,
            kp_min_staff=r.kp_min_staff,
            kp_max_staff=r.kp_max_staff,
            target_cost_percentage=r.target_cost_percentage,
        )
        for r in rows
    ]


def load_global_constraints(db: Session, location_id: int) -> GlobalConstraints:
    """Location's global rules, or the defaults when none are configured."""

    stmt = select(GlobalConstraintsRow).where(GlobalConstraintsRow.location_id == location_id)
    row = db.execute(stmt).scalar_one_or_none()
    if row is None:
        return GlobalConstraints()

    return GlobalConstraints(
        wage_target_type=WageTargetType(row.wage_target_type.value),
        wage_target_value=row.wage_target_value,
        max_shifts_per_week=row.max_shifts_per_week,
        min_rest_hours_between_shifts=row.min_rest_hours_between_shifts,
        max_consecutive_days_worked=row.max_consecutive_days_worked,
    )


def load_algorithm_config(db: Session, location_id: int) -> AlgorithmConfig:
    """Location's algorithm config, or the defaults when none is configured."""

    stmt = select(RotaAlgorithmConfigs).where(RotaAlgorithmConfigs.location_id == location_id)
    row = db.execute(stmt).scalar_one_or_none()
    if row is None:
        return AlgorithmConfig()

    return AlgorithmConfig(
        salaried_weight=row.salaried_weight,
        manager_weight=row.manager_weight,
        hi_score_weight=row.hi_score_weight,
        enable_part_shifts=row.enable_part_shifts,
        min_part_shift_hours=row.min_part_shift_hours,
        max_part_shift_hours=row.max_part_shift_hours,
    )


def load_scheduling_context(
    db: Session,
    location_id: int,
    week_start: date,
    week_end: date,
    revenue_forecast: dict[date, float],
) -> SchedulingContext:
    """
    Load all data needed to generate a rota for a location/week.

    returns SchedulingContext for a given location/week
    """
    return SchedulingContext(
        location_id=location_id,
        week_start=week_start,
        week_end=week_end,
        revenue_forecast=dict(revenue_forecast),
        staff=load_staff(db, location_id),
        job_roles=load_job_roles(db, location_id),
        constraints=load_global_constraints(db, location_id),
        config=load_algorithm_config(db, location_id),
        shift_rules=load_shift_rules(db, location_id),
        trough_periods=load_trough_periods(db, location_id),
        role_mappings=load_role_mappings(db, location_id),
        revenue_thresholds=load_revenue_thresholds(db, location_id),
    )
