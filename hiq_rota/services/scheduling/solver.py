"""
Rota scheduler using a single greedy pass over ranked staff.

Strategy:
1. Expand shift rules (or revenue bands) into dated requirements, adjusted for troughs
2. Rank staff once by configured priority weights
3. Fill each requirement slot in order with the first eligible ranked candidate
4. Cost every assignment and check the week against the wage target
"""

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Optional

from .constraints import (
    check_wage_target,
    has_sufficient_rest,
    would_exceed_consecutive_days,
)
from .costs import BaseCostCalculator, calculate_employer_cost
from .demand import build_requirements
from .ranking import rank_candidates
from .roles import is_secondary_role, resolve_staff_roles
from .types import (
    AlgorithmConfig,
    CostCalculationInput,
    CostCalculationResult,
    GlobalConstraints,
    JobRole,
    RevenueThreshold,
    RoleMapping,
    ScheduledShift,
    ScheduleResult,
    SchedulingContext,
    ShiftRequirement,
    ShiftRule,
    StaffMember,
    TroughPeriod,
)


logger = logging.getLogger(__name__)

# weekly cap for staff with no max_hours_per_week of their own
DEFAULT_MAX_HOURS_PER_WEEK = 40


class SchedulingInputError(ValueError):
    """Required scheduling input is missing or inconsistent."""


class RotaScheduler:
    """
    Greedy rota generator for one location and one week.
    """

    def __init__(self, context: SchedulingContext, config: Optional[AlgorithmConfig] = None):
        if context.location_id is None:
            raise SchedulingInputError("location_id is required")
        if context.week_start is None or context.week_end is None:
            raise SchedulingInputError("week_start and week_end are required")
        if context.week_end < context.week_start:
            raise SchedulingInputError(
                f"week_end {context.week_end} is before week_start {context.week_start}"
            )

        # private copy so setters never leak into the caller's context
        self.context = replace(context)
        if config is not None:
            self.context.config = config
        self._reset()

    # Configuration

    def set_shift_rules(self, shift_rules: Optional[list[ShiftRule]]):
        self.context.shift_rules = list(shift_rules or [])

    def set_trough_periods(self, trough_periods: Optional[list[TroughPeriod]]):
        self.context.trough_periods = list(trough_periods or [])

    def set_role_mappings(self, role_mappings: Optional[list[RoleMapping]]):
        self.context.role_mappings = list(role_mappings or [])

    def set_revenue_thresholds(self, thresholds: Optional[list[RevenueThreshold]]):
        self.context.revenue_thresholds = list(thresholds or [])

    def set_staff_priority_config(
        self,
        salaried_weight: float,
        manager_weight: float,
        hi_score_weight: float,
    ):
        self.context.config = replace(
            self.context.config,
            salaried_weight=salaried_weight,
            manager_weight=manager_weight,
            hi_score_weight=hi_score_weight,
        )

    def set_part_shift_config(self, enable: bool, min_hours: float, max_hours: float):
        if min_hours > max_hours:
            raise SchedulingInputError(
                f"min part shift hours ({min_hours}) exceeds max part shift hours ({max_hours})"
            )
        self.context.config = replace(
            self.context.config,
            enable_part_shifts=enable,
            min_part_shift_hours=min_hours,
            max_part_shift_hours=max_hours,
        )

    @property
    def constraints(self) -> GlobalConstraints:
        return self.context.constraints

    @property
    def config(self) -> AlgorithmConfig:
        return self.context.config

    # Generation

    def generate_schedule(self) -> ScheduleResult:
        """
        Main generation method. Safe to call repeatedly; each call starts from scratch.

        Returns:
            ScheduleResult with filled and unfilled shifts plus the cost summary
        """
        active_rules = [r for r in self.context.shift_rules if not r.archived]
        if not active_rules and not self.context.revenue_thresholds:
            raise SchedulingInputError("No shift rules or revenue thresholds to schedule from")

        self._reset()

        ranked = rank_candidates(self._prepare_staff(), self.config)
        requirements = build_requirements(self.context)
        logger.info(
            f"Scheduling {len(requirements)} requirements for location {self.context.location_id} "
            f"week {self.context.week_start} with {len(ranked)} available staff"
        )

        for req in requirements:
            for _ in range(req.min_staff):
                self._fill_slot(req, ranked)

        return self._build_result()

    def _reset(self):
        self.shifts: list[ScheduledShift] = []
        self.staff_shifts: dict[int, list[ScheduledShift]] = defaultdict(list)
        self.staff_hours: dict[int, float] = defaultdict(float)
        self.staff_dates: dict[int, set[date]] = defaultdict(set)

    def _prepare_staff(self) -> list[StaffMember]:
        """Available staff with their job roles resolved through the role mappings."""
        prepared = []
        for member in self.context.staff:
            if member.available_for_rota is False:
                continue
            role_ids = resolve_staff_roles(member, self.context.job_roles, self.context.role_mappings)
            prepared.append(replace(member, job_role_ids=role_ids))
        return prepared

    def _fill_slot(self, req: ShiftRequirement, ranked: list[StaffMember]):
        staff = self._find_best_staff(req, ranked)

        if staff is None:
            logger.warning(
                f"Could not find available staff for {req.name or f'role {req.job_role_id}'} "
                f"on {req.date} {req.start_time}-{req.end_time}"
            )
            self.shifts.append(self._make_shift(req, None))
            return

        shift = self._make_shift(req, staff)
        self.shifts.append(shift)
        self.staff_shifts[staff.id].append(shift)
        self.staff_hours[staff.id] += shift.hours
        self.staff_dates[staff.id].add(req.date)

    def _find_best_staff(self, req: ShiftRequirement, ranked: list[StaffMember]) -> Optional[StaffMember]:
        """First ranked candidate that can legally take the shift."""
        for staff in ranked:
            if self._can_work(staff, req):
                return staff
        return None

    def _can_work(self, staff: StaffMember, req: ShiftRequirement) -> bool:
        if req.job_role_id not in staff.job_role_ids:
            return False

        # one shift per person per day
        if req.date in self.staff_dates[staff.id]:
            return False

        if len(self.staff_shifts[staff.id]) >= self.constraints.max_shifts_per_week:
            return False

        max_hours = staff.max_hours_per_week or DEFAULT_MAX_HOURS_PER_WEEK
        if self.staff_hours[staff.id] + req.hours > max_hours:
            return False

        if not has_sufficient_rest(
            self.staff_shifts[staff.id],
            req.start_datetime,
            req.end_datetime,
            self.constraints.min_rest_hours_between_shifts,
        ):
            return False

        if would_exceed_consecutive_days(
            self.staff_dates[staff.id],
            req.date,
            self.constraints.max_consecutive_days_worked,
        ):
            return False

        return True

    def _job_role(self, job_role_id: int) -> Optional[JobRole]:
        return next((r for r in self.context.job_roles if r.id == job_role_id), None)

    def _cost_input(self, staff: StaffMember, req: ShiftRequirement) -> CostCalculationInput:
        hourly_rate = staff.wage_rate
        if not hourly_rate:
            role = self._job_role(req.job_role_id)
            hourly_rate = role.default_wage_rate if role else 0

        return CostCalculationInput(
            hourly_rate=hourly_rate or 0,
            hours=req.hours,
            employment_type=staff.employment_type,
            is_full_time_student=staff.is_full_time_student,
            annual_salary=staff.annual_salary,
            contractor_rate=staff.contractor_rate,
        )

    def _make_shift(self, req: ShiftRequirement, staff: Optional[StaffMember]) -> ScheduledShift:
        cost_input = None
        cost = CostCalculationResult()
        if staff is not None:
            cost_input = self._cost_input(staff, req)
            cost = calculate_employer_cost(cost_input)

        return ScheduledShift(
            staff_id=staff.id if staff else None,
            job_role_id=req.job_role_id,
            date=req.date,
            start_time=req.start_time,
            end_time=req.end_time,
            hours=req.hours,
            start_datetime=req.start_datetime,
            end_datetime=req.end_datetime,
            break_minutes=req.break_minutes,
            shift_rule_id=req.shift_rule_id,
            is_part_shift=req.is_part_shift,
            is_secondary_role=is_secondary_role(staff, req.job_role_id) if staff else False,
            cost=cost,
            cost_input=cost_input,
        )

    def _build_result(self) -> ScheduleResult:
        return summarise_shifts(self.shifts, self.context)


def week_revenue(context: SchedulingContext) -> float:
    """Total forecast revenue for the dates of the rota week."""
    week_dates = set(context.dates)
    return sum(
        (value or 0) for d, value in context.revenue_forecast.items()
        if d in week_dates and (value or 0) > 0
    )


def summarise_shifts(shifts: list[ScheduledShift], context: SchedulingContext) -> ScheduleResult:
    """Totals, cost percentage and wage target check for a shift list."""
    assigned = [s for s in shifts if s.is_filled]
    unfilled_count = len(shifts) - len(assigned)

    total_cost = sum(s.cost.total_cost for s in assigned)
    total_hours = sum(s.hours for s in assigned)
    revenue = week_revenue(context)
    cost_percentage = (total_cost / revenue) * 100 if revenue > 0 else 0.0

    wage_target = check_wage_target(context.constraints, total_cost, cost_percentage, total_hours)

    warnings = []
    if unfilled_count:
        warnings.append(f"{unfilled_count} shifts could not be filled")
    if not wage_target.met:
        warnings.append(
            f"Wage target exceeded: {wage_target.actual:.2f} against a "
            f"{wage_target.target_type.value} target of {wage_target.target_value:.2f}"
        )

    return ScheduleResult(
        shifts=list(shifts),
        total_cost=total_cost,
        revenue_forecast=revenue,
        cost_percentage=cost_percentage,
        total_hours=total_hours,
        unfilled_count=unfilled_count,
        wage_target=wage_target,
        warnings=warnings,
    )


def reprice_schedule(
    result: ScheduleResult,
    context: SchedulingContext,
    calculator: BaseCostCalculator,
) -> ScheduleResult:
    """
    Re-cost assigned shifts with another calculator (e.g. the hosted one)
    after the assignment pass, then recompute the summary.
    """
    repriced = []
    for shift in result.shifts:
        if shift.cost_input is None:
            repriced.append(shift)
            continue
        repriced.append(replace(shift, cost=calculator.calculate(shift.cost_input)))

    logger.info(f"Repriced {len(repriced)} shifts with {calculator.calculator_name()} calculator")
    return summarise_shifts(repriced, context)


def solve_rota(context: SchedulingContext) -> ScheduleResult:
    """
    Main entry point for rota generation.

    Args:
        context: SchedulingContext with all required data

    Returns:
        ScheduleResult with generated shifts
    """
    scheduler = RotaScheduler(context)
    return scheduler.generate_schedule()
