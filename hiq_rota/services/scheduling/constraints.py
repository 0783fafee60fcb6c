"""
Constraint checking utilities for rota generation.
Handles legal limits (shifts per week, rest between shifts, consecutive days)
and the wage target check.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta

from .types import (
    GlobalConstraints,
    ScheduledShift,
    WageTargetCheck,
    WageTargetType,
)


def gap_hours_between(
    start1: datetime, end1: datetime,
    start2: datetime, end2: datetime
) -> float:
    """Hours of rest between two shifts. Negative or zero when they overlap or touch."""
    if start2 >= end1:
        gap = start2 - end1
    elif start1 >= end2:
        gap = start1 - end2
    else:
        overlap = min(end1, end2) - max(start1, start2)
        return -overlap.total_seconds() / 3600
    return gap.total_seconds() / 3600


def has_sufficient_rest(
    existing_shifts: list[ScheduledShift],
    start_dt: datetime,
    end_dt: datetime,
    min_rest_hours: float,
) -> bool:
    """Check a new shift keeps at least min_rest_hours from every existing shift."""
    for shift in existing_shifts:
        gap = gap_hours_between(shift.start_datetime, shift.end_datetime, start_dt, end_dt)
        if gap <= 0 or gap < min_rest_hours:
            return False
    return True


def consecutive_run_length(worked_dates: set[date], new_date: date) -> int:
    """Length of the run of consecutive worked dates that new_date would sit in."""
    dates = set(worked_dates) | {new_date}
    run = 1

    current = new_date - timedelta(days=1)
    while current in dates:
        run += 1
        current -= timedelta(days=1)

    current = new_date + timedelta(days=1)
    while current in dates:
        run += 1
        current += timedelta(days=1)

    return run


def would_exceed_consecutive_days(worked_dates: set[date], new_date: date, max_days: int) -> bool:
    return consecutive_run_length(worked_dates, new_date) > max_days


def longest_consecutive_run(worked_dates: set[date]) -> int:
    longest = 0
    for d in worked_dates:
        if d - timedelta(days=1) in worked_dates:
            continue  # not the start of a run
        run = 1
        while d + timedelta(days=run) in worked_dates:
            run += 1
        longest = max(longest, run)
    return longest


def check_wage_target(
    constraints: GlobalConstraints,
    total_cost: float,
    cost_percentage: float,
    total_hours: float,
) -> WageTargetCheck:
    """
    Compare the generated rota against the location's wage target.
    Reporting only: the scheduler does not trim shifts to meet it.
    """
    target_type = WageTargetType(constraints.wage_target_type)

    if target_type == WageTargetType.ABSOLUTE:
        actual = total_cost
    elif target_type == WageTargetType.HOURS:
        actual = total_hours
    else:
        actual = cost_percentage

    return WageTargetCheck(
        target_type=target_type,
        target_value=constraints.wage_target_value,
        actual=actual,
        met=actual <= constraints.wage_target_value,
    )


def validate_schedule(shifts: list[ScheduledShift], constraints: GlobalConstraints) -> dict:
    """
    Validate a finished shift list against the legal constraints.

    Returns:
        {
            'valid': bool,
            'max_shift_violations': {staff_id: shift_count},
            'rest_violations': [(staff_id, earlier_shift, later_shift)],
            'consecutive_day_violations': {staff_id: longest_run},
        }
    """
    by_staff: dict[int, list[ScheduledShift]] = defaultdict(list)
    for shift in shifts:
        if shift.staff_id is not None:
            by_staff[shift.staff_id].append(shift)

    max_shift_violations = {}
    rest_violations = []
    consecutive_day_violations = {}

    for staff_id, staff_shifts in by_staff.items():
        if len(staff_shifts) > constraints.max_shifts_per_week:
            max_shift_violations[staff_id] = len(staff_shifts)

        ordered = sorted(staff_shifts, key=lambda s: s.start_datetime)
        for earlier, later in zip(ordered, ordered[1:]):
            gap = gap_hours_between(
                earlier.start_datetime, earlier.end_datetime,
                later.start_datetime, later.end_datetime,
            )
            if gap < constraints.min_rest_hours_between_shifts:
                rest_violations.append((staff_id, earlier, later))

        run = longest_consecutive_run({s.date for s in staff_shifts})
        if run > constraints.max_consecutive_days_worked:
            consecutive_day_violations[staff_id] = run

    return {
        'valid': not max_shift_violations and not rest_violations and not consecutive_day_violations,
        'max_shift_violations': max_shift_violations,
        'rest_violations': rest_violations,
        'consecutive_day_violations': consecutive_day_violations,
    }
