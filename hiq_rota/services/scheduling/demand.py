"""
Demand expansion: turns shift rules, trough periods and revenue bands into
dated ShiftRequirements for the rota week.
"""

import logging
from datetime import date, time
from typing import Optional

from .roles import find_role_by_keyword
from .types import (
    AlgorithmConfig,
    JobRole,
    RevenueThreshold,
    SchedulingContext,
    ShiftRequirement,
    ShiftRule,
    TroughPeriod,
    day_code,
    time_to_minutes,
)


logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

# Revenue band staffing: (category, role title keyword, is_kitchen, threshold attribute)
THRESHOLD_CATEGORIES = [
    ("foh", "team", False, "foh_min_staff"),
    ("kitchen", "chef", True, "kitchen_min_staff"),
    ("kp", "porter", True, "kp_min_staff"),
]
THRESHOLD_BREAK_MINUTES = 30


def window_minutes(start: time, end: time) -> tuple[int, int]:
    """
    Window as minutes from midnight.

    An end before the start rolls into the next day. Equal times give an empty window.
    """
    start_min = time_to_minutes(start)
    end_min = time_to_minutes(end)
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def get_shift_rules_for_day(shift_rules: list[ShiftRule], code: str) -> list[ShiftRule]:
    return [r for r in shift_rules if code in r.days_of_week and not r.archived]


def get_troughs_for_day(troughs: list[TroughPeriod], code: str) -> list[TroughPeriod]:
    return [t for t in troughs if code in t.days_of_week]


def _cut_segment(
    segment: tuple[int, int, bool],
    trough_start: int,
    trough_end: int,
    allow_split: bool,
) -> list[tuple[int, int, bool]]:
    """Remove one trough window from one (start, end, was_cut) segment."""
    start, end, was_cut = segment

    if trough_end <= start or trough_start >= end:
        return [segment]
    if trough_start <= start and trough_end >= end:
        return []
    if trough_start <= start:
        return [(trough_end, end, True)]
    if trough_end >= end:
        return [(start, trough_start, True)]
    # trough strictly inside the window
    if allow_split:
        return [(start, trough_start, True), (trough_end, end, True)]
    return [segment]


def apply_troughs(
    start_min: int,
    end_min: int,
    troughs: list[TroughPeriod],
    config: AlgorithmConfig,
) -> list[tuple[int, int, bool]]:
    """
    Adjust a shift window for the day's trough periods.

    Returns (start, end, is_part_shift) segments. A window fully inside a
    trough disappears, an overlap at either edge shrinks it, and a trough in
    the middle splits it when part shifts are enabled. Cut segments shorter
    than the minimum part shift are dropped; those up to the maximum are
    flagged as part shifts.
    """
    segments = [(start_min, end_min, False)]

    for trough in troughs:
        t_start, t_end = window_minutes(trough.start_time, trough.end_time)
        if t_end == t_start:
            continue
        # a trough can also bite into the after-midnight tail of an overnight window
        for offset in (0, MINUTES_PER_DAY):
            next_segments = []
            for segment in segments:
                next_segments.extend(
                    _cut_segment(segment, t_start + offset, t_end + offset, config.enable_part_shifts)
                )
            segments = next_segments

    result = []
    for start, end, was_cut in segments:
        if end <= start:
            continue
        if not was_cut or not config.enable_part_shifts:
            result.append((start, end, False))
            continue

        hours = (end - start) / 60
        if hours < config.min_part_shift_hours:
            continue
        result.append((start, end, hours <= config.max_part_shift_hours))

    return result


def expand_shift_rules_for_day(
    target_date: date,
    shift_rules: list[ShiftRule],
    troughs: list[TroughPeriod],
    config: AlgorithmConfig,
) -> list[ShiftRequirement]:
    code = day_code(target_date)
    day_troughs = get_troughs_for_day(troughs, code)
    requirements = []

    for rule in get_shift_rules_for_day(shift_rules, code):
        if rule.min_staff <= 0:
            continue

        start_min, end_min = window_minutes(rule.start_time, rule.end_time)
        if end_min == start_min:
            logger.warning(f"Shift rule {rule.id} starts and ends at the same time, skipping")
            continue
        segments = apply_troughs(start_min, end_min, day_troughs, config)

        if not segments:
            logger.info(f"Shift rule {rule.id} suppressed on {target_date} by trough period")
            continue

        for seg_start, seg_end, is_part in segments:
            # part shifts are short enough to run without the rule's break
            break_minutes = 0 if is_part else min(rule.break_minutes, seg_end - seg_start)
            requirements.append(ShiftRequirement(
                date=target_date,
                job_role_id=rule.job_role_id,
                start_minute=seg_start,
                end_minute=seg_end,
                min_staff=rule.min_staff,
                break_minutes=break_minutes,
                shift_rule_id=rule.id,
                priority=rule.priority,
                is_part_shift=is_part,
                name=rule.name,
            ))

    return requirements


def find_threshold(revenue: float, thresholds: list[RevenueThreshold]) -> Optional[RevenueThreshold]:
    """Revenue band containing revenue, else the nearest band at either end."""
    if not thresholds:
        return None

    ordered = sorted(thresholds, key=lambda t: t.revenue_min)
    for threshold in ordered:
        if threshold.revenue_min <= revenue <= threshold.revenue_max:
            return threshold

    if revenue < ordered[0].revenue_min:
        return ordered[0]
    return ordered[-1]


def segment_windows(target_date: date) -> list[tuple[str, time, time]]:
    """Standard day and evening segments used when a day has no shift rules."""
    if target_date.weekday() >= 5:
        return [
            ("weekend-day", time(10, 0), time(17, 0)),
            ("weekend-evening", time(16, 30), time(23, 0)),
        ]
    return [
        ("weekday-day", time(11, 0), time(16, 0)),
        ("weekday-evening", time(17, 0), time(22, 0)),
    ]


def expand_thresholds_for_day(
    target_date: date,
    revenue: float,
    thresholds: list[RevenueThreshold],
    job_roles: list[JobRole],
) -> list[ShiftRequirement]:
    threshold = find_threshold(revenue, thresholds)
    if threshold is None:
        logger.info(f"No revenue threshold applies to {target_date} (revenue {revenue})")
        return []

    logger.info(f"Using threshold '{threshold.name}' for {target_date} with revenue {revenue}")
    requirements = []

    for segment, start, end in segment_windows(target_date):
        start_min, end_min = window_minutes(start, end)
        for category, keyword, is_kitchen, attr in THRESHOLD_CATEGORIES:
            min_staff = getattr(threshold, attr)
            if min_staff <= 0:
                continue
            role = find_role_by_keyword(job_roles, keyword, is_kitchen)
            if role is None:
                logger.info(f"No job role found for {category} staff, skipping {segment} on {target_date}")
                continue
            requirements.append(ShiftRequirement(
                date=target_date,
                job_role_id=role.id,
                start_minute=start_min,
                end_minute=end_min,
                min_staff=min_staff,
                break_minutes=THRESHOLD_BREAK_MINUTES,
                name=f"{segment} {category}",
            ))

    return requirements


def build_requirements(context: SchedulingContext) -> list[ShiftRequirement]:
    """
    Expand the whole week into requirements, in fill order.

    Days with no positive revenue forecast are treated as closed. A day with
    no applicable shift rules falls back to the revenue thresholds.
    """
    requirements: list[ShiftRequirement] = []

    for target_date in context.dates:
        revenue = context.revenue_forecast.get(target_date, 0) or 0
        if revenue <= 0:
            logger.info(f"No revenue forecast for {target_date}, treating as closed")
            continue

        code = day_code(target_date)
        if get_shift_rules_for_day(context.shift_rules, code):
            requirements.extend(expand_shift_rules_for_day(
                target_date, context.shift_rules, context.trough_periods, context.config
            ))
        else:
            requirements.extend(expand_thresholds_for_day(
                target_date, revenue, context.revenue_thresholds, context.job_roles
            ))

    return sorted(requirements, key=lambda r: r.sort_key())
