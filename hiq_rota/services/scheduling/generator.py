"""
Rota generator - main orchestration layer.

This module provides the high-level API for generating rotas, combining
request bookkeeping, data loading, solving and persistence into a single
transactional flow.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Union

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hiq_rota.core.config import settings
from hiq_rota.db.models.locations import Locations
from hiq_rota.db.models.rotas import (
    RotaRequests,
    RotaRequestStatus,
    RotaSchedules,
    RotaScheduleStatus,
    RotaShifts,
)

from .costs import BaseCostCalculator, get_cost_calculator
from .data_loader import load_scheduling_context
from .solver import RotaScheduler, reprice_schedule
from .types import ScheduledShift, ScheduleResult, SchedulingContext


logger = logging.getLogger(__name__)

WEEK_DAYS = 7


class RotaGenerationError(Exception):
    pass


class RotaValidationError(RotaGenerationError):
    """The request itself is malformed."""


class LocationNotFoundError(RotaGenerationError):
    pass


class UpstreamDataError(RotaGenerationError):
    """The location lacks the staff or configuration needed to build a rota."""


class PersistenceError(RotaGenerationError):
    pass


@dataclass
class GenerationSummary:
    request_id: int
    schedule_id: int
    shift_count: int
    assigned_count: int
    unfilled_count: int
    total_cost: float
    revenue_forecast: float
    cost_percentage: float
    wage_target_met: bool = True
    warnings: list[str] = field(default_factory=list)


def _parse_forecast_date(key: Union[date, str]) -> date:
    if isinstance(key, date):
        return key
    try:
        return date.fromisoformat(str(key))
    except ValueError:
        raise RotaValidationError(f"Invalid forecast date: {key!r}")


def validate_request(
    location_id: Optional[int],
    week_start: Optional[date],
    revenue_forecast: Optional[dict],
) -> dict[date, float]:
    """
    Check the request before anything is read or written.

    Returns the forecast keyed by date.

    Raises:
        RotaValidationError: on a missing location or week, a week start that
            is not a Monday, or an unusable forecast
    """
    if location_id is None:
        raise RotaValidationError("location_id is required")
    if week_start is None:
        raise RotaValidationError("week_start is required")
    if week_start.weekday() != 0:
        raise RotaValidationError(
            f"week_start must be a Monday, got {week_start} ({week_start.strftime('%A')})"
        )
    if not revenue_forecast:
        raise RotaValidationError("revenue_forecast is required")

    week_end = week_start + timedelta(days=WEEK_DAYS - 1)
    forecast: dict[date, float] = {}
    for key, value in revenue_forecast.items():
        day = _parse_forecast_date(key)
        if day < week_start or day > week_end:
            raise RotaValidationError(f"Forecast date {day} is outside the week {week_start} - {week_end}")
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise RotaValidationError(f"Forecast for {day} is not a number: {value!r}")
        if amount < 0:
            raise RotaValidationError(f"Forecast for {day} is negative")
        forecast[day] = amount

    if not any(amount > 0 for amount in forecast.values()):
        raise RotaValidationError("revenue_forecast needs at least one day with positive revenue")

    return forecast


def _upsert_request(
    db: Session,
    location_id: int,
    week_start: date,
    week_end: date,
    forecast: dict[date, float],
    requested_by: Optional[int],
) -> RotaRequests:
    request = db.query(RotaRequests).filter(
        RotaRequests.location_id == location_id,
        RotaRequests.week_start_date == week_start,
    ).first()

    stored_forecast = {d.isoformat(): amount for d, amount in sorted(forecast.items())}

    if request is None:
        request = RotaRequests(
            location_id=location_id,
            week_start_date=week_start,
            week_end_date=week_end,
            requested_by=requested_by,
        )
        db.add(request)

    request.status = RotaRequestStatus.DRAFT
    request.revenue_forecast = stored_forecast
    if requested_by is not None:
        request.requested_by = requested_by

    db.flush()
    return request


def _check_upstream(context: SchedulingContext):
    if not context.staff:
        raise UpstreamDataError(f"No staff profiles found for location {context.location_id}")
    if not context.shift_rules and not context.revenue_thresholds:
        raise UpstreamDataError(
            f"Location {context.location_id} has no shift rules or revenue thresholds"
        )


def _shift_row(schedule_id: int, shift: ScheduledShift) -> RotaShifts:
    return RotaShifts(
        schedule_id=schedule_id,
        staff_id=shift.staff_id,
        job_role_id=shift.job_role_id,
        shift_rule_id=shift.shift_rule_id,
        shift_date=shift.date,
        start_time=shift.start_time,
        end_time=shift.end_time,
        hours=shift.hours,
        break_minutes=shift.break_minutes,
        is_part_shift=shift.is_part_shift,
        is_secondary_role=shift.is_secondary_role,
        basic_pay=shift.cost.basic_pay,
        ni_cost=shift.cost.ni_cost,
        pension_cost=shift.cost.pension_cost,
        total_cost=shift.cost.total_cost,
    )


def _save_schedule(
    db: Session,
    request: RotaRequests,
    result: ScheduleResult,
    created_by: Optional[int],
) -> RotaSchedules:
    """Upsert the request's schedule and replace its shifts."""
    schedule = db.query(RotaSchedules).filter(RotaSchedules.request_id == request.id).first()

    if schedule is None:
        schedule = RotaSchedules(
            request_id=request.id,
            location_id=request.location_id,
            week_start_date=request.week_start_date,
            week_end_date=request.week_end_date,
        )
        db.add(schedule)

    schedule.status = RotaScheduleStatus.DRAFT
    schedule.total_cost = result.total_cost
    schedule.revenue_forecast = result.revenue_forecast
    schedule.cost_percentage = result.cost_percentage
    schedule.unfilled_count = result.unfilled_count
    if created_by is not None:
        schedule.created_by = created_by
    db.flush()

    # regenerating replaces the previous shifts wholesale
    db.execute(delete(RotaShifts).where(RotaShifts.schedule_id == schedule.id))
    db.add_all([_shift_row(schedule.id, s) for s in result.shifts])

    request.status = RotaRequestStatus.GENERATED
    db.flush()
    return schedule


def generate_rota(
    db: Session,
    location_id: Optional[int],
    week_start: Optional[date],
    revenue_forecast: Optional[dict],
    requested_by: Optional[int] = None,
    cost_calculator: Optional[BaseCostCalculator] = None,
) -> GenerationSummary:
    """
    Generate and store the rota for a location for a given week.

    main entry point for rota generation. This function:
    1. Validates the request
    2. Records (or refreshes) the rota request for the location/week
    3. Loads staff and configuration from the database
    4. Runs the scheduler, then re-prices through the cost calculator if one is set
    5. Stores the schedule and its shifts, replacing any earlier generation

    Everything happens in one transaction: on any failure nothing is kept.

    Args:
        db: Database session
        location_id: The location to generate a rota for
        week_start: Monday of the target week
        revenue_forecast: date (or ISO date string) -> forecast revenue
        requested_by: user recorded against the request and schedule
        cost_calculator: optional calculator used to re-price assigned shifts

    Raises:
        RotaValidationError: bad input, nothing was read or written
        LocationNotFoundError: unknown location
        UpstreamDataError: no staff, or no shift rules or revenue thresholds
        PersistenceError: the database rejected the write
    """
    forecast = validate_request(location_id, week_start, revenue_forecast)
    week_end = week_start + timedelta(days=WEEK_DAYS - 1)

    if cost_calculator is None and settings.COST_CALCULATOR_URL:
        cost_calculator = get_cost_calculator()

    try:
        location = db.query(Locations).filter(Locations.id == location_id).first()
        if not location:
            raise LocationNotFoundError(f"Location {location_id} not found")

        request = _upsert_request(db, location_id, week_start, week_end, forecast, requested_by)

        context = load_scheduling_context(db, location_id, week_start, week_end, forecast)
        _check_upstream(context)

        result = RotaScheduler(context).generate_schedule()
        if cost_calculator is not None:
            result = reprice_schedule(result, context, cost_calculator)

        schedule = _save_schedule(db, request, result, requested_by)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to store rota for location {location_id} week {week_start}: {e}")
        raise PersistenceError(f"Failed to store rota: {e}") from e
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Generated rota {schedule.id} for location {location_id} week {week_start}: "
        f"{len(result.shifts)} shifts, {result.unfilled_count} unfilled, "
        f"cost {result.total_cost:.2f} ({result.cost_percentage:.1f}% of revenue)"
    )

    return GenerationSummary(
        request_id=request.id,
        schedule_id=schedule.id,
        shift_count=len(result.shifts),
        assigned_count=len(result.assigned_shifts),
        unfilled_count=result.unfilled_count,
        total_cost=result.total_cost,
        revenue_forecast=result.revenue_forecast,
        cost_percentage=result.cost_percentage,
        wage_target_met=result.wage_target.met if result.wage_target else True,
        warnings=list(result.warnings),
    )


def generate_rota_from_context(context: SchedulingContext) -> ScheduleResult:
    """
    Generate a rota from a pre-loaded context without touching the database.

    Useful for testing or when you want to manipulate the context
    before solving.
    """
    return RotaScheduler(context).generate_schedule()
