"""
Rota scheduling service package.

Usage:
    from datetime import date
    from hiq_rota.services.scheduling import generate_rota

    # Validate, load, solve and store in one call
    summary = generate_rota(
        db,
        location_id=1,
        week_start=date(2025, 1, 20),
        revenue_forecast={date(2025, 1, 20): 1500.0, date(2025, 1, 21): 1800.0},
    )

    # Or load context separately for inspection/testing
    from hiq_rota.services.scheduling import load_scheduling_context, generate_rota_from_context

    context = load_scheduling_context(db, 1, week_start, week_end, forecast)
    result = generate_rota_from_context(context)
"""

from .types import (
    StaffMember,
    JobRole,
    RoleMapping,
    ShiftRule,
    TroughPeriod,
    RevenueThreshold,
    GlobalConstraints,
    AlgorithmConfig,
    CostCalculationInput,
    CostCalculationResult,
    ScheduledShift,
    SchedulingContext,
    ScheduleResult,
)
from .costs import calculate_employer_cost, get_cost_calculator
from .data_loader import load_scheduling_context
from .generator import (
    GenerationSummary,
    RotaGenerationError,
    RotaValidationError,
    LocationNotFoundError,
    UpstreamDataError,
    PersistenceError,
    generate_rota,
    generate_rota_from_context,
)
from .solver import RotaScheduler, SchedulingInputError, solve_rota

__all__ = [
    # Types
    "StaffMember",
    "JobRole",
    "RoleMapping",
    "ShiftRule",
    "TroughPeriod",
    "RevenueThreshold",
    "GlobalConstraints",
    "AlgorithmConfig",
    "CostCalculationInput",
    "CostCalculationResult",
    "ScheduledShift",
    "SchedulingContext",
    "ScheduleResult",
    "GenerationSummary",
    # Errors
    "RotaGenerationError",
    "RotaValidationError",
    "LocationNotFoundError",
    "UpstreamDataError",
    "PersistenceError",
    "SchedulingInputError",
    # Main entry points
    "generate_rota",
    "generate_rota_from_context",
    # Lower-level functions
    "load_scheduling_context",
    "RotaScheduler",
    "solve_rota",
    "calculate_employer_cost",
    "get_cost_calculator",
]
