"""
Internal data types for rota generation.
decoupled from SQLAlchemy models so the scheduler runs purely in memory.
"""

from dataclasses import dataclass, field
from datetime import date, time, datetime, timedelta
from enum import Enum
from typing import Optional


DAY_CODES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


class EmploymentType(str, Enum):
    HOURLY = "hourly"
    SALARIED = "salaried"
    CONTRACTOR = "contractor"


class WageTargetType(str, Enum):
    PERCENT = "percent"
    ABSOLUTE = "absolute"
    HOURS = "hours"


def day_code(d: date) -> str:
    return DAY_CODES[d.weekday()]


def time_to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def minutes_to_time(minutes: int) -> time:
    minutes = minutes % (24 * 60)
    return time(minutes // 60, minutes % 60)


@dataclass
class StaffMember:
    id: int
    first_name: str
    last_name: str = ""
    employment_type: EmploymentType = EmploymentType.HOURLY
    wage_rate: Optional[float] = None
    annual_salary: Optional[float] = None
    contractor_rate: Optional[float] = None
    is_full_time_student: bool = False
    available_for_rota: bool = True
    hi_score: float = 0.0
    is_manager: bool = False
    job_title: Optional[str] = None
    secondary_job_roles: list[str] = field(default_factory=list)  # titles
    job_role_ids: list[int] = field(default_factory=list)  # resolved, primary first
    max_hours_per_week: Optional[float] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class JobRole:
    id: int
    title: str
    is_kitchen: bool = False
    default_wage_rate: float = 0.0
    location_id: Optional[int] = None


@dataclass
class RoleMapping:
    job_title: str
    job_role_id: int
    priority: int = 1


@dataclass
class ShiftRule:
    id: int
    job_role_id: int
    start_time: time
    end_time: time  # before start_time = finishes after midnight
    days_of_week: list[str]
    min_staff: int = 1
    location_id: Optional[int] = None
    archived: bool = False
    name: Optional[str] = None
    max_staff: Optional[int] = None
    priority: int = 3  # 1 = most important
    break_minutes: int = 0


@dataclass
class TroughPeriod:
    start_time: time
    end_time: time
    days_of_week: list[str]


@dataclass
class RevenueThreshold:
    """Revenue band used to size staffing on days without shift rules."""
    name: str
    revenue_min: float
    revenue_max: float
    foh_min_staff: int = 0
    foh_max_staff: int = 0
    kitchen_min_staff: int = 0
    kitchen_max_staff: int = 0
    kp_min_staff: int = 0
    kp_max_staff: int = 0
    target_cost_percentage: float = 28.0


@dataclass
class GlobalConstraints:
    wage_target_type: WageTargetType = WageTargetType.PERCENT
    wage_target_value: float = 28.0
    max_shifts_per_week: int = 5
    min_rest_hours_between_shifts: float = 11.0
    max_consecutive_days_worked: int = 6


@dataclass
class AlgorithmConfig:
    salaried_weight: float = 100.0
    manager_weight: float = 50.0
    hi_score_weight: float = 1.0
    enable_part_shifts: bool = True
    min_part_shift_hours: float = 3.0
    max_part_shift_hours: float = 5.0


@dataclass
class CostCalculationInput:
    hourly_rate: float = 0.0
    hours: float = 0.0
    employment_type: EmploymentType = EmploymentType.HOURLY
    is_full_time_student: bool = False
    annual_salary: Optional[float] = None
    contractor_rate: Optional[float] = None


@dataclass
class CostCalculationResult:
    basic_pay: float = 0.0
    ni_cost: float = 0.0
    pension_cost: float = 0.0
    total_cost: float = 0.0


@dataclass
class ShiftRequirement:
    """One expanded staffing need: a role, a window on a date, and a headcount."""
    date: date
    job_role_id: int
    start_minute: int  # minutes from midnight of `date`
    end_minute: int  # may exceed 24 * 60 for overnight windows
    min_staff: int
    break_minutes: int = 0
    shift_rule_id: Optional[int] = None
    priority: int = 3
    is_part_shift: bool = False
    name: Optional[str] = None

    @property
    def start_time(self) -> time:
        return minutes_to_time(self.start_minute)

    @property
    def end_time(self) -> time:
        return minutes_to_time(self.end_minute)

    @property
    def start_datetime(self) -> datetime:
        return datetime.combine(self.date, time.min) + timedelta(minutes=self.start_minute)

    @property
    def end_datetime(self) -> datetime:
        return datetime.combine(self.date, time.min) + timedelta(minutes=self.end_minute)

    @property
    def hours(self) -> float:
        """Paid hours: window length less the unpaid break."""
        return max(self.end_minute - self.start_minute - self.break_minutes, 0) / 60

    def sort_key(self) -> tuple:
        return (
            self.date,
            self.start_minute,
            self.priority,
            self.job_role_id,
            self.shift_rule_id if self.shift_rule_id is not None else -1,
            self.end_minute,
        )


@dataclass
class ScheduledShift:
    """A schedule line item. staff_id is None when nobody could be assigned."""
    staff_id: Optional[int]
    job_role_id: int
    date: date
    start_time: time
    end_time: time
    hours: float
    start_datetime: datetime
    end_datetime: datetime
    break_minutes: int = 0
    shift_rule_id: Optional[int] = None
    is_part_shift: bool = False
    is_secondary_role: bool = False
    cost: CostCalculationResult = field(default_factory=CostCalculationResult)
    cost_input: Optional[CostCalculationInput] = None

    @property
    def is_filled(self) -> bool:
        return self.staff_id is not None


@dataclass
class WageTargetCheck:
    target_type: WageTargetType
    target_value: float
    actual: float
    met: bool


@dataclass
class SchedulingContext:
    """All data needed to generate a rota for one location/week."""
    location_id: Optional[int]
    week_start: Optional[date]
    week_end: Optional[date]
    revenue_forecast: dict[date, float]
    staff: list[StaffMember]
    job_roles: list[JobRole]
    constraints: GlobalConstraints = field(default_factory=GlobalConstraints)
    config: AlgorithmConfig = field(default_factory=AlgorithmConfig)
    shift_rules: list[ShiftRule] = field(default_factory=list)
    trough_periods: list[TroughPeriod] = field(default_factory=list)
    role_mappings: list[RoleMapping] = field(default_factory=list)
    revenue_thresholds: list[RevenueThreshold] = field(default_factory=list)

    @property
    def dates(self) -> list[date]:
        if self.week_start is None or self.week_end is None:
            return []
        days = (self.week_end - self.week_start).days
        return [self.week_start + timedelta(days=i) for i in range(days + 1)]


@dataclass
class ScheduleResult:
    """Output of the scheduling algorithm."""
    shifts: list[ScheduledShift]
    total_cost: float
    revenue_forecast: float
    cost_percentage: float
    total_hours: float = 0.0
    unfilled_count: int = 0
    wage_target: Optional[WageTargetCheck] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def assigned_shifts(self) -> list[ScheduledShift]:
        return [s for s in self.shifts if s.is_filled]

    @property
    def unfilled_shifts(self) -> list[ScheduledShift]:
        return [s for s in self.shifts if not s.is_filled]
