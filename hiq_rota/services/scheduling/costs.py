"""
Employer cost model for a worked shift: basic pay + employer NI + pension.

The local calculation is authoritative for scheduling. A remote calculator
(the hosted `calculate_employer_costs` function) can be configured; it falls
back to the local numbers whenever it cannot answer.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from hiq_rota.core.config import settings

from .types import CostCalculationInput, CostCalculationResult, EmploymentType


logger = logging.getLogger(__name__)

WEEKLY_NI_THRESHOLD = 175  # applied per shift, not per pay week
NI_RATE = 0.138
PENSION_RATE = 0.03
WORKING_DAYS_PER_YEAR = 261  # 365 - (52 weeks * 2 days off)
STANDARD_DAY_HOURS = 8


def _coerce_employment_type(value) -> Optional[EmploymentType]:
    if isinstance(value, EmploymentType):
        return value
    try:
        return EmploymentType(value)
    except ValueError:
        return None


def calculate_employer_cost(cost_input: CostCalculationInput) -> CostCalculationResult:
    """
    Calculate the employer's cost of one worked shift.

    Basic pay depends on employment type:
    - salaried: annual salary amortised over 261 working days of 8 hours
    - contractor: contractor rate * hours, never NI or pension
    - hourly (and anything unrecognised): hourly rate * hours

    NI and pension are only charged for non-contractors who are not
    full-time students.
    """
    hours = cost_input.hours or 0
    employment_type = _coerce_employment_type(cost_input.employment_type)

    if employment_type == EmploymentType.SALARIED:
        annual_salary = cost_input.annual_salary or 0
        basic_pay = (annual_salary / WORKING_DAYS_PER_YEAR) / STANDARD_DAY_HOURS * hours
    elif employment_type == EmploymentType.CONTRACTOR:
        basic_pay = (cost_input.contractor_rate or 0) * hours
    else:
        basic_pay = (cost_input.hourly_rate or 0) * hours

    ni_cost = 0.0
    pension_cost = 0.0
    if employment_type != EmploymentType.CONTRACTOR and not cost_input.is_full_time_student:
        if basic_pay > WEEKLY_NI_THRESHOLD:
            ni_cost = (basic_pay - WEEKLY_NI_THRESHOLD) * NI_RATE
        pension_cost = basic_pay * PENSION_RATE

    return CostCalculationResult(
        basic_pay=basic_pay,
        ni_cost=ni_cost,
        pension_cost=pension_cost,
        total_cost=basic_pay + ni_cost + pension_cost,
    )


def hourly_rate_from_salary(annual_salary: float, hours_per_day: float = STANDARD_DAY_HOURS) -> float:
    """Hourly equivalent of an annual salary, for display and comparison."""
    daily_rate = annual_salary / WORKING_DAYS_PER_YEAR
    return daily_rate / hours_per_day


def format_cost_breakdown(costs: CostCalculationResult) -> str:
    return (
        f"Basic Pay: £{costs.basic_pay:.2f}\n"
        f"NI: £{costs.ni_cost:.2f}\n"
        f"Pension: £{costs.pension_cost:.2f}\n"
        f"Total: £{costs.total_cost:.2f}"
    )


class BaseCostCalculator(ABC):
    """Abstract base for employer cost calculators."""

    @abstractmethod
    def calculate(self, cost_input: CostCalculationInput) -> CostCalculationResult:
        ...

    @abstractmethod
    def calculator_name(self) -> str:
        ...


class LocalCostCalculator(BaseCostCalculator):

    def calculator_name(self) -> str:
        return "local"

    def calculate(self, cost_input: CostCalculationInput) -> CostCalculationResult:
        return calculate_employer_cost(cost_input)


class RemoteCostCalculator(BaseCostCalculator):
    """Calls the hosted employer cost function over HTTP, falling back to the local model."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url or settings.COST_CALCULATOR_URL
        if not self.url:
            raise ValueError("COST_CALCULATOR_URL not set")
        self.api_key = api_key or settings.COST_CALCULATOR_API_KEY
        self.timeout = timeout or settings.COST_CALCULATOR_TIMEOUT
        self.fallback = LocalCostCalculator()

    def calculator_name(self) -> str:
        return f"remote/{self.url}"

    def _payload(self, cost_input: CostCalculationInput) -> dict:
        employment_type = _coerce_employment_type(cost_input.employment_type)
        return {
            "wage_rate": cost_input.hourly_rate or 0,
            "hours_worked": cost_input.hours or 0,
            "employment_type": employment_type.value if employment_type else EmploymentType.HOURLY.value,
            "in_ft_education": bool(cost_input.is_full_time_student),
            "annual_salary": cost_input.annual_salary or 0,
            "contractor_rate": cost_input.contractor_rate or 0,
        }

    def calculate(self, cost_input: CostCalculationInput) -> CostCalculationResult:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        try:
            response = httpx.post(self.url, json=self._payload(cost_input), headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            return CostCalculationResult(
                basic_pay=float(data["basic_pay"]),
                ni_cost=float(data["ni_cost"]),
                pension_cost=float(data["pension_cost"]),
                total_cost=float(data["total_cost"]),
            )
        except httpx.HTTPStatusError as e:
            logger.error(f"Cost calculator HTTP error: {e.response.status_code} - {e.response.text}")
        except httpx.HTTPError as e:
            logger.error(f"Cost calculator unreachable: {e}")
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Cost calculator returned an unusable payload: {e}")

        logger.warning("Falling back to local employer cost calculation")
        return self.fallback.calculate(cost_input)


def get_cost_calculator() -> BaseCostCalculator:
    """Remote calculator when one is configured, otherwise the local model."""
    if settings.COST_CALCULATOR_URL:
        return RemoteCostCalculator()
    return LocalCostCalculator()
