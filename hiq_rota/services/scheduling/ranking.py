"""
Staff ranking for shift assignment.
Higher priority candidates are offered each shift first.
"""

from typing import Iterable, Optional

from .costs import NI_RATE, PENSION_RATE, WEEKLY_NI_THRESHOLD
from .types import AlgorithmConfig, EmploymentType, StaffMember


MANAGER_TITLE_KEYWORDS = ("manager",)


def is_manager_title(job_title: Optional[str]) -> bool:
    if not job_title:
        return False
    title = job_title.lower()
    return any(keyword in title for keyword in MANAGER_TITLE_KEYWORDS)


def average_hi_score(weighted_scores: Iterable[Optional[float]]) -> float:
    """Average of evaluation weighted scores. Missing scores count as 0."""
    scores = [score or 0 for score in weighted_scores]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def priority_score(staff: StaffMember, config: AlgorithmConfig) -> float:
    score = 0.0
    if staff.employment_type == EmploymentType.SALARIED:
        score += config.salaried_weight
    if staff.is_manager:
        score += config.manager_weight
    score += config.hi_score_weight * (staff.hi_score or 0)
    return score


def rank_candidates(staff: list[StaffMember], config: AlgorithmConfig) -> list[StaffMember]:
    """Order staff by priority score, highest first. Ties go to the lower staff id."""
    return sorted(staff, key=lambda s: (-priority_score(s, config), s.id))


def hourly_cost_estimate(wage_rate: Optional[float]) -> float:
    """
    Rough employer cost per hour for an hourly rate, as shown on the ranking view.
    NI is charged on the part of the rate above the weekly threshold spread over 40 hours.
    """
    rate = wage_rate or 0
    hourly_threshold = WEEKLY_NI_THRESHOLD / 40
    ni = (rate - hourly_threshold) * NI_RATE if rate > hourly_threshold else 0
    return rate + ni + rate * PENSION_RATE
