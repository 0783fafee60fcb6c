import pytest

from hiq_rota.services.scheduling.types import AlgorithmConfig, EmploymentType, StaffMember
from hiq_rota.services.scheduling.ranking import (
    average_hi_score,
    hourly_cost_estimate,
    is_manager_title,
    priority_score,
    rank_candidates,
)


def _staff(id, **kwargs) -> StaffMember:
    return StaffMember(id=id, first_name=f"Staff{id}", **kwargs)


class TestAverageHiScore:

    def test_no_evaluations_is_zero(self):
        assert average_hi_score([]) == 0

    def test_mean_of_scores(self):
        assert average_hi_score([60, 80]) == pytest.approx(70)

    def test_missing_scores_count_as_zero(self):
        assert average_hi_score([90, None]) == pytest.approx(45)


class TestIsManagerTitle:

    def test_manager_titles(self):
        assert is_manager_title("General Manager") is True
        assert is_manager_title("assistant manager") is True

    def test_other_titles(self):
        assert is_manager_title("Bartender") is False
        assert is_manager_title(None) is False


class TestPriorityScore:

    def test_default_weights(self):
        staff = _staff(1, employment_type=EmploymentType.SALARIED, is_manager=True, hi_score=75)
        assert priority_score(staff, AlgorithmConfig()) == pytest.approx(100 + 50 + 75)

    def test_hourly_non_manager_is_hi_score_only(self):
        staff = _staff(1, hi_score=40)
        assert priority_score(staff, AlgorithmConfig()) == pytest.approx(40)

    def test_custom_weights(self):
        config = AlgorithmConfig(salaried_weight=10, manager_weight=5, hi_score_weight=0.5)
        staff = _staff(1, employment_type=EmploymentType.SALARIED, hi_score=20)
        assert priority_score(staff, config) == pytest.approx(20)


class TestRankCandidates:

    def test_salaried_before_hourly(self):
        hourly = _staff(1, hi_score=90)
        salaried = _staff(2, employment_type=EmploymentType.SALARIED)
        ranked = rank_candidates([hourly, salaried], AlgorithmConfig())
        assert [s.id for s in ranked] == [2, 1]

    def test_ties_broken_by_lower_id(self):
        ranked = rank_candidates([_staff(7), _staff(3), _staff(5)], AlgorithmConfig())
        assert [s.id for s in ranked] == [3, 5, 7]

    def test_ranking_is_stable_across_input_order(self):
        staff = [_staff(i, hi_score=i % 3) for i in range(1, 10)]
        first = [s.id for s in rank_candidates(staff, AlgorithmConfig())]
        second = [s.id for s in rank_candidates(list(reversed(staff)), AlgorithmConfig())]
        assert first == second

    def test_empty(self):
        assert rank_candidates([], AlgorithmConfig()) == []


class TestHourlyCostEstimate:

    def test_below_hourly_threshold_pension_only(self):
        assert hourly_cost_estimate(4) == pytest.approx(4 * 1.03)

    def test_above_hourly_threshold_adds_ni(self):
        # 175 / 40 = 4.375 per hour NI free
        expected = 10 + (10 - 4.375) * 0.138 + 10 * 0.03
        assert hourly_cost_estimate(10) == pytest.approx(expected)

    def test_no_rate(self):
        assert hourly_cost_estimate(None) == 0
