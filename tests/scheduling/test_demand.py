import pytest
from datetime import date, time, timedelta

from hiq_rota.services.scheduling.types import (
    AlgorithmConfig,
    JobRole,
    RevenueThreshold,
    ShiftRule,
    TroughPeriod,
)
from hiq_rota.services.scheduling.demand import (
    apply_troughs,
    build_requirements,
    expand_shift_rules_for_day,
    expand_thresholds_for_day,
    find_threshold,
    window_minutes,
)

from conftest import get_test_monday, make_context


ALL_DAYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def _trough(start: time, end: time) -> TroughPeriod:
    return TroughPeriod(start_time=start, end_time=end, days_of_week=ALL_DAYS)


class TestWindowMinutes:

    def test_same_day(self):
        assert window_minutes(time(9, 0), time(17, 0)) == (540, 1020)

    def test_overnight_rolls_past_midnight(self):
        assert window_minutes(time(18, 0), time(2, 0)) == (1080, 1560)

    def test_equal_times_are_empty(self):
        assert window_minutes(time(9, 0), time(9, 0)) == (540, 540)


class TestApplyTroughs:

    def test_no_troughs_keeps_window(self):
        assert apply_troughs(600, 1320, [], AlgorithmConfig()) == [(600, 1320, False)]

    def test_window_inside_trough_is_suppressed(self):
        troughs = [_trough(time(13, 0), time(17, 0))]
        assert apply_troughs(_minutes(time(14, 0)), _minutes(time(16, 0)), troughs, AlgorithmConfig()) == []

    def test_overlap_at_start_shrinks_window(self):
        troughs = [_trough(time(12, 0), time(14, 0))]
        # 14:00-20:00 is 6h, longer than a part shift
        assert apply_troughs(720, 1200, troughs, AlgorithmConfig()) == [(840, 1200, False)]

    def test_overlap_at_end_gives_part_shift(self):
        troughs = [_trough(time(15, 0), time(17, 0))]
        assert apply_troughs(720, 1020, troughs, AlgorithmConfig()) == [(720, 900, True)]

    def test_trough_in_middle_splits_into_part_shifts(self):
        troughs = [_trough(time(15, 0), time(17, 0))]
        assert apply_troughs(600, 1320, troughs, AlgorithmConfig()) == [
            (600, 900, True),
            (1020, 1320, True),
        ]

    def test_middle_trough_ignored_when_part_shifts_disabled(self):
        troughs = [_trough(time(15, 0), time(17, 0))]
        config = AlgorithmConfig(enable_part_shifts=False)
        assert apply_troughs(600, 1320, troughs, config) == [(600, 1320, False)]

    def test_edge_shrink_still_applies_when_part_shifts_disabled(self):
        troughs = [_trough(time(15, 0), time(17, 0))]
        config = AlgorithmConfig(enable_part_shifts=False)
        assert apply_troughs(720, 1020, troughs, config) == [(720, 900, False)]

    def test_segments_below_minimum_are_dropped(self):
        troughs = [_trough(time(13, 0), time(17, 0))]
        # leaves 11:00-13:00 and 17:00-18:00, both under 3h
        assert apply_troughs(660, 1080, troughs, AlgorithmConfig()) == []

    def test_trough_after_midnight_cuts_overnight_tail(self):
        troughs = [_trough(time(0, 0), time(1, 0))]
        # 18:00-02:00 loses 00:00-01:00; the 1h tail is too short to keep
        assert apply_troughs(1080, 1560, troughs, AlgorithmConfig()) == [(1080, 1440, False)]


class TestExpandShiftRulesForDay:

    def test_rule_applies_on_listed_day(self, lunch_rule):
        reqs = expand_shift_rules_for_day(get_test_monday(), [lunch_rule], [], AlgorithmConfig())
        assert len(reqs) == 1
        assert reqs[0].start_time == time(12, 0)
        assert reqs[0].end_time == time(17, 0)
        assert reqs[0].hours == 5
        assert reqs[0].shift_rule_id == 1

    def test_rule_skipped_on_other_days(self, lunch_rule):
        saturday = get_test_monday() + timedelta(days=5)
        assert expand_shift_rules_for_day(saturday, [lunch_rule], [], AlgorithmConfig()) == []

    def test_archived_rule_skipped(self, lunch_rule):
        lunch_rule.archived = True
        assert expand_shift_rules_for_day(get_test_monday(), [lunch_rule], [], AlgorithmConfig()) == []

    def test_break_deducted_from_paid_hours(self):
        rule = ShiftRule(id=2, job_role_id=1, start_time=time(9, 0), end_time=time(18, 0),
                         days_of_week=["mon"], break_minutes=30)
        reqs = expand_shift_rules_for_day(get_test_monday(), [rule], [], AlgorithmConfig())
        assert reqs[0].hours == pytest.approx(8.5)

    def test_overnight_rule_ends_next_day(self):
        rule = ShiftRule(id=3, job_role_id=1, start_time=time(20, 0), end_time=time(2, 0),
                         days_of_week=["mon"])
        req = expand_shift_rules_for_day(get_test_monday(), [rule], [], AlgorithmConfig())[0]
        assert req.hours == 6
        assert req.end_datetime.date() == get_test_monday() + timedelta(days=1)

    def test_rule_with_equal_times_skipped(self):
        rule = ShiftRule(id=5, job_role_id=1, start_time=time(9, 0), end_time=time(9, 0),
                         days_of_week=["mon"])
        assert expand_shift_rules_for_day(get_test_monday(), [rule], [], AlgorithmConfig()) == []

    def test_empty_trough_ignored(self, lunch_rule):
        troughs = [TroughPeriod(start_time=time(14, 0), end_time=time(14, 0), days_of_week=["mon"])]
        reqs = expand_shift_rules_for_day(get_test_monday(), [lunch_rule], troughs, AlgorithmConfig())
        assert [(r.hours, r.is_part_shift) for r in reqs] == [(5, False)]

    def test_part_shift_flag_and_no_break(self):
        rule = ShiftRule(id=4, job_role_id=1, start_time=time(10, 0), end_time=time(22, 0),
                         days_of_week=["mon"], break_minutes=30)
        troughs = [TroughPeriod(start_time=time(15, 0), end_time=time(17, 0), days_of_week=["mon"])]
        reqs = expand_shift_rules_for_day(get_test_monday(), [rule], troughs, AlgorithmConfig())
        assert [r.is_part_shift for r in reqs] == [True, True]
        assert all(r.break_minutes == 0 for r in reqs)

    def test_trough_for_other_day_ignored(self, lunch_rule):
        troughs = [TroughPeriod(start_time=time(12, 0), end_time=time(17, 0), days_of_week=["tue"])]
        reqs = expand_shift_rules_for_day(get_test_monday(), [lunch_rule], troughs, AlgorithmConfig())
        assert len(reqs) == 1


BANDS = [
    RevenueThreshold(name="quiet", revenue_min=100, revenue_max=1000, foh_min_staff=1),
    RevenueThreshold(name="busy", revenue_min=1000.01, revenue_max=3000, foh_min_staff=2,
                     kitchen_min_staff=1),
]


class TestFindThreshold:

    def test_band_containing_revenue(self):
        assert find_threshold(500, BANDS).name == "quiet"
        assert find_threshold(2000, BANDS).name == "busy"

    def test_below_lowest_band(self):
        assert find_threshold(50, BANDS).name == "quiet"

    def test_above_highest_band(self):
        assert find_threshold(9000, BANDS).name == "busy"

    def test_no_bands(self):
        assert find_threshold(500, []) is None


class TestExpandThresholdsForDay:

    def test_weekday_segments(self, kitchen_roles):
        reqs = expand_thresholds_for_day(get_test_monday(), 2000, BANDS, kitchen_roles)

        # day and evening, FOH and kitchen, no KP staff in the band
        assert len(reqs) == 4
        foh = [r for r in reqs if r.job_role_id == 4]
        assert {(r.start_time, r.end_time) for r in foh} == {
            (time(11, 0), time(16, 0)),
            (time(17, 0), time(22, 0)),
        }
        assert all(r.min_staff == 2 for r in foh)
        assert all(r.break_minutes == 30 for r in reqs)
        assert foh[0].hours == pytest.approx(4.5)

    def test_weekend_segments(self, kitchen_roles):
        saturday = get_test_monday() + timedelta(days=5)
        reqs = expand_thresholds_for_day(saturday, 500, BANDS, kitchen_roles)
        assert {(r.start_time, r.end_time) for r in reqs} == {
            (time(10, 0), time(17, 0)),
            (time(16, 30), time(23, 0)),
        }

    def test_category_without_role_skipped(self):
        roles = [JobRole(id=9, title="Head Chef", is_kitchen=True)]
        reqs = expand_thresholds_for_day(get_test_monday(), 2000, BANDS, roles)
        assert {r.job_role_id for r in reqs} == {9}


class TestBuildRequirements:

    def test_closed_days_produce_nothing(self, hourly_bartender, bar_role, lunch_rule):
        monday = get_test_monday()
        context = make_context(
            [hourly_bartender], [bar_role], [lunch_rule],
            revenue_forecast={monday: 800.0, monday + timedelta(days=1): 0.0},
        )
        reqs = build_requirements(context)
        assert [r.date for r in reqs] == [monday]

    def test_days_without_rules_fall_back_to_thresholds(self, kitchen_roles, lunch_rule):
        lunch_rule.job_role_id = 4
        context = make_context([], kitchen_roles, [lunch_rule], revenue_thresholds=BANDS)
        reqs = build_requirements(context)

        weekend = {get_test_monday() + timedelta(days=5), get_test_monday() + timedelta(days=6)}
        weekday_reqs = [r for r in reqs if r.date not in weekend]
        weekend_reqs = [r for r in reqs if r.date in weekend]
        assert all(r.shift_rule_id == 1 for r in weekday_reqs)
        assert weekend_reqs and all(r.shift_rule_id is None for r in weekend_reqs)

    def test_order_is_date_start_priority(self, bar_role):
        rules = [
            ShiftRule(id=10, job_role_id=1, start_time=time(18, 0), end_time=time(23, 0),
                      days_of_week=["mon", "tue"], priority=1),
            ShiftRule(id=11, job_role_id=1, start_time=time(12, 0), end_time=time(16, 0),
                      days_of_week=["mon", "tue"], priority=3),
            ShiftRule(id=12, job_role_id=1, start_time=time(12, 0), end_time=time(16, 0),
                      days_of_week=["mon", "tue"], priority=1),
        ]
        context = make_context([], [bar_role], rules)
        reqs = build_requirements(context)
        assert [r.shift_rule_id for r in reqs] == [12, 11, 10, 12, 11, 10]
