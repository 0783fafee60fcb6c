import pytest
from datetime import date, datetime, time, timedelta

from hiq_rota.services.scheduling.types import (
    GlobalConstraints,
    ScheduledShift,
    WageTargetType,
)
from hiq_rota.services.scheduling.constraints import (
    check_wage_target,
    consecutive_run_length,
    gap_hours_between,
    has_sufficient_rest,
    longest_consecutive_run,
    validate_schedule,
    would_exceed_consecutive_days,
)

from conftest import get_test_monday


def _shift(staff_id, day: date, start: time, end: time) -> ScheduledShift:
    start_dt = datetime.combine(day, start)
    end_dt = datetime.combine(day, end)
    if end_dt <= start_dt:
        end_dt += timedelta(days=1)
    return ScheduledShift(
        staff_id=staff_id, job_role_id=1, date=day,
        start_time=start, end_time=end,
        hours=(end_dt - start_dt).total_seconds() / 3600,
        start_datetime=start_dt, end_datetime=end_dt,
    )


class TestGapHoursBetween:

    def test_gap_after(self):
        monday = get_test_monday()
        gap = gap_hours_between(
            datetime.combine(monday, time(9, 0)), datetime.combine(monday, time(17, 0)),
            datetime.combine(monday + timedelta(days=1), time(9, 0)),
            datetime.combine(monday + timedelta(days=1), time(17, 0)),
        )
        assert gap == 16

    def test_overlap_is_negative(self):
        monday = get_test_monday()
        gap = gap_hours_between(
            datetime.combine(monday, time(9, 0)), datetime.combine(monday, time(17, 0)),
            datetime.combine(monday, time(15, 0)), datetime.combine(monday, time(20, 0)),
        )
        assert gap == -2


class TestHasSufficientRest:

    def test_no_existing_shifts(self):
        monday = get_test_monday()
        assert has_sufficient_rest(
            [], datetime.combine(monday, time(9, 0)), datetime.combine(monday, time(17, 0)), 11,
        ) is True

    def test_late_then_early_rejected(self):
        monday = get_test_monday()
        late = _shift(1, monday, time(17, 0), time(23, 0))
        tuesday = monday + timedelta(days=1)
        # 23:00 -> 07:00 is only 8 hours
        assert has_sufficient_rest(
            [late], datetime.combine(tuesday, time(7, 0)), datetime.combine(tuesday, time(12, 0)), 11,
        ) is False

    def test_exactly_min_rest_allowed(self):
        monday = get_test_monday()
        late = _shift(1, monday, time(17, 0), time(23, 0))
        tuesday = monday + timedelta(days=1)
        assert has_sufficient_rest(
            [late], datetime.combine(tuesday, time(10, 0)), datetime.combine(tuesday, time(15, 0)), 11,
        ) is True

    def test_overnight_shift_counts_real_end(self):
        monday = get_test_monday()
        overnight = _shift(1, monday, time(20, 0), time(2, 0))
        tuesday = monday + timedelta(days=1)
        # ends Tue 02:00, so Tue 12:00 is 10 hours later
        assert has_sufficient_rest(
            [overnight], datetime.combine(tuesday, time(12, 0)), datetime.combine(tuesday, time(18, 0)), 11,
        ) is False


class TestConsecutiveDays:

    def test_run_length_joins_both_sides(self):
        monday = get_test_monday()
        worked = {monday, monday + timedelta(days=1), monday + timedelta(days=3)}
        assert consecutive_run_length(worked, monday + timedelta(days=2)) == 4

    def test_would_exceed(self):
        monday = get_test_monday()
        worked = {monday + timedelta(days=i) for i in range(6)}
        assert would_exceed_consecutive_days(worked, monday + timedelta(days=6), 6) is True
        assert would_exceed_consecutive_days(worked, monday + timedelta(days=6), 7) is False

    def test_longest_run(self):
        monday = get_test_monday()
        worked = {monday, monday + timedelta(days=1), monday + timedelta(days=3),
                  monday + timedelta(days=4), monday + timedelta(days=5)}
        assert longest_consecutive_run(worked) == 3
        assert longest_consecutive_run(set()) == 0


class TestCheckWageTarget:

    def test_percent_target(self):
        check = check_wage_target(GlobalConstraints(), total_cost=300, cost_percentage=25, total_hours=30)
        assert check.target_type == WageTargetType.PERCENT
        assert check.actual == 25
        assert check.met is True

    def test_percent_target_exceeded(self):
        check = check_wage_target(GlobalConstraints(), total_cost=300, cost_percentage=30, total_hours=30)
        assert check.met is False

    def test_absolute_target(self):
        constraints = GlobalConstraints(wage_target_type=WageTargetType.ABSOLUTE, wage_target_value=500)
        check = check_wage_target(constraints, total_cost=600, cost_percentage=10, total_hours=30)
        assert check.actual == 600
        assert check.met is False

    def test_hours_target(self):
        constraints = GlobalConstraints(wage_target_type=WageTargetType.HOURS, wage_target_value=40)
        check = check_wage_target(constraints, total_cost=600, cost_percentage=50, total_hours=40)
        assert check.actual == 40
        assert check.met is True


class TestValidateSchedule:

    def test_valid_schedule(self):
        monday = get_test_monday()
        shifts = [_shift(1, monday + timedelta(days=i), time(9, 0), time(17, 0)) for i in range(5)]
        result = validate_schedule(shifts, GlobalConstraints())
        assert result['valid'] is True

    def test_detects_every_violation(self):
        monday = get_test_monday()
        shifts = [_shift(1, monday + timedelta(days=i), time(9, 0), time(17, 0)) for i in range(7)]
        shifts.append(_shift(2, monday, time(17, 0), time(23, 0)))
        shifts.append(_shift(2, monday + timedelta(days=1), time(7, 0), time(12, 0)))

        result = validate_schedule(shifts, GlobalConstraints())

        assert result['valid'] is False
        assert result['max_shift_violations'] == {1: 7}
        assert result['consecutive_day_violations'] == {1: 7}
        assert [v[0] for v in result['rest_violations']] == [2]

    def test_unfilled_shifts_ignored(self):
        monday = get_test_monday()
        shifts = [_shift(None, monday + timedelta(days=i), time(9, 0), time(17, 0)) for i in range(7)]
        assert validate_schedule(shifts, GlobalConstraints())['valid'] is True
