import pytest
from datetime import time, timedelta

from hiq_rota.db.models import (
    GlobalConstraints,
    HiScoreEvaluations,
    JobRoleMappings,
    RevenueThresholds,
    RotaAlgorithmConfigs,
    ShiftRules,
    StaffProfiles,
    TroughPeriods,
    EmploymentType,
    WageTargetType,
)
from hiq_rota.services.scheduling.data_loader import (
    load_algorithm_config,
    load_global_constraints,
    load_role_mappings,
    load_scheduling_context,
    load_shift_rules,
    load_staff,
    load_trough_periods,
)
from hiq_rota.services.scheduling import types

from conftest import full_week_forecast, get_test_monday


class TestLoadStaff:

    def test_hi_score_is_average_of_evaluations(self, db, seeded_location):
        staff_id = seeded_location["staff_id"]
        db.add_all([
            HiScoreEvaluations(profile_id=staff_id, weighted_score=60),
            HiScoreEvaluations(profile_id=staff_id, weighted_score=80),
        ])
        db.commit()

        staff = load_staff(db, seeded_location["location_id"])

        assert len(staff) == 1
        assert staff[0].hi_score == pytest.approx(70)
        assert staff[0].employment_type == types.EmploymentType.HOURLY

    def test_manager_derived_from_title(self, db, seeded_location):
        db.add(StaffProfiles(
            location_id=seeded_location["location_id"], first_name="Mo",
            job_title="Bar Manager", employment_type=EmploymentType.SALARIED, annual_salary=30000,
        ))
        db.commit()

        staff = {s.first_name: s for s in load_staff(db, seeded_location["location_id"])}

        assert staff["Mo"].is_manager is True
        assert staff["Mo"].employment_type == types.EmploymentType.SALARIED
        assert staff["Alice"].is_manager is False

    def test_unavailable_staff_still_loaded(self, db, seeded_location):
        db.add(StaffProfiles(
            location_id=seeded_location["location_id"], first_name="Zed",
            job_title="Bartender", available_for_rota=False,
        ))
        db.commit()

        staff = load_staff(db, seeded_location["location_id"])

        assert [s.available_for_rota for s in staff] == [True, False]


class TestLoadConfiguration:

    def test_archived_rules_excluded(self, db, seeded_location):
        db.add(ShiftRules(
            location_id=seeded_location["location_id"], job_role_id=seeded_location["job_role_id"],
            start_time=time(18, 0), end_time=time(23, 0), days_of_week=["Sat"], archived=True,
        ))
        db.commit()

        rules = load_shift_rules(db, seeded_location["location_id"])

        assert [r.id for r in rules] == [seeded_location["shift_rule_id"]]

    def test_day_codes_normalised(self, db, seeded_location):
        db.add(TroughPeriods(
            location_id=seeded_location["location_id"],
            start_time=time(15, 0), end_time=time(17, 0), days_of_week=["Monday", "TUE"],
        ))
        db.commit()

        troughs = load_trough_periods(db, seeded_location["location_id"])

        assert troughs[0].days_of_week == ["mon", "tue"]

    def test_defaults_when_unconfigured(self, db, seeded_location):
        assert load_global_constraints(db, seeded_location["location_id"]) == types.GlobalConstraints()
        assert load_algorithm_config(db, seeded_location["location_id"]) == types.AlgorithmConfig()

    def test_configured_rows(self, db, seeded_location):
        location_id = seeded_location["location_id"]
        db.add(GlobalConstraints(
            location_id=location_id, wage_target_type=WageTargetType.ABSOLUTE,
            wage_target_value=2500, max_shifts_per_week=4,
        ))
        db.add(RotaAlgorithmConfigs(location_id=location_id, enable_part_shifts=False))
        db.commit()

        constraints = load_global_constraints(db, location_id)
        config = load_algorithm_config(db, location_id)

        assert constraints.wage_target_type == types.WageTargetType.ABSOLUTE
        assert constraints.max_shifts_per_week == 4
        assert constraints.min_rest_hours_between_shifts == 11
        assert config.enable_part_shifts is False

    def test_role_mappings(self, db, seeded_location):
        db.add(JobRoleMappings(
            location_id=seeded_location["location_id"], job_title="Mixologist",
            job_role_id=seeded_location["job_role_id"], priority=2,
        ))
        db.commit()

        mappings = load_role_mappings(db, seeded_location["location_id"])

        assert mappings == [types.RoleMapping(job_title="Mixologist", job_role_id=seeded_location["job_role_id"], priority=2)]


class TestLoadSchedulingContext:

    def test_full_context(self, db, seeded_location):
        location_id = seeded_location["location_id"]
        db.add(RevenueThresholds(location_id=location_id, name="quiet", revenue_min=0, revenue_max=1000))
        db.commit()

        monday = get_test_monday()
        context = load_scheduling_context(
            db, location_id, monday, monday + timedelta(days=6), full_week_forecast(),
        )

        assert context.location_id == location_id
        assert len(context.dates) == 7
        assert [s.id for s in context.staff] == [seeded_location["staff_id"]]
        assert [r.title for r in context.job_roles] == ["Bartender"]
        assert len(context.shift_rules) == 1
        assert [t.name for t in context.revenue_thresholds] == ["quiet"]

    def test_other_locations_not_loaded(self, db, seeded_location):
        monday = get_test_monday()
        context = load_scheduling_context(db, 999, monday, monday + timedelta(days=6), {})
        assert context.staff == []
        assert context.shift_rules == []
