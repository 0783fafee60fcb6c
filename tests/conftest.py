import os

# settings are read at import time, so the test database must be set first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("COST_CALCULATOR_URL", None)

import pytest
from datetime import date, time, timedelta

from hiq_rota.db.database import Base, engine, SessionLocal
import hiq_rota.db.models  # noqa: F401  registers every table on Base.metadata
from hiq_rota.services.scheduling.types import (
    AlgorithmConfig,
    EmploymentType,
    GlobalConstraints,
    JobRole,
    SchedulingContext,
    ShiftRule,
    StaffMember,
)


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2025, 1, 20)


def full_week_forecast(amount: float = 1000.0) -> dict[date, float]:
    monday = get_test_monday()
    return {monday + timedelta(days=i): amount for i in range(7)}


def make_context(staff, job_roles, shift_rules=None, **kwargs) -> SchedulingContext:
    monday = get_test_monday()
    return SchedulingContext(
        location_id=1,
        week_start=monday,
        week_end=monday + timedelta(days=6),
        revenue_forecast=kwargs.pop("revenue_forecast", full_week_forecast()),
        staff=staff,
        job_roles=job_roles,
        shift_rules=shift_rules or [],
        **kwargs,
    )


@pytest.fixture
def bar_role() -> JobRole:
    return JobRole(id=1, title="Bartender", is_kitchen=False, default_wage_rate=10.0)


@pytest.fixture
def kitchen_roles() -> list[JobRole]:
    return [
        JobRole(id=2, title="Chef de Partie", is_kitchen=True, default_wage_rate=12.0),
        JobRole(id=3, title="Kitchen Porter", is_kitchen=True, default_wage_rate=10.5),
        JobRole(id=4, title="Team Member", is_kitchen=False, default_wage_rate=10.0),
    ]


@pytest.fixture
def hourly_bartender() -> StaffMember:
    return StaffMember(
        id=1, first_name="Alice", last_name="Smith",
        employment_type=EmploymentType.HOURLY, wage_rate=10.0,
        job_title="Bartender",
    )


@pytest.fixture
def lunch_rule() -> ShiftRule:
    # Mon-Fri 12:00-17:00 bar cover, one person
    return ShiftRule(
        id=1, job_role_id=1,
        start_time=time(12, 0), end_time=time(17, 0),
        days_of_week=["mon", "tue", "wed", "thu", "fri"],
        min_staff=1, name="Lunch bar",
    )


@pytest.fixture
def default_constraints() -> GlobalConstraints:
    return GlobalConstraints()


@pytest.fixture
def default_config() -> AlgorithmConfig:
    return AlgorithmConfig()


@pytest.fixture()
def db():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def seeded_location(db) -> dict:
    """A bar with one hourly bartender and a Mon-Fri lunch rule, ids returned by name."""
    from hiq_rota.db.models import JobRoles, Locations, ShiftRules, StaffProfiles

    location = Locations(name="The Crown")
    db.add(location)
    db.flush()

    bartender = JobRoles(location_id=location.id, title="Bartender", default_wage_rate=10.0)
    db.add(bartender)
    db.flush()

    alice = StaffProfiles(
        location_id=location.id, first_name="Alice", last_name="Smith",
        job_title="Bartender", wage_rate=10.0,
    )
    db.add(alice)

    rule = ShiftRules(
        location_id=location.id, job_role_id=bartender.id, name="Lunch bar",
        start_time=time(12, 0), end_time=time(17, 0),
        days_of_week=["mon", "tue", "wed", "thu", "fri"], min_staff=1,
    )
    db.add(rule)
    db.commit()

    return {
        "location_id": location.id,
        "job_role_id": bartender.id,
        "staff_id": alice.id,
        "shift_rule_id": rule.id,
    }
