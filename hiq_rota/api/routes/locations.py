from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db, get_location_or_404
from hiq_rota.db.models.locations import Locations
from hiq_rota.db.models.rota_settings import GlobalConstraints, RotaAlgorithmConfigs
from hiq_rota.db.models.staff_profiles import EmploymentType
from hiq_rota.schemas.locations import LocationCreate, LocationUpdate, LocationResponse
from hiq_rota.schemas.rota_settings import (
    GlobalConstraintsUpdate,
    GlobalConstraintsResponse,
    AlgorithmConfigUpdate,
    AlgorithmConfigResponse,
)
from hiq_rota.schemas.staff import StaffRankingEntry
from hiq_rota.services.scheduling.data_loader import load_algorithm_config, load_staff
from hiq_rota.services.scheduling.ranking import hourly_cost_estimate, priority_score, rank_candidates

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    payload: LocationCreate,
    db: Session = Depends(get_db),
):
    existing = db.query(Locations).filter(Locations.name == payload.name).first()
    if existing:
        raise HTTPException(status_code=400, detail="Location name already exists")

    location = Locations(**payload.model_dump())
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


@router.get("", response_model=List[LocationResponse])
def list_locations(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return db.query(Locations).offset(skip).limit(limit).all()


@router.get("/{location_id}", response_model=LocationResponse)
def get_location(
    location_id: int,
    db: Session = Depends(get_db),
):
    return get_location_or_404(db, location_id)


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: int,
    payload: LocationUpdate,
    db: Session = Depends(get_db),
):
    location = get_location_or_404(db, location_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(location, field, value)

    db.commit()
    db.refresh(location)
    return location


# Global rules and algorithm config: one row per location, PUT creates or replaces

@router.get("/{location_id}/global-constraints", response_model=GlobalConstraintsResponse)
def get_global_constraints(
    location_id: int,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, location_id)
    constraints = db.query(GlobalConstraints).filter(GlobalConstraints.location_id == location_id).first()
    if not constraints:
        raise HTTPException(status_code=404, detail="Global constraints not configured")
    return constraints


@router.put("/{location_id}/global-constraints", response_model=GlobalConstraintsResponse)
def upsert_global_constraints(
    location_id: int,
    payload: GlobalConstraintsUpdate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, location_id)
    constraints = db.query(GlobalConstraints).filter(GlobalConstraints.location_id == location_id).first()
    if not constraints:
        constraints = GlobalConstraints(location_id=location_id)
        db.add(constraints)

    for field, value in payload.model_dump().items():
        setattr(constraints, field, value)

    db.commit()
    db.refresh(constraints)
    return constraints


@router.get("/{location_id}/algorithm-config", response_model=AlgorithmConfigResponse)
def get_algorithm_config(
    location_id: int,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, location_id)
    config = db.query(RotaAlgorithmConfigs).filter(RotaAlgorithmConfigs.location_id == location_id).first()
    if not config:
        raise HTTPException(status_code=404, detail="Algorithm config not configured")
    return config


@router.put("/{location_id}/algorithm-config", response_model=AlgorithmConfigResponse)
def upsert_algorithm_config(
    location_id: int,
    payload: AlgorithmConfigUpdate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, location_id)
    config = db.query(RotaAlgorithmConfigs).filter(RotaAlgorithmConfigs.location_id == location_id).first()
    if not config:
        config = RotaAlgorithmConfigs(location_id=location_id)
        db.add(config)

    for field, value in payload.model_dump().items():
        setattr(config, field, value)

    db.commit()
    db.refresh(config)
    return config


@router.get("/{location_id}/staff-ranking", response_model=List[StaffRankingEntry])
def get_staff_ranking(
    location_id: int,
    include_unavailable: bool = False,
    db: Session = Depends(get_db),
):
    """Staff in the order the scheduler offers them shifts."""
    get_location_or_404(db, location_id)

    config = load_algorithm_config(db, location_id)
    staff = load_staff(db, location_id)
    if not include_unavailable:
        staff = [s for s in staff if s.available_for_rota]

    return [
        StaffRankingEntry(
            rank=rank,
            staff_id=s.id,
            name=s.full_name,
            job_title=s.job_title,
            employment_type=EmploymentType(s.employment_type.value),
            is_manager=s.is_manager,
            hi_score=s.hi_score,
            priority_score=priority_score(s, config),
            hourly_cost_estimate=(
                hourly_cost_estimate(s.wage_rate) if s.employment_type.value == "hourly" else None
            ),
            available_for_rota=s.available_for_rota,
        )
        for rank, s in enumerate(rank_candidates(staff, config), start=1)
    ]
