from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db, get_location_or_404
from hiq_rota.db.models.hi_score_evaluations import HiScoreEvaluations
from hiq_rota.db.models.staff_profiles import StaffProfiles
from hiq_rota.schemas.staff import (
    StaffProfileCreate,
    StaffProfileUpdate,
    StaffProfileResponse,
    HiScoreEvaluationCreate,
    HiScoreEvaluationResponse,
)

router = APIRouter(prefix="/staff", tags=["staff"])


def _get_profile_or_404(db: Session, staff_id: int) -> StaffProfiles:
    profile = db.query(StaffProfiles).filter(StaffProfiles.id == staff_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Staff profile not found")
    return profile


@router.post("", response_model=StaffProfileResponse, status_code=status.HTTP_201_CREATED)
def create_staff_profile(
    payload: StaffProfileCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)

    profile = StaffProfiles(**payload.model_dump())
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@router.get("", response_model=List[StaffProfileResponse])
def list_staff_profiles(
    location_id: Optional[int] = None,
    available_for_rota: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(StaffProfiles)
    if location_id:
        query = query.filter(StaffProfiles.location_id == location_id)
    if available_for_rota is not None:
        query = query.filter(StaffProfiles.available_for_rota == available_for_rota)

    return query.order_by(StaffProfiles.id).offset(skip).limit(limit).all()


@router.get("/{staff_id}", response_model=StaffProfileResponse)
def get_staff_profile(
    staff_id: int,
    db: Session = Depends(get_db),
):
    return _get_profile_or_404(db, staff_id)


@router.put("/{staff_id}", response_model=StaffProfileResponse)
def update_staff_profile(
    staff_id: int,
    payload: StaffProfileUpdate,
    db: Session = Depends(get_db),
):
    profile = _get_profile_or_404(db, staff_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile


@router.post("/{staff_id}/evaluations", response_model=HiScoreEvaluationResponse, status_code=status.HTTP_201_CREATED)
def add_evaluation(
    staff_id: int,
    payload: HiScoreEvaluationCreate,
    db: Session = Depends(get_db),
):
    _get_profile_or_404(db, staff_id)

    evaluation = HiScoreEvaluations(profile_id=staff_id, **payload.model_dump())
    db.add(evaluation)
    db.commit()
    db.refresh(evaluation)
    return evaluation


@router.get("/{staff_id}/evaluations", response_model=List[HiScoreEvaluationResponse])
def list_evaluations(
    staff_id: int,
    db: Session = Depends(get_db),
):
    _get_profile_or_404(db, staff_id)
    return db.query(HiScoreEvaluations).filter(HiScoreEvaluations.profile_id == staff_id).all()
