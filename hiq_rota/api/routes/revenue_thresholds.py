from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db, get_location_or_404
from hiq_rota.db.models.revenue_thresholds import RevenueThresholds
from hiq_rota.schemas.revenue_thresholds import (
    RevenueThresholdCreate,
    RevenueThresholdUpdate,
    RevenueThresholdResponse,
)

router = APIRouter(prefix="/revenue-thresholds", tags=["revenue-thresholds"])


@router.post("", response_model=RevenueThresholdResponse, status_code=status.HTTP_201_CREATED)
def create_revenue_threshold(
    payload: RevenueThresholdCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)

    threshold = RevenueThresholds(**payload.model_dump())
    db.add(threshold)
    db.commit()
    db.refresh(threshold)
    return threshold


@router.get("", response_model=List[RevenueThresholdResponse])
def list_revenue_thresholds(
    location_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(RevenueThresholds)
    if location_id:
        query = query.filter(RevenueThresholds.location_id == location_id)
    return query.order_by(RevenueThresholds.revenue_min).all()


@router.put("/{threshold_id}", response_model=RevenueThresholdResponse)
def update_revenue_threshold(
    threshold_id: int,
    payload: RevenueThresholdUpdate,
    db: Session = Depends(get_db),
):
    threshold = db.query(RevenueThresholds).filter(RevenueThresholds.id == threshold_id).first()
    if not threshold:
        raise HTTPException(status_code=404, detail="Revenue threshold not found")

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(threshold, field, value)

    if threshold.revenue_max < threshold.revenue_min:
        db.rollback()
        raise HTTPException(status_code=400, detail="revenue_max must not be below revenue_min")

    db.commit()
    db.refresh(threshold)
    return threshold


@router.delete("/{threshold_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_revenue_threshold(
    threshold_id: int,
    db: Session = Depends(get_db),
):
    threshold = db.query(RevenueThresholds).filter(RevenueThresholds.id == threshold_id).first()
    if not threshold:
        raise HTTPException(status_code=404, detail="Revenue threshold not found")

    db.delete(threshold)
    db.commit()
