import logging
from dataclasses import asdict
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db
from hiq_rota.db.models.rotas import RotaRequests, RotaSchedules, RotaShifts
from hiq_rota.schemas.rotas import (
    RotaGenerateRequest,
    RotaGenerateResponse,
    RotaRequestResponse,
    RotaScheduleResponse,
    RotaShiftResponse,
)
from hiq_rota.services.scheduling.generator import (
    LocationNotFoundError,
    PersistenceError,
    RotaGenerationError,
    RotaValidationError,
    UpstreamDataError,
    generate_rota,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rotas", tags=["rotas"])


@router.post("/generate", response_model=RotaGenerateResponse, status_code=status.HTTP_201_CREATED)
def generate(
    payload: RotaGenerateRequest,
    db: Session = Depends(get_db),
):
    """Generate (or regenerate) the rota for a location and week."""
    try:
        summary = generate_rota(
            db,
            location_id=payload.location_id,
            week_start=payload.week_start,
            revenue_forecast=payload.revenue_forecast,
            requested_by=payload.requested_by,
        )
    except RotaValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LocationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UpstreamDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Rota could not be saved: {str(e)}",
        )
    except RotaGenerationError as e:
        logger.error(f"Rota generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Rota generation failed: {str(e)}",
        )

    return RotaGenerateResponse(**asdict(summary))


@router.get("/requests", response_model=List[RotaRequestResponse])
def list_rota_requests(
    location_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(RotaRequests)
    if location_id:
        query = query.filter(RotaRequests.location_id == location_id)
    return query.order_by(RotaRequests.week_start_date.desc()).offset(skip).limit(limit).all()


@router.get("/schedules/{schedule_id}", response_model=RotaScheduleResponse)
def get_rota_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    schedule = db.query(RotaSchedules).filter(RotaSchedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Rota schedule not found")
    return schedule


@router.get("/schedules/{schedule_id}/shifts", response_model=List[RotaShiftResponse])
def list_rota_shifts(
    schedule_id: int,
    unfilled_only: bool = False,
    db: Session = Depends(get_db),
):
    schedule = db.query(RotaSchedules).filter(RotaSchedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Rota schedule not found")

    query = db.query(RotaShifts).filter(RotaShifts.schedule_id == schedule_id)
    if unfilled_only:
        query = query.filter(RotaShifts.staff_id.is_(None))
    return query.order_by(RotaShifts.shift_date, RotaShifts.start_time, RotaShifts.id).all()
