from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db, get_location_or_404
from hiq_rota.db.models.job_roles import JobRoles
from hiq_rota.db.models.shift_rules import ShiftRules, TroughPeriods
from hiq_rota.schemas.shift_rules import (
    ShiftRuleCreate,
    ShiftRuleUpdate,
    ShiftRuleResponse,
    TroughPeriodCreate,
    TroughPeriodUpdate,
    TroughPeriodResponse,
)

router = APIRouter(tags=["shift-rules"])


def _check_job_role(db: Session, job_role_id: int, location_id: int):
    role = db.query(JobRoles).filter(JobRoles.id == job_role_id).first()
    if not role:
        raise HTTPException(status_code=404, detail="Job role not found")
    if role.location_id != location_id:
        raise HTTPException(status_code=400, detail="Job role belongs to a different location")


def _get_rule_or_404(db: Session, rule_id: int) -> ShiftRules:
    rule = db.query(ShiftRules).filter(ShiftRules.id == rule_id).first()
    if not rule:
        raise HTTPException(status_code=404, detail="Shift rule not found")
    return rule


@router.post("/shift-rules", response_model=ShiftRuleResponse, status_code=status.HTTP_201_CREATED)
def create_shift_rule(
    payload: ShiftRuleCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)
    _check_job_role(db, payload.job_role_id, payload.location_id)
    if payload.max_staff is not None and payload.max_staff < payload.min_staff:
        raise HTTPException(status_code=400, detail="max_staff must not be below min_staff")

    rule = ShiftRules(**payload.model_dump())
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


@router.get("/shift-rules", response_model=List[ShiftRuleResponse])
def list_shift_rules(
    location_id: Optional[int] = None,
    job_role_id: Optional[int] = None,
    include_archived: bool = False,
    db: Session = Depends(get_db),
):
    query = db.query(ShiftRules)
    if location_id:
        query = query.filter(ShiftRules.location_id == location_id)
    if job_role_id:
        query = query.filter(ShiftRules.job_role_id == job_role_id)
    if not include_archived:
        query = query.filter(ShiftRules.archived == False)

    return query.order_by(ShiftRules.id).all()


@router.get("/shift-rules/{rule_id}", response_model=ShiftRuleResponse)
def get_shift_rule(
    rule_id: int,
    db: Session = Depends(get_db),
):
    return _get_rule_or_404(db, rule_id)


@router.put("/shift-rules/{rule_id}", response_model=ShiftRuleResponse)
def update_shift_rule(
    rule_id: int,
    payload: ShiftRuleUpdate,
    db: Session = Depends(get_db),
):
    rule = _get_rule_or_404(db, rule_id)

    update_data = payload.model_dump(exclude_unset=True)
    if "job_role_id" in update_data:
        _check_job_role(db, update_data["job_role_id"], rule.location_id)
    for field, value in update_data.items():
        setattr(rule, field, value)

    if rule.max_staff is not None and rule.max_staff < rule.min_staff:
        db.rollback()
        raise HTTPException(status_code=400, detail="max_staff must not be below min_staff")
    if rule.start_time == rule.end_time:
        db.rollback()
        raise HTTPException(status_code=400, detail="start_time and end_time must differ")

    db.commit()
    db.refresh(rule)
    return rule


@router.delete("/shift-rules/{rule_id}", response_model=ShiftRuleResponse)
def archive_shift_rule(
    rule_id: int,
    db: Session = Depends(get_db),
):
    """Shift rules are archived rather than deleted so past rotas keep their reference."""
    rule = _get_rule_or_404(db, rule_id)

    rule.archived = True
    db.commit()
    db.refresh(rule)
    return rule


@router.post("/trough-periods", response_model=TroughPeriodResponse, status_code=status.HTTP_201_CREATED)
def create_trough_period(
    payload: TroughPeriodCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)

    trough = TroughPeriods(**payload.model_dump())
    db.add(trough)
    db.commit()
    db.refresh(trough)
    return trough


@router.get("/trough-periods", response_model=List[TroughPeriodResponse])
def list_trough_periods(
    location_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(TroughPeriods)
    if location_id:
        query = query.filter(TroughPeriods.location_id == location_id)
    return query.order_by(TroughPeriods.id).all()


@router.put("/trough-periods/{trough_id}", response_model=TroughPeriodResponse)
def update_trough_period(
    trough_id: int,
    payload: TroughPeriodUpdate,
    db: Session = Depends(get_db),
):
    trough = db.query(TroughPeriods).filter(TroughPeriods.id == trough_id).first()
    if not trough:
        raise HTTPException(status_code=404, detail="Trough period not found")

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(trough, field, value)

    if trough.start_time == trough.end_time:
        db.rollback()
        raise HTTPException(status_code=400, detail="start_time and end_time must differ")

    db.commit()
    db.refresh(trough)
    return trough


@router.delete("/trough-periods/{trough_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trough_period(
    trough_id: int,
    db: Session = Depends(get_db),
):
    trough = db.query(TroughPeriods).filter(TroughPeriods.id == trough_id).first()
    if not trough:
        raise HTTPException(status_code=404, detail="Trough period not found")

    db.delete(trough)
    db.commit()
