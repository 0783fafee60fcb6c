from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiq_rota.api.deps import get_db, get_location_or_404
from hiq_rota.db.models.job_roles import JobRoles, JobRoleMappings
from hiq_rota.db.models.rotas import RotaShifts
from hiq_rota.db.models.shift_rules import ShiftRules
from hiq_rota.schemas.job_roles import (
    JobRoleCreate,
    JobRoleUpdate,
    JobRoleResponse,
    JobRoleMappingCreate,
    JobRoleMappingUpdate,
    JobRoleMappingResponse,
)

router = APIRouter(tags=["job-roles"])


def _get_role_or_404(db: Session, role_id: int) -> JobRoles:
    role = db.query(JobRoles).filter(JobRoles.id == role_id).first()
    if not role:
        raise HTTPException(status_code=404, detail="Job role not found")
    return role


@router.post("/job-roles", response_model=JobRoleResponse, status_code=status.HTTP_201_CREATED)
def create_job_role(
    payload: JobRoleCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)

    existing = db.query(JobRoles).filter(
        JobRoles.location_id == payload.location_id,
        JobRoles.title == payload.title,
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Job role already exists for this location")

    role = JobRoles(**payload.model_dump())
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


@router.get("/job-roles", response_model=List[JobRoleResponse])
def list_job_roles(
    location_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(JobRoles)
    if location_id:
        query = query.filter(JobRoles.location_id == location_id)
    return query.order_by(JobRoles.id).all()


@router.put("/job-roles/{role_id}", response_model=JobRoleResponse)
def update_job_role(
    role_id: int,
    payload: JobRoleUpdate,
    db: Session = Depends(get_db),
):
    role = _get_role_or_404(db, role_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(role, field, value)

    db.commit()
    db.refresh(role)
    return role


@router.delete("/job-roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_role(
    role_id: int,
    db: Session = Depends(get_db),
):
    role = _get_role_or_404(db, role_id)

    # archived rules still reference the role
    in_rules = db.query(ShiftRules).filter(ShiftRules.job_role_id == role_id).first()
    if in_rules:
        raise HTTPException(status_code=409, detail="Job role is used by shift rules")

    in_rotas = db.query(RotaShifts).filter(RotaShifts.job_role_id == role_id).first()
    if in_rotas:
        raise HTTPException(status_code=409, detail="Job role is used by stored rotas")

    db.query(JobRoleMappings).filter(JobRoleMappings.job_role_id == role_id).delete()
    db.delete(role)
    db.commit()


@router.post("/job-role-mappings", response_model=JobRoleMappingResponse, status_code=status.HTTP_201_CREATED)
def create_job_role_mapping(
    payload: JobRoleMappingCreate,
    db: Session = Depends(get_db),
):
    get_location_or_404(db, payload.location_id)
    role = _get_role_or_404(db, payload.job_role_id)
    if role.location_id != payload.location_id:
        raise HTTPException(status_code=400, detail="Job role belongs to a different location")

    existing = db.query(JobRoleMappings).filter(
        JobRoleMappings.location_id == payload.location_id,
        JobRoleMappings.job_title == payload.job_title,
        JobRoleMappings.job_role_id == payload.job_role_id,
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Mapping already exists")

    mapping = JobRoleMappings(**payload.model_dump())
    db.add(mapping)
    db.commit()
    db.refresh(mapping)
    return mapping


@router.get("/job-role-mappings", response_model=List[JobRoleMappingResponse])
def list_job_role_mappings(
    location_id: Optional[int] = None,
    job_title: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(JobRoleMappings)
    if location_id:
        query = query.filter(JobRoleMappings.location_id == location_id)
    if job_title:
        query = query.filter(JobRoleMappings.job_title == job_title)
    return query.order_by(JobRoleMappings.priority, JobRoleMappings.id).all()


@router.put("/job-role-mappings/{mapping_id}", response_model=JobRoleMappingResponse)
def update_job_role_mapping(
    mapping_id: int,
    payload: JobRoleMappingUpdate,
    db: Session = Depends(get_db),
):
    mapping = db.query(JobRoleMappings).filter(JobRoleMappings.id == mapping_id).first()
    if not mapping:
        raise HTTPException(status_code=404, detail="Mapping not found")

    update_data = payload.model_dump(exclude_unset=True)
    if "job_role_id" in update_data:
        _get_role_or_404(db, update_data["job_role_id"])
    for field, value in update_data.items():
        setattr(mapping, field, value)

    db.commit()
    db.refresh(mapping)
    return mapping


@router.delete("/job-role-mappings/{mapping_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_role_mapping(
    mapping_id: int,
    db: Session = Depends(get_db),
):
    mapping = db.query(JobRoleMappings).filter(JobRoleMappings.id == mapping_id).first()
    if not mapping:
        raise HTTPException(status_code=404, detail="Mapping not found")

    db.delete(mapping)
    db.commit()
