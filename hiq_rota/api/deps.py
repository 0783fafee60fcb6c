from typing import Generator
from fastapi import HTTPException
from sqlalchemy.orm import Session

from hiq_rota.db.database import SessionLocal
from hiq_rota.db.models.locations import Locations


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_location_or_404(db: Session, location_id: int) -> Locations:
    location = db.query(Locations).filter(Locations.id == location_id).first()
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location
