# app/services/vehicle_service.py
"""
Vehicle lookup and registration helpers.
Used by parking_service on entry and exit.
"""

from typing import Optional
from sqlalchemy.orm import Session
from app.database import upsert
from app.models.vehicle import Vehicle
from app.utils.clock import utcnow
from app.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_plate(plate: str) -> str:
    return (plate or "").strip().upper()


def lookup_vehicle_by_plate(db: Session, plate: str) -> Optional[Vehicle]:
    """Find a vehicle by plate. Returns None if not found."""
    return db.query(Vehicle).filter(Vehicle.plate == normalize_plate(plate)).first()


def upsert_vehicle(db: Session, plate: str, vehicle_type: str) -> Vehicle:
    """Create the vehicle or overwrite its type, as one INSERT ... ON CONFLICT statement."""
    plate = normalize_plate(plate)
    known = lookup_vehicle_by_plate(db, plate)
    if known is not None and known.vehicle_type != vehicle_type:
        # TODO: decide with operations whether a type change on re-entry should be rejected
        logger.info(f"[VEHICLE] {plate} type {known.vehicle_type} → {vehicle_type}")
    upsert(
        db,
        Vehicle,
        values={"plate": plate, "vehicle_type": vehicle_type, "created_at": utcnow()},
        conflict_cols=["plate"],
        update_cols=["vehicle_type"],
    )
    return db.query(Vehicle).filter(Vehicle.plate == plate).populate_existing().one()
