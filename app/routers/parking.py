# app/routers/parking.py
"""Vehicle entry/exit endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.ticket import EntryIn, ExitIn, TicketOut, ExitOut
from app.services import parking_service

router = APIRouter()


@router.post("/parking/entry", response_model=TicketOut, status_code=201, summary="Register a vehicle entry")
async def register_entry(body: EntryIn, db: Session = Depends(get_db)):
    return await parking_service.register_entry(db, body.plate, body.vehicle_type, body.site_id)


@router.post("/parking/exit", response_model=ExitOut, summary="Register an exit and bill the stay")
async def register_exit(body: ExitIn, db: Session = Depends(get_db)):
    """Closes the plate's ACTIVE ticket and returns the billed duration and amount."""
    result = await parking_service.register_exit(db, body.plate)
    return {"ticket": result.ticket, "exit": result.exit, "message": result.message}


@router.get("/parking/tickets/active", response_model=list[TicketOut], summary="Vehicles currently parked")
def list_active_tickets(site_id: Optional[int] = None, db: Session = Depends(get_db)):
    return parking_service.list_active_tickets(db, site_id)
