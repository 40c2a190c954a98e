# app/routers/sites.py
"""Parking sites and their tariff tables."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.site import SiteCreate, SiteOut, TariffIn, TariffOut
from app.services import parking_service

router = APIRouter()


@router.post("/sites", response_model=SiteOut, status_code=201, summary="Register a parking site")
async def create_site(body: SiteCreate, db: Session = Depends(get_db)):
    return await parking_service.create_site(db, body.name, body.address, body.capacity, body.base_rate)


@router.get("/sites", response_model=list[SiteOut], summary="List sites with their tariffs")
def list_sites(db: Session = Depends(get_db)):
    return parking_service.list_sites(db)


@router.get("/sites/{site_id}", response_model=SiteOut)
def get_site(site_id: int, db: Session = Depends(get_db)):
    return parking_service.get_site(db, site_id)


@router.put("/sites/{site_id}/tariffs", response_model=TariffOut, summary="Create or update a tariff")
async def set_tariff(site_id: int, body: TariffIn, db: Session = Depends(get_db)):
    """One tariff per (site, vehicle type); an existing row is overwritten."""
    return await parking_service.set_tariff(db, site_id, body.vehicle_type, body.base_rate,
                                            body.hourly_rate, body.day_rate)
