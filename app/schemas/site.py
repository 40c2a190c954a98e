# app/schemas/site.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.models.vehicle import VehicleType


class SiteCreate(BaseModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    base_rate: int = Field(ge=0)      # whole currency units


class TariffIn(BaseModel):
    vehicle_type: VehicleType
    base_rate: int = Field(ge=0)
    hourly_rate: int = Field(ge=0)
    day_rate: Optional[int] = Field(default=None, ge=0)


class TariffOut(BaseModel):
    id: int
    site_id: int
    vehicle_type: str
    base_rate: int
    hourly_rate: int
    day_rate: Optional[int]

    class Config:
        from_attributes = True


class SiteOut(BaseModel):
    id: int
    name: str
    address: str
    capacity: int
    base_rate: int
    created_at: Optional[datetime]
    tariffs: list[TariffOut] = []

    class Config:
        from_attributes = True
