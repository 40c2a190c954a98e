# app/schemas/ticket.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from app.models.vehicle import VehicleType


class EntryIn(BaseModel):
    plate: str = Field(min_length=1)
    vehicle_type: VehicleType
    site_id: int

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        return v.strip().upper()


class ExitIn(BaseModel):
    plate: str = Field(min_length=1)

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        return v.strip().upper()


class VehicleOut(BaseModel):
    id: int
    plate: str
    vehicle_type: str

    class Config:
        from_attributes = True


class TicketOut(BaseModel):
    id: int
    code: str
    site_id: int
    entry_time: datetime
    status: str
    vehicle: Optional[VehicleOut]

    class Config:
        from_attributes = True


class TicketExitOut(BaseModel):
    id: int
    ticket_id: int
    exit_time: datetime
    duration_minutes: int
    total_amount: int      # whole currency units

    class Config:
        from_attributes = True


class ExitOut(BaseModel):
    ticket: TicketOut
    exit: TicketExitOut
    message: str

    class Config:
        from_attributes = True
