# app/models/vehicle.py
"""
Vehicles table, keyed by normalized plate.
The stored type is overwritten on every entry (last write wins).
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class VehicleType(str, enum.Enum):
    CAR = "CAR"
    MOTORCYCLE = "MOTORCYCLE"
    VAN = "VAN"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(20), unique=True, nullable=False, index=True)
    vehicle_type = Column(String(20), nullable=False)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<Vehicle {self.plate} type={self.vehicle_type}>"
