# app/models/tariff.py
"""
Tariffs table: one price schedule per (site, vehicle type).
Written with upsert semantics by parking_service.set_tariff.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Tariff(Base):
    __tablename__ = "tariffs"
    __table_args__ = (UniqueConstraint("site_id", "vehicle_type", name="uq_tariff_site_vehicle_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=False, index=True)
    vehicle_type = Column(String(20), nullable=False)   # CAR | MOTORCYCLE | VAN
    base_rate = Column(Integer, nullable=False)         # covers the first hour
    hourly_rate = Column(Integer, nullable=False)       # each extra started hour
    day_rate = Column(Integer)                          # informational, not billed

    site = relationship("Site", back_populates="tariffs")

    def __repr__(self):
        return f"<Tariff site={self.site_id} type={self.vehicle_type} base={self.base_rate} hourly={self.hourly_rate}>"
