# app/models/site.py
"""
Parking sites table.
Each site owns its tariff table, its tickets and the client contracts signed for it.
base_rate is the fallback charge used when a vehicle type has no tariff row.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.database import Base


class Site(Base):
    __tablename__ = "sites"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=False)
    capacity = Column(Integer, nullable=False)
    base_rate = Column(Integer, nullable=False, default=0)   # whole currency units
    created_at = Column(DateTime)

    tariffs = relationship("Tariff", back_populates="site", order_by="Tariff.vehicle_type")

    def __repr__(self):
        return f"<Site {self.id} name={self.name} base_rate={self.base_rate}>"
