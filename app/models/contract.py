# app/models/contract.py
"""
Monthly client contracts.
status is a cached copy of contract_status.compute_status(end_date, now);
alert_service.reconcile_alerts rewrites it on every list and every write.
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class ContractStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    EXPIRING_SOON = "EXPIRING_SOON"
    EXPIRED = "EXPIRED"


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ContractStatus.ACTIVE.value)
    plan_name = Column(String(100), nullable=False)
    monthly_fee = Column(Integer, nullable=False)       # whole currency units
    is_recurring = Column(Boolean, nullable=False, default=True)
    last_payment_date = Column(DateTime)
    next_payment_date = Column(DateTime)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    user = relationship("User")
    site = relationship("Site")
    alerts = relationship("ContractAlert", back_populates="contract", order_by="ContractAlert.id")

    def __repr__(self):
        return f"<Contract {self.id} user={self.user_id} end={self.end_date} status={self.status}>"

    @property
    def pending_alerts(self):
        return [a for a in self.alerts if a.status == "PENDING"]
