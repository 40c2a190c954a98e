# app/models/contract_alert.py
"""
Contract alerts: at most one row per (contract, alert type).
Rows are resolved rather than deleted when the contract becomes ACTIVE again.
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class AlertType(str, enum.Enum):
    EXPIRING_SOON = "EXPIRING_SOON"
    EXPIRED = "EXPIRED"


class AlertStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"


class ContractAlert(Base):
    __tablename__ = "contract_alerts"
    __table_args__ = (UniqueConstraint("contract_id", "alert_type", name="uq_contract_alert_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False, index=True)
    alert_type = Column(String(20), nullable=False)
    status = Column(String(10), nullable=False, default=AlertStatus.PENDING.value, index=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime)
    resolved_at = Column(DateTime)

    contract = relationship("Contract", back_populates="alerts")

    def __repr__(self):
        return f"<ContractAlert {self.id} contract={self.contract_id} type={self.alert_type} status={self.status}>"
