# app/models/ticket.py
"""
Tickets and exits.
A ticket is opened on entry (ACTIVE) and closed exactly once on exit (CLOSED).
The matching exits row holds the billed duration and amount; neither is ever deleted.
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class TicketStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), unique=True, nullable=False)
    site_id = Column(Integer, ForeignKey("sites.id"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    entry_time = Column(DateTime, nullable=False, index=True)
    status = Column(String(10), nullable=False, default=TicketStatus.ACTIVE.value, index=True)

    site = relationship("Site")
    vehicle = relationship("Vehicle")
    exit = relationship("TicketExit", back_populates="ticket", uselist=False)

    def __repr__(self):
        return f"<Ticket {self.code} vehicle={self.vehicle_id} status={self.status}>"


class TicketExit(Base):
    __tablename__ = "exits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id"), unique=True, nullable=False)
    exit_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    total_amount = Column(Integer, nullable=False)      # whole currency units

    ticket = relationship("Ticket", back_populates="exit")

    def __repr__(self):
        return f"<TicketExit ticket={self.ticket_id} minutes={self.duration_minutes} total={self.total_amount}>"
