# app/services/parking_service.py
"""
Sites, tariffs, and the entry/exit ticket flow.

How it works:
  - register_entry upserts the vehicle by plate and opens an ACTIVE ticket;
    a plate that is already parked is refused with ConflictError
  - register_exit finds the ACTIVE ticket for the plate, bills it with
    billing_engine.compute_charge against the site's tariff table, writes the
    exits row and closes the ticket in one commit
  - the ACTIVE → CLOSED update is guarded on the current status, so a second
    concurrent exit for the same ticket fails with ConflictError instead of
    billing twice
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.database import unit_of_work, upsert
from app.errors import NotFoundError, ConflictError, ValidationFailure
from app.models.site import Site
from app.models.tariff import Tariff
from app.models.ticket import Ticket, TicketExit, TicketStatus
from app.models.vehicle import Vehicle, VehicleType
from app.services.billing_engine import build_tariff_table, compute_charge
from app.services.vehicle_service import normalize_plate, upsert_vehicle
from app.utils.clock import utcnow
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ExitResult:
    ticket: Ticket
    exit: TicketExit
    message: str = "Salida registrada con éxito"


def _vehicle_type(value) -> str:
    try:
        return VehicleType(value).value
    except ValueError:
        raise ValidationFailure(f"Invalid vehicle type {value!r}. Must be one of: "
                                f"{', '.join(t.value for t in VehicleType)}") from None


def _new_ticket_code() -> str:
    return f"{settings.TICKET_CODE_PREFIX}-{uuid.uuid4()}"


# ── Sites & tariffs ──────────────────────────────────────────────────────────

async def create_site(db: Session, name: str, address: str, capacity: int, base_rate: int) -> Site:
    if base_rate < 0:
        raise ValidationFailure("Site base rate cannot be negative")
    with unit_of_work(db):
        site = Site(name=name, address=address, capacity=capacity,
                    base_rate=base_rate, created_at=utcnow())
        db.add(site)
        db.flush()
    logger.info(f"[SITE] Created #{site.id} '{name}' capacity={capacity} base_rate={base_rate}")
    return site


def list_sites(db: Session) -> list[Site]:
    return db.query(Site).order_by(Site.id).all()


def get_site(db: Session, site_id: int) -> Site:
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise NotFoundError(f"Site {site_id} not found")
    return site


async def set_tariff(db: Session, site_id: int, vehicle_type, base_rate: int, hourly_rate: int,
                     day_rate: Optional[int] = None) -> Tariff:
    """Create or overwrite the tariff for (site, vehicle type)."""
    vehicle_type = _vehicle_type(vehicle_type)
    if base_rate < 0 or hourly_rate < 0 or (day_rate is not None and day_rate < 0):
        raise ValidationFailure("Tariff rates cannot be negative")

    with unit_of_work(db):
        get_site(db, site_id)
        upsert(
            db,
            Tariff,
            values={"site_id": site_id, "vehicle_type": vehicle_type, "base_rate": base_rate,
                    "hourly_rate": hourly_rate, "day_rate": day_rate},
            conflict_cols=["site_id", "vehicle_type"],
            update_cols=["base_rate", "hourly_rate", "day_rate"],
        )
        tariff = (
            db.query(Tariff)
            .filter(Tariff.site_id == site_id, Tariff.vehicle_type == vehicle_type)
            .populate_existing()
            .one()
        )
    logger.info(f"[TARIFF] Site #{site_id} {vehicle_type}: base={base_rate} hourly={hourly_rate}")
    return tariff


# ── Entry / exit ─────────────────────────────────────────────────────────────

def find_active_ticket(db: Session, plate: str) -> Optional[Ticket]:
    return (
        db.query(Ticket)
        .join(Vehicle, Ticket.vehicle_id == Vehicle.id)
        .filter(Vehicle.plate == normalize_plate(plate), Ticket.status == TicketStatus.ACTIVE.value)
        .order_by(Ticket.entry_time.desc())
        .first()
    )


def list_active_tickets(db: Session, site_id: Optional[int] = None) -> list[Ticket]:
    q = db.query(Ticket).filter(Ticket.status == TicketStatus.ACTIVE.value)
    if site_id is not None:
        q = q.filter(Ticket.site_id == site_id)
    return q.order_by(Ticket.entry_time.desc()).all()


async def register_entry(db: Session, plate: str, vehicle_type, site_id: int,
                         entry_time: Optional[datetime] = None) -> Ticket:
    plate = normalize_plate(plate)
    if not plate:
        raise ValidationFailure("Plate is required")
    vehicle_type = _vehicle_type(vehicle_type)

    with unit_of_work(db):
        get_site(db, site_id)
        active = find_active_ticket(db, plate)
        if active:
            raise ConflictError(f"Plate {plate} already has an active ticket ({active.code})")
        vehicle = upsert_vehicle(db, plate, vehicle_type)
        ticket = Ticket(
            code=_new_ticket_code(),
            site_id=site_id,
            vehicle_id=vehicle.id,
            entry_time=entry_time or utcnow(),
            status=TicketStatus.ACTIVE.value,
        )
        db.add(ticket)
        db.flush()

    logger.info(f"[ENTRY] Site=#{site_id} | Plate={plate} | Type={vehicle_type} | Ticket={ticket.code}")
    return ticket


async def register_exit(db: Session, plate: str, exit_time: Optional[datetime] = None) -> ExitResult:
    plate = normalize_plate(plate)
    exit_time = exit_time or utcnow()

    with unit_of_work(db):
        ticket = find_active_ticket(db, plate)
        if not ticket:
            raise NotFoundError(f"No active ticket found for plate {plate}")

        site = ticket.site
        charge = compute_charge(
            entry_time=ticket.entry_time,
            exit_time=exit_time,
            vehicle_type=ticket.vehicle.vehicle_type,
            tariff_table=build_tariff_table(site.tariffs),
            site_default_base_rate=site.base_rate,
        )

        closed = (
            db.query(Ticket)
            .filter(Ticket.id == ticket.id, Ticket.status == TicketStatus.ACTIVE.value)
            .update({Ticket.status: TicketStatus.CLOSED.value}, synchronize_session="fetch")
        )
        if closed != 1:
            raise ConflictError(f"Ticket {ticket.code} was already closed")

        exit_row = TicketExit(
            ticket_id=ticket.id,
            exit_time=exit_time,
            duration_minutes=charge.duration_minutes,
            total_amount=charge.total_amount,
        )
        db.add(exit_row)
        db.flush()

    logger.info(
        f"[EXIT] Plate={plate} | Ticket={ticket.code} | {charge.duration_minutes} min "
        f"({charge.hours} h billed) | Total={charge.total_amount}"
    )
    return ExitResult(ticket=ticket, exit=exit_row)
