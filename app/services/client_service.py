# app/services/client_service.py
"""
Client monthly contracts: registration, renewal, and the contract/alert listings.

Every write ends with alert_service.reconcile_alerts for the touched contract, and
every listing first re-syncs all contracts, so the stored status and the PENDING
alerts always match compute_status() at the time of the request.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session, joinedload
from app.config import settings
from app.database import unit_of_work, upsert
from app.errors import NotFoundError, ConflictError, ValidationFailure
from app.models.contract import Contract
from app.models.contract_alert import ContractAlert, AlertStatus
from app.models.site import Site
from app.models.user import User, Role
from app.services.alert_service import reconcile_alerts, reconcile_all
from app.services.contract_status import compute_status
from app.utils.clock import utcnow, to_naive_utc
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _check_fee(monthly_fee: Optional[int]):
    if monthly_fee is not None and monthly_fee < 0:
        raise ValidationFailure("Monthly fee cannot be negative")


def upsert_client_user(db: Session, full_name: str, email: str) -> User:
    """Return the CLIENT user for this email, creating it if needed."""
    email = email.strip().lower()
    existed = db.query(User.id).filter(User.email == email).scalar() is not None
    upsert(
        db,
        User,
        values={"email": email, "full_name": full_name.strip(), "role": Role.CLIENT.value,
                "is_active": True, "created_at": utcnow()},
        conflict_cols=["email"],
        update_cols=[],
    )
    user = db.query(User).filter(User.email == email).populate_existing().one()
    if user.role != Role.CLIENT.value:
        raise ConflictError(
            "El correo pertenece a otro rol. Crea un usuario nuevo o cambia su rol manualmente."
        )
    if not existed:
        logger.info(f"[CLIENT] Created client user {email}")
    return user


async def create_client_contract(
    db: Session,
    full_name: str,
    email: str,
    site_id: int,
    start_date: datetime,
    end_date: datetime,
    monthly_fee: int,
    plan_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Contract:
    _check_fee(monthly_fee)
    now = now or utcnow()
    start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)

    with unit_of_work(db):
        if not db.query(Site).filter(Site.id == site_id).first():
            raise NotFoundError(f"Site {site_id} not found")
        user = upsert_client_user(db, full_name, email)

        contract = Contract(
            user_id=user.id,
            site_id=site_id,
            start_date=start_date,
            end_date=end_date,
            status=compute_status(end_date, now).value,
            plan_name=plan_name or settings.DEFAULT_CONTRACT_PLAN_NAME,
            monthly_fee=monthly_fee,
            is_recurring=True,
            last_payment_date=start_date,
            next_payment_date=end_date,
            created_at=now,
            updated_at=now,
        )
        db.add(contract)
        db.flush()
        reconcile_alerts(db, contract, now)

    logger.info(f"[CONTRACT] #{contract.id} for {user.email} at site #{site_id} "
                f"until {end_date.date()} → {contract.status}")
    return contract


async def renew_contract(
    db: Session,
    contract_id: int,
    new_end_date: datetime,
    payment_date: datetime,
    monthly_fee: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Contract:
    """
    Record a payment and move the contract's end date.
    new_end_date is not checked against the old end date or the payment date:
    renewing into the past is allowed for administrative corrections.
    """
    _check_fee(monthly_fee)
    now = now or utcnow()
    new_end_date, payment_date = to_naive_utc(new_end_date), to_naive_utc(payment_date)

    with unit_of_work(db):
        contract = db.query(Contract).filter(Contract.id == contract_id).first()
        if not contract:
            raise NotFoundError(f"Contract {contract_id} not found")

        contract.end_date = new_end_date
        contract.last_payment_date = payment_date
        contract.next_payment_date = new_end_date
        if monthly_fee is not None:
            contract.monthly_fee = monthly_fee
        contract.updated_at = now
        reconcile_alerts(db, contract, now)

    logger.info(f"[CONTRACT] #{contract_id} renewed until {new_end_date.date()} → {contract.status}")
    return contract


def list_contracts(db: Session, now: Optional[datetime] = None) -> list[Contract]:
    with unit_of_work(db):
        reconcile_all(db, now)
    return (
        db.query(Contract)
        .options(joinedload(Contract.user), joinedload(Contract.site))
        .order_by(Contract.end_date.asc())
        .all()
    )


def list_alerts(db: Session, now: Optional[datetime] = None) -> list[ContractAlert]:
    with unit_of_work(db):
        reconcile_all(db, now)
    return (
        db.query(ContractAlert)
        .filter(ContractAlert.status == AlertStatus.PENDING.value)
        .order_by(ContractAlert.created_at.desc(), ContractAlert.id.desc())
        .all()
    )
