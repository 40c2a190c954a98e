# app/services/alert_service.py
"""
Contract alert reconciliation.
Used by client_service after every contract write and before every contract/alert listing.

Keeps the stored contract.status in sync with compute_status() and maintains at most
one alert row per (contract, alert type):
  - ACTIVE         → every PENDING alert of the contract becomes RESOLVED
  - EXPIRING_SOON  → upsert the EXPIRING_SOON row back to PENDING
  - EXPIRED        → upsert the EXPIRED row back to PENDING

Known limitation: going EXPIRING_SOON → EXPIRED leaves the EXPIRING_SOON row PENDING
next to the new EXPIRED row until a renewal resolves both.

Never commits; the calling service owns the transaction.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.database import upsert
from app.models.contract import Contract, ContractStatus
from app.models.contract_alert import ContractAlert, AlertStatus
from app.services.contract_status import compute_status, alert_type_for, alert_message_for
from app.utils.clock import utcnow
from app.utils.logger import get_logger

logger = get_logger(__name__)


def reconcile_alerts(db: Session, contract: Contract, now: Optional[datetime] = None) -> ContractStatus:
    now = now or utcnow()
    status = compute_status(contract.end_date, now)
    if contract.status != status.value:
        logger.info(f"[CONTRACT] #{contract.id} status {contract.status} → {status.value}")
    contract.status = status.value

    if status == ContractStatus.ACTIVE:
        resolved = (
            db.query(ContractAlert)
            .filter(
                ContractAlert.contract_id == contract.id,
                ContractAlert.status == AlertStatus.PENDING.value,
            )
            .update(
                {ContractAlert.status: AlertStatus.RESOLVED.value, ContractAlert.resolved_at: now},
                synchronize_session="fetch",
            )
        )
        if resolved:
            logger.info(f"[ALERT] Resolved {resolved} alert(s) for contract #{contract.id}")
        db.flush()
        return status

    alert_type = alert_type_for(status)
    message = alert_message_for(alert_type)
    by_key = (
        ContractAlert.contract_id == contract.id,
        ContractAlert.alert_type == alert_type.value,
    )
    previous = db.query(ContractAlert.status).filter(*by_key).scalar()
    db.flush()

    # Atomic on (contract_id, alert_type): a concurrent listing may insert the same row first
    upsert(
        db,
        ContractAlert,
        values={
            "contract_id": contract.id,
            "alert_type": alert_type.value,
            "status": AlertStatus.PENDING.value,
            "message": message,
            "created_at": now,
            "updated_at": now,
            "resolved_at": None,
        },
        conflict_cols=["contract_id", "alert_type"],
        update_cols=["status", "message", "updated_at", "resolved_at"],
    )
    db.query(ContractAlert).filter(*by_key).populate_existing().one()

    if previous is None:
        logger.warning(f"[ALERT][{alert_type.value}] Contract #{contract.id}: {message}")
    elif previous != AlertStatus.PENDING.value:
        logger.warning(f"[ALERT][{alert_type.value}] Reopened for contract #{contract.id}: {message}")
    return status


def reconcile_all(db: Session, now: Optional[datetime] = None) -> int:
    """Bulk re-sync of every contract against a single `now`. Returns the number checked."""
    now = now or utcnow()
    contracts = db.query(Contract).all()
    for contract in contracts:
        reconcile_alerts(db, contract, now)
    return len(contracts)
