# app/services/contract_status.py
"""
Contract status classification: a pure function of (end_date, now).

  EXPIRED        end_date <= now
  EXPIRING_SOON  0 < days left <= threshold   (days left = ceil of the difference)
  ACTIVE         days left > threshold

Nothing schedules these transitions; callers recompute on every read and write.
"""

from datetime import datetime, timedelta
from typing import Optional

from app.config import settings
from app.models.contract import ContractStatus
from app.models.contract_alert import AlertType

_DAY = timedelta(days=1)

ALERT_MESSAGES = {
    AlertType.EXPIRING_SOON: "El contrato vencerá en breve. Recuerda contactar al cliente para renovar.",
    AlertType.EXPIRED: "El contrato está vencido. Debe renovar el pago de la mensualidad.",
}


def days_left(end_date: datetime, now: datetime) -> int:
    """Whole days until end_date, rounded up. Only meaningful when end_date > now."""
    remaining = end_date - now
    return -(-remaining // _DAY)


def compute_status(end_date: datetime, now: datetime, threshold_days: Optional[int] = None) -> ContractStatus:
    if threshold_days is None:
        threshold_days = settings.CONTRACT_ALERT_THRESHOLD_DAYS
    if end_date <= now:
        return ContractStatus.EXPIRED
    if days_left(end_date, now) <= threshold_days:
        return ContractStatus.EXPIRING_SOON
    return ContractStatus.ACTIVE


def alert_type_for(status: ContractStatus) -> Optional[AlertType]:
    if status == ContractStatus.EXPIRED:
        return AlertType.EXPIRED
    if status == ContractStatus.EXPIRING_SOON:
        return AlertType.EXPIRING_SOON
    return None


def alert_message_for(alert_type: AlertType) -> str:
    return ALERT_MESSAGES[alert_type]
