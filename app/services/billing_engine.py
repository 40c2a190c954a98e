# app/services/billing_engine.py
"""
Tariff/billing engine: pure computation, no DB access.

Charge rules:
  - duration is rounded UP to whole minutes
  - billed hours = ceil(minutes / 60), so any positive stay bills at least 1 hour
  - base_rate covers the first hour, every further started hour adds hourly_rate
  - a vehicle type with no tariff row pays the site's base rate and nothing per hour

All money is integer whole currency units.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Mapping, NamedTuple

from app.errors import ValidationFailure

_MINUTE_US = 60 * 1_000_000


class TariffRate(NamedTuple):
    base_rate: int
    hourly_rate: int


@dataclass(frozen=True)
class Charge:
    duration_minutes: int
    hours: int
    total_amount: int


def build_tariff_table(tariffs: Iterable) -> dict[str, TariffRate]:
    """Index a site's tariff rows by vehicle type."""
    return {t.vehicle_type: TariffRate(t.base_rate, t.hourly_rate) for t in tariffs}


def duration_minutes(entry_time: datetime, exit_time: datetime) -> int:
    if exit_time <= entry_time:
        raise ValidationFailure(
            f"Exit time {exit_time.isoformat()} is not after entry time {entry_time.isoformat()}"
        )
    micros = (exit_time - entry_time) // timedelta(microseconds=1)
    return -(-micros // _MINUTE_US)


def compute_charge(
    entry_time: datetime,
    exit_time: datetime,
    vehicle_type: str,
    tariff_table: Mapping[str, TariffRate],
    site_default_base_rate: int,
) -> Charge:
    minutes = duration_minutes(entry_time, exit_time)
    rate = tariff_table.get(vehicle_type) or TariffRate(site_default_base_rate, 0)
    if rate.base_rate < 0 or rate.hourly_rate < 0:
        raise ValidationFailure(f"Negative tariff for vehicle type {vehicle_type}: {rate}")

    hours = -(-minutes // 60)
    total = rate.base_rate + max(0, hours - 1) * rate.hourly_rate
    return Charge(duration_minutes=minutes, hours=hours, total_amount=total)
