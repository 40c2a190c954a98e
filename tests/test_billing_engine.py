"""Unit tests for the tariff/billing engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from types import SimpleNamespace
from app.errors import ValidationFailure
from app.services.billing_engine import TariffRate, build_tariff_table, compute_charge, duration_minutes

T0 = datetime(2026, 3, 2, 10, 0, 0)
TABLE = {"CAR": TariffRate(5000, 3000), "MOTORCYCLE": TariffRate(2000, 1000)}


def charge(delta, vehicle_type="CAR", default_base=4000):
    return compute_charge(T0, T0 + delta, vehicle_type, TABLE, default_base)


class TestDuration:
    def test_one_second_rounds_up_to_one_minute(self):
        assert duration_minutes(T0, T0 + timedelta(seconds=1)) == 1

    def test_exact_minutes_not_rounded(self):
        assert duration_minutes(T0, T0 + timedelta(minutes=180)) == 180

    def test_microsecond_over_a_minute(self):
        assert duration_minutes(T0, T0 + timedelta(minutes=1, microseconds=1)) == 2

    @pytest.mark.parametrize("delta", [timedelta(0), timedelta(seconds=-30)])
    def test_non_positive_duration_rejected(self, delta):
        with pytest.raises(ValidationFailure):
            duration_minutes(T0, T0 + delta)


class TestComputeCharge:
    def test_one_second_stay_costs_base_rate(self):
        c = charge(timedelta(seconds=1))
        assert (c.duration_minutes, c.hours, c.total_amount) == (1, 1, 5000)

    def test_45_minutes_costs_base_rate(self):
        assert charge(timedelta(minutes=45)).total_amount == 5000

    def test_61_minutes_adds_one_hourly_increment(self):
        c = charge(timedelta(hours=1, seconds=1))
        assert (c.duration_minutes, c.hours, c.total_amount) == (61, 2, 8000)

    def test_exactly_three_hours(self):
        c = charge(timedelta(hours=3))
        assert (c.duration_minutes, c.hours, c.total_amount) == (180, 3, 5000 + 2 * 3000)

    def test_ninety_minutes_car(self):
        c = charge(timedelta(minutes=90))
        assert (c.duration_minutes, c.hours, c.total_amount) == (90, 2, 8000)

    def test_uses_matching_vehicle_type(self):
        assert charge(timedelta(minutes=150), "MOTORCYCLE").total_amount == 2000 + 2 * 1000

    @pytest.mark.parametrize("delta", [timedelta(minutes=5), timedelta(hours=7), timedelta(days=2)])
    def test_missing_tariff_falls_back_to_site_base_rate(self, delta):
        c = charge(delta, "VAN", default_base=4000)
        assert c.total_amount == 4000

    def test_rejects_exit_before_entry(self):
        with pytest.raises(ValidationFailure):
            compute_charge(T0, T0 - timedelta(minutes=1), "CAR", TABLE, 4000)

    def test_rejects_negative_rates(self):
        with pytest.raises(ValidationFailure):
            compute_charge(T0, T0 + timedelta(hours=2), "CAR", {"CAR": TariffRate(5000, -1)}, 0)

    def test_deterministic(self):
        assert charge(timedelta(minutes=125)) == charge(timedelta(minutes=125))


def test_build_tariff_table_keys_by_vehicle_type():
    rows = [SimpleNamespace(vehicle_type="CAR", base_rate=5000, hourly_rate=3000),
            SimpleNamespace(vehicle_type="VAN", base_rate=7000, hourly_rate=4000)]
    table = build_tariff_table(rows)
    assert table == {"CAR": TariffRate(5000, 3000), "VAN": TariffRate(7000, 4000)}
