"""Unit tests for contract status classification."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from app.models.contract import ContractStatus
from app.models.contract_alert import AlertType
from app.services.contract_status import compute_status, days_left, alert_type_for, alert_message_for

NOW = datetime(2026, 5, 10, 12, 0, 0)


class TestComputeStatus:
    @pytest.mark.parametrize("delta,expected", [
        (timedelta(days=40), ContractStatus.ACTIVE),
        (timedelta(days=5, seconds=1), ContractStatus.ACTIVE),      # ceil → 6 days
        (timedelta(days=5), ContractStatus.EXPIRING_SOON),
        (timedelta(days=3), ContractStatus.EXPIRING_SOON),
        (timedelta(seconds=1), ContractStatus.EXPIRING_SOON),
        (timedelta(0), ContractStatus.EXPIRED),
        (timedelta(days=-2), ContractStatus.EXPIRED),
    ])
    def test_classification(self, delta, expected):
        assert compute_status(NOW + delta, NOW, threshold_days=5) == expected

    def test_default_threshold_from_settings(self):
        assert compute_status(NOW + timedelta(days=5), NOW) == ContractStatus.EXPIRING_SOON
        assert compute_status(NOW + timedelta(days=6), NOW) == ContractStatus.ACTIVE

    def test_custom_threshold(self):
        assert compute_status(NOW + timedelta(days=8), NOW, threshold_days=10) == ContractStatus.EXPIRING_SOON

    def test_status_only_moves_forward_as_end_date_decreases(self):
        order = [ContractStatus.ACTIVE, ContractStatus.EXPIRING_SOON, ContractStatus.EXPIRED]
        ranks = [order.index(compute_status(NOW + timedelta(hours=h), NOW))
                 for h in range(24 * 10, -48, -1)]
        assert ranks == sorted(ranks)
        assert ranks[0] == 0 and ranks[-1] == 2


def test_days_left_rounds_up():
    assert days_left(NOW + timedelta(days=2, hours=1), NOW) == 3
    assert days_left(NOW + timedelta(days=2), NOW) == 2


def test_alert_type_mapping():
    assert alert_type_for(ContractStatus.ACTIVE) is None
    assert alert_type_for(ContractStatus.EXPIRING_SOON) == AlertType.EXPIRING_SOON
    assert alert_type_for(ContractStatus.EXPIRED) == AlertType.EXPIRED
    assert "vencido" in alert_message_for(AlertType.EXPIRED)
