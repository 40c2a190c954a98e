"""Drive a running backend: one vehicle stay and one client contract, printing each response."""

import argparse
import requests
from datetime import datetime, timedelta, timezone

BACKEND_URL = "http://localhost:8080/api/v1"


def _show(label, resp):
    mark = "✅" if resp.ok else "❌"
    print(f"{mark} {label} → HTTP {resp.status_code}: {resp.json()}")
    return resp


def simulate_stay(plate, vehicle_type, site_id, headers):
    _show(f"ENTRY plate={plate}", requests.post(
        f"{BACKEND_URL}/parking/entry",
        json={"plate": plate, "vehicle_type": vehicle_type, "site_id": site_id},
        headers=headers, timeout=10))
    _show(f"EXIT plate={plate}", requests.post(
        f"{BACKEND_URL}/parking/exit", json={"plate": plate}, headers=headers, timeout=10))


def simulate_contract(email, site_id, days, headers):
    now = datetime.now(timezone.utc)
    resp = _show(f"CONTRACT {email} (+{days}d)", requests.post(
        f"{BACKEND_URL}/clients",
        json={
            "full_name": "Cliente Demo",
            "email": email,
            "site_id": site_id,
            "start_date": now.isoformat(),
            "end_date": (now + timedelta(days=days)).isoformat(),
            "monthly_fee": 120000,
        },
        headers=headers, timeout=10))
    _show("ALERTS", requests.get(f"{BACKEND_URL}/clients/contracts/alerts", headers=headers, timeout=10))
    if resp.ok:
        _show("RENEW (+40d)", requests.patch(
            f"{BACKEND_URL}/clients/contracts/{resp.json()['id']}/renew",
            json={"new_end_date": (now + timedelta(days=40)).isoformat(), "payment_date": now.isoformat()},
            headers=headers, timeout=10))
        _show("ALERTS", requests.get(f"{BACKEND_URL}/clients/contracts/alerts", headers=headers, timeout=10))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate parking traffic for testing")
    parser.add_argument("--scenario", default="stay", choices=["stay", "contract"])
    parser.add_argument("--site", type=int, default=1)
    parser.add_argument("--plate", default="ABC123")
    parser.add_argument("--type", default="CAR", choices=["CAR", "MOTORCYCLE", "VAN"])
    parser.add_argument("--email", default="cliente.demo@example.com")
    parser.add_argument("--days", type=int, default=3, help="Contract length in days")
    parser.add_argument("--api-key", default=None)
    args = parser.parse_args()

    headers = {"X-API-Key": args.api_key} if args.api_key else {}
    if args.scenario == "stay":
        simulate_stay(args.plate, args.type, args.site, headers)
    else:
        simulate_contract(args.email, args.site, args.days, headers)
