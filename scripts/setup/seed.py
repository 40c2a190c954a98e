"""
Seed demo data: an admin, an operator, and one site with CAR and MOTORCYCLE tariffs.
Safe to re-run: users are matched by email and the site by name.
Usage: python scripts/setup/seed.py
"""

import sys
import os
import asyncio
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import SessionLocal, create_tables
from app.models.site import Site
from app.models.user import User, Role
from app.services import parking_service
from app.utils.clock import utcnow

DEMO_USERS = [
    ("admin@rmparking.com", "Administrador Principal", Role.SUPER_ADMIN),
    ("operador@rmparking.com", "Operador de Turno", Role.OPERATOR),
]

DEMO_SITE = {"name": "RM Parking Central", "address": "Calle 123 # 45-67", "capacity": 50, "base_rate": 5000}

DEMO_TARIFFS = [
    # vehicle_type, base_rate, hourly_rate, day_rate
    ("CAR", 5000, 3000, 25000),
    ("MOTORCYCLE", 2000, 1000, 10000),
]


async def seed(db):
    for email, name, role in DEMO_USERS:
        if not db.query(User).filter(User.email == email).first():
            db.add(User(email=email, full_name=name, role=role.value, is_active=True, created_at=utcnow()))
            print(f"✅ User created: {email} ({role.value})")
    db.commit()

    site = db.query(Site).filter(Site.name == DEMO_SITE["name"]).first()
    if not site:
        site = await parking_service.create_site(db, **DEMO_SITE)
        print(f"✅ Site created: {site.name} (id={site.id})")

    for vehicle_type, base, hourly, day in DEMO_TARIFFS:
        await parking_service.set_tariff(db, site.id, vehicle_type, base, hourly, day)
        print(f"   ✓ Tariff {vehicle_type}: base={base} hourly={hourly} day={day}")


def main():
    print("🌱 Seeding demo data...")
    create_tables()
    db = SessionLocal()
    try:
        asyncio.run(seed(db))
    finally:
        db.close()
    print("🌱 Seed finished.")


if __name__ == "__main__":
    main()
