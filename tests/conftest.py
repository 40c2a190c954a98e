"""Shared fixtures: an isolated in-memory SQLite database per test."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables, get_db
from app.models.site import Site
from app.models.tariff import Tariff


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def site(db):
    """RM Parking Central with CAR 5000/3000 and MOTORCYCLE 2000/1000."""
    s = Site(name="RM Parking Central", address="Calle 123 # 45-67", capacity=50, base_rate=4000)
    db.add(s)
    db.flush()
    db.add_all([
        Tariff(site_id=s.id, vehicle_type="CAR", base_rate=5000, hourly_rate=3000, day_rate=25000),
        Tariff(site_id=s.id, vehicle_type="MOTORCYCLE", base_rate=2000, hourly_rate=1000, day_rate=10000),
    ])
    db.commit()
    return s


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
