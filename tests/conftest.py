import itertools
import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("SIMULATOR_ENABLED", "false")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from busbuddy.database import Base, get_db
from busbuddy.main import app
from busbuddy.models.bus import Bus

_bus_numbers = itertools.count(1)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_bus(db):
    def _make(**overrides) -> Bus:
        fields = {
            "bus_number": f"TST{next(_bus_numbers):03d}",
            "route_name": "Test Line",
            "latitude": 12.2958,
            "longitude": 76.6394,
            "status": "active",
            "current_speed": 30.0,
            "occupancy": 40,
        }
        fields.update(overrides)
        bus = Bus(**fields)
        db.add(bus)
        db.commit()
        db.refresh(bus)
        return bus

    return _make
