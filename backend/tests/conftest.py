import os
from decimal import Decimal
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Must be set before the application modules build their default engine
os.environ.setdefault("PYTEST_RUN", "1")

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / ".env.test")

from reservations.database import get_db  # noqa: E402
from reservations.main import app  # noqa: E402
from reservations.models import Option  # noqa: E402
from reservations.models.base import BaseModel  # noqa: E402

OPT1 = "11111111-1111-4111-8111-111111111111"
OPT2 = "22222222-2222-4222-8222-222222222222"
OPT3 = "33333333-3333-4333-8333-333333333333"
INACTIVE_OPT = "44444444-4444-4444-8444-444444444444"
UNKNOWN_OPT = "55555555-5555-4555-8555-555555555555"


@pytest.fixture
def Session():
    """In-memory database wired into the app through ``get_db``."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    BaseModel.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)

    def override_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    engine.dispose()


@pytest.fixture
def db(Session):
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def options(Session):
    """Three active options and one inactive one."""
    db = Session()
    db.add_all(
        [
            Option(id=OPT1, name="Keuken", description="Kitchen", price=Decimal("50"), active=True, sort_order=2),
            Option(id=OPT2, name="Grote zaal", price=Decimal("100"), active=True, sort_order=1),
            Option(id=OPT3, name="Tuin", price=Decimal("25.50"), active=True, sort_order=3),
            Option(id=INACTIVE_OPT, name="Zwembad", price=Decimal("30"), active=False, sort_order=0),
        ]
    )
    db.commit()
    db.close()
    return {"opt1": OPT1, "opt2": OPT2, "opt3": OPT3, "inactive": INACTIVE_OPT, "unknown": UNKNOWN_OPT}


@pytest.fixture
def client(Session):
    return TestClient(app)


@pytest.fixture
def booking_payload(options):
    """Build a valid create payload; keyword arguments override fields."""

    def build(**overrides):
        data = {
            "name": "John Doe",
            "email": "john@example.com",
            "phone": "1234567890",
            "reservationType": [OPT1],
            "date": "2024-01-15",
            "startTime": "10:00",
            "duration": "2",
        }
        data.update(overrides)
        return data

    return build
