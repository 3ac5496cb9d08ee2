# tests/conftest.py
"""Shared fixtures: a fresh in-memory SQLite database per test, seeded users/slots, API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before slotify.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-test-secret-test-secret-123")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("SEED_DEFAULTS", "false")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from slotify.database import Base, Database
from slotify.main import create_app
from slotify.models.parking_slot import ParkingSlot, SlotType
from slotify.models.user import EmployeeProfile, Role, User
from slotify.utils.security import hash_password

ADMIN_PASSWORD = "Admin@1234"
SECURITY_PASSWORD = "Security@1234"
EMPLOYEE_PASSWORD = "Employee@1234"


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_tables()
    yield database
    Base.metadata.drop_all(bind=database.engine)
    database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    yield session
    session.close()


def make_employee(db, email, employee_id, vehicle_id, password=EMPLOYEE_PASSWORD):
    user = User(email=email, password_hash=hash_password(password), role=Role.EMPLOYEE)
    db.add(user)
    db.flush()
    db.add(EmployeeProfile(user_id=user.id, employee_id=employee_id,
                           vehicle_id=vehicle_id, phone_number="9876543210"))
    db.commit()
    return user


@pytest.fixture
def seeded(db):
    admin = User(email="admin@test.com", password_hash=hash_password(ADMIN_PASSWORD), role=Role.ADMIN)
    security = User(email="security@test.com", password_hash=hash_password(SECURITY_PASSWORD),
                    role=Role.SECURITY)
    db.add_all([admin, security])
    db.commit()

    employee = make_employee(db, "employee@test.com", "EMP001", "KA01AB1234")

    slot1 = ParkingSlot(slot_code="M1001", level=1, type=SlotType.TWO_WHEELER)
    slot2 = ParkingSlot(slot_code="C2001", level=2, type=SlotType.FOUR_WHEELER)
    db.add_all([slot1, slot2])
    db.commit()

    return SimpleNamespace(admin=admin, security=security, employee=employee, slot1=slot1, slot2=slot2)


@pytest.fixture
def client(database):
    return TestClient(create_app(database))


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def tokens(client, seeded):
    """Access tokens for the three seeded accounts, obtained through the login endpoints."""
    def _login(path, email, password):
        resp = client.post(f"/api/v1/auth/{path}", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return SimpleNamespace(
        admin=_login("login", "admin@test.com", ADMIN_PASSWORD),
        security=_login("login", "security@test.com", SECURITY_PASSWORD),
        employee=_login("signin", "employee@test.com", EMPLOYEE_PASSWORD),
    )
