"""
Central pytest configuration for the clinic backend tests.

This file provides common fixtures for both unit and integration tests:
an isolated in-memory SQLite database per test, repositories and services
bound to it, and small factories for seeding rows directly.
"""

import os
from datetime import datetime, timedelta, timezone

# Test environment (set before any clinic module reads its configuration)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"  # Keep hashing fast in tests
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from clinic.db import base as models  # noqa: E402
from clinic.db.session import Base, enable_unicode_lower  # noqa: E402
from clinic.repositories.patient_repo import PatientRepository  # noqa: E402
from clinic.repositories.user_repo import UserRepository  # noqa: E402
from clinic.services.patient_service import PatientService  # noqa: E402
from clinic.services.user_service import UserService  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        if "integration" in path:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.database)


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database with the full schema."""
    engine = enable_unicode_lower(
        create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Provide a database session bound to the per-test database."""
    TestSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine
    )
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def patient_repo(db_session) -> PatientRepository:
    return PatientRepository(db_session)


@pytest.fixture
def user_repo(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def patient_service(patient_repo) -> PatientService:
    return PatientService(patient_repo)


@pytest.fixture
def user_service(user_repo) -> UserService:
    return UserService(user_repo)


# =====================================================
# SEEDING FACTORIES
# =====================================================


@pytest.fixture
def make_patient(db_session):
    """Insert a patient row directly; ``minutes`` offsets created_at from BASE_TIME."""

    def _make(minutes: int = 0, **overrides) -> models.Patient:
        values = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "gender": "female",
            "phone": "+44 20 0000 0000",
            "email": "ada@example.com",
            "notes": None,
            "created_at": BASE_TIME + timedelta(minutes=minutes),
        }
        values.update(overrides)
        row = models.Patient(**values)
        db_session.add(row)
        db_session.commit()
        return row

    return _make


@pytest.fixture
def make_user(db_session):
    """Insert a user row directly; ``minutes`` offsets created_at from BASE_TIME."""
    counter = {"n": 0}

    def _make(role: str = "doctor", minutes: int = 0, **overrides) -> models.User:
        counter["n"] += 1
        values = {
            "email": f"{role}{counter['n']}@clinic.test",
            "firstname": "Test",
            "lastname": f"User{counter['n']}",
            "role": role,
            "password_hash": "not-a-real-hash",
            "is_active": True,
            "must_change_password": False,
            "created_at": BASE_TIME + timedelta(minutes=minutes),
        }
        values.update(overrides)
        row = models.User(**values)
        db_session.add(row)
        db_session.commit()
        return row

    return _make
