from __future__ import annotations

import os

os.environ.setdefault("PAYSLIP_DATABASE_URL", "sqlite://")
os.environ.setdefault("PAYSLIP_JSON_LOGS", "false")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from payslip.core.clock import get_clock
from payslip.db.session import Base, get_session, get_session_factory
from payslip.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday 2 June 2025, mid-afternoon
DEFAULT_NOW = datetime(2025, 6, 2, 14, 0)


def override_get_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_session] = override_get_session
app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    """Mutable wall clock for the submission endpoints: set ``clock.now``."""

    class FrozenClock:
        now = DEFAULT_NOW

        def __call__(self) -> datetime:
            return self.now

    frozen = FrozenClock()
    app.dependency_overrides[get_clock] = lambda: frozen
    yield frozen
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client

