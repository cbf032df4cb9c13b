"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roi_calculator.main import app
from roi_calculator.calculations.roi import Assumptions
from roi_calculator.config import get_settings
from roi_calculator.db.database import get_db
from roi_calculator.db.models import Base


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency globally for all tests
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep outbound integrations switched off unless a test enables them."""
    settings = get_settings()
    monkeypatch.setattr(settings, "google_apps_script_url", "")
    monkeypatch.setattr(settings, "google_api_key", "")
    monkeypatch.setattr(settings, "lead_notification_email", "")
    return settings


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def minimum_assumptions():
    """The calculator's starting position: every slider at its minimum."""
    return Assumptions(
        employees=10,
        salary=20000,
        training_hours=0,
        turnover=0,
        replace_cost=5000,
        term=1,
    )


@pytest.fixture
def typical_assumptions():
    """A mid-sized deployment over a three-year term."""
    return Assumptions(
        employees=250,
        salary=60000,
        training_hours=40,
        turnover=15,
        replace_cost=20000,
        term=3,
    )
