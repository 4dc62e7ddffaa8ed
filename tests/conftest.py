"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before and dropped after every
test, so each test starts with an empty ledger.
"""

import os

# Must be set before pos_ledger is imported: settings are read once.
TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["SEED_CHART_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pos_ledger.main import app
from pos_ledger.models import Base
from pos_ledger.models.base import get_db
from pos_ledger.services.chart_of_accounts import ChartOfAccountsService


# timeout lets concurrent writers wait for SQLite's write lock
# instead of failing immediately.
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False, "timeout": 30},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    """For tests that need several independent sessions."""
    return TestSessionLocal


@pytest.fixture
def chart(db_session):
    """Seed the default chart and return its accounts keyed by code."""
    service = ChartOfAccountsService(db_session)
    service.seed_default_chart_of_accounts()
    db_session.commit()
    return {account.code: account for account in service.list_accounts()}


@pytest.fixture
def client(db_session):
    """
    Provide a test client bound to the test database.

    get_db is overridden so the app uses the test session.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
