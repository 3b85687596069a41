"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, PROJECT_ROOT)

from enums.currency import Currency
from enums.runtime_environment import RuntimeEnvironment

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.RUNTIME_ENVIRONMENT = RuntimeEnvironment.TEST
config_mock.DB_NAME = "test.db"
config_mock.LANGUAGE = "en"  # For Localizator
config_mock.CURRENCY = Currency.USD
config_mock.PAGE_ENTRIES = 20
config_mock.LOCATION_API_URL = "https://locations.test/api"
config_mock.LOCATION_API_TIMEOUT_SECONDS = 5
config_mock.PHONE_NUMBER_PATTERN = r"^[0-9]{10}$"
config_mock.RECENT_ORDERS_LIMIT = 5
config_mock.DATA_RETENTION_DAYS = 30
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5
config_mock.WEBAPP_HOST = "127.0.0.1"
config_mock.WEBAPP_PORT = 8000
config_mock.WEBAPP_CORS_ALLOWED_ORIGINS = []
config_mock.PASSWORD_HASH_ITERATIONS = 1000

sys.modules['config'] = config_mock


@pytest.fixture(autouse=True)
def project_root_cwd(monkeypatch):
    """Localizator reads ./l10n relative to the working directory."""
    monkeypatch.chdir(PROJECT_ROOT)


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """
    In-memory SQLite database shared by all connections of the test.

    StaticPool keeps one connection so the FastAPI TestClient thread sees
    the same database as the test.
    """
    from models.base import Base
    import models  # noqa: F401  registers all tables

    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Sync session; db.session_* helpers and repositories accept it like an AsyncSession."""
    session = Session(engine, expire_on_commit=False)
    yield session
    session.rollback()
    session.close()


# ============================================================================
# Session / Location Fixtures
# ============================================================================

@pytest.fixture
def user_session():
    from models.session import UserSession
    session = UserSession()
    session.login("user-1", "Test User")
    return session


@pytest.fixture
def location_tree():
    """Province -> district -> ward reference data served by FakeLocationClient."""
    from models.location import LocationOption
    return {
        "provinces": [
            LocationOption(code="01", name="Ha Noi"),
            LocationOption(code="79", name="Ho Chi Minh"),
        ],
        "districts": {
            "01": [LocationOption(code="001", name="Ba Dinh"), LocationOption(code="002", name="Hoan Kiem")],
            "79": [LocationOption(code="760", name="Quan 1")],
        },
        "wards": {
            "001": [LocationOption(code="00001", name="Phuc Xa"), LocationOption(code="00004", name="Truc Bach")],
            "002": [LocationOption(code="00037", name="Phuc Tan")],
            "760": [LocationOption(code="26734", name="Tan Dinh")],
        },
    }


class FakeLocationClient:
    """
    Stand-in for LocationClient serving `location_tree`.

    `gates[code]` holds an asyncio.Event the fetch for that parent code waits
    on, `failures` holds parent codes (or "provinces") whose fetch raises.
    """

    def __init__(self, tree: dict):
        self.tree = tree
        self.gates = {}
        self.failures = set()
        self.calls = []

    async def _serve(self, key, options, level):
        from exceptions.location import LocationFetchException
        self.calls.append(key)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        if key in self.failures:
            raise LocationFetchException(level, "HTTP 503", None if key == "provinces" else key)
        return list(options)

    async def fetch_provinces(self):
        return await self._serve("provinces", self.tree["provinces"], "province")

    async def fetch_districts(self, province_code):
        return await self._serve(province_code, self.tree["districts"].get(province_code, []), "district")

    async def fetch_wards(self, district_code):
        return await self._serve(district_code, self.tree["wards"].get(district_code, []), "ward")


@pytest.fixture
def location_client(location_tree):
    return FakeLocationClient(location_tree)


@pytest.fixture
def selector(user_session, location_client):
    from services.address_selector import AddressSelector
    return AddressSelector(user_session, location_client)


# ============================================================================
# Web Fixtures
# ============================================================================

@pytest.fixture
def client(db_session):
    """FastAPI TestClient whose routers all use the in-memory test session."""
    from contextlib import asynccontextmanager
    from unittest.mock import patch
    from fastapi.testclient import TestClient
    from app import app

    @asynccontextmanager
    async def test_db_session():
        yield db_session

    with patch("web.api_router.get_db_session", test_db_session), \
            patch("web.product_router.get_db_session", test_db_session), \
            patch("web.user_router.get_db_session", test_db_session):
        yield TestClient(app)
