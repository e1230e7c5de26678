"""Test configuration and fixtures."""

import os

# Settings are read at import time; keep the app off PostgreSQL and workers off
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("WORKERS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "development")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cottage_booking.core.database import Base, get_db  # noqa: E402
from cottage_booking.core.locks import CottageLocks  # noqa: E402
from cottage_booking.models import *  # noqa: E402,F403 - Import all models
from cottage_booking.schemas.booking import CreateBookingRequest, CustomerInfo  # noqa: E402
from cottage_booking.schemas.catalog import CreateCottageRequest, CreatePackageRequest  # noqa: E402
from cottage_booking.services.catalog_service import CatalogService  # noqa: E402

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def test_session(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def cottage_locks():
    """Range-lock registry shared by the services of one test."""
    return CottageLocks()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session):
    """The real application with its store swapped for the test session."""
    from cottage_booking.main import create_app

    app = create_app()

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_cottage_data():
    """Sample cottage data for testing."""
    return {
        "name": "Hornbill",
        "description": "Forest-facing cottage",
        "max_adults": 2,
        "max_children": 1,
        "base_price_per_night": Decimal("4500.00"),
        "amenities": ["King bed", "Private deck"],
    }


@pytest.fixture
def sample_package_data():
    """Sample package data for testing."""
    return {
        "name": "Honeymoon",
        "description": "Dinner and two safaris",
        "price": Decimal("6000.00"),
        "includes_safari": True,
        "safari_count": 2,
        "features": ["Candle-lit dinner", "2 safaris"],
    }


@pytest_asyncio.fixture
async def cottage(test_session, sample_cottage_data):
    """An active cottage."""
    return await CatalogService(test_session).create_cottage(CreateCottageRequest(**sample_cottage_data))


@pytest_asyncio.fixture
async def inactive_cottage(test_session):
    """A cottage that is no longer offered."""
    return await CatalogService(test_session).create_cottage(
        CreateCottageRequest(
            name="Old Barn",
            max_adults=4,
            base_price_per_night=Decimal("1000.00"),
            is_active=False,
        )
    )


@pytest_asyncio.fixture
async def package(test_session, sample_package_data):
    """An active package."""
    return await CatalogService(test_session).create_package(CreatePackageRequest(**sample_package_data))


@pytest.fixture
def make_booking_request(cottage, package):
    """Build a booking request for the sample cottage and package."""
    cottage_id, package_id = cottage.id, package.id

    def _make(
        check_in: date = date(2024, 6, 1),
        check_out: date = date(2024, 6, 4),
        adults: int = 2,
        children: int = 0,
    ) -> CreateBookingRequest:
        return CreateBookingRequest(
            cottage_id=cottage_id,
            package_id=package_id,
            check_in_date=check_in,
            check_out_date=check_out,
            adults=adults,
            children=children,
            customer_info=CustomerInfo(name="Asha Rao", email="asha@example.com", phone="+91 98450 00000"),
        )

    return _make


@pytest.fixture
def booking_payload(cottage, package):
    """camelCase createBooking body for the sample cottage and package."""
    return {
        "cottageId": str(cottage.id),
        "packageId": str(package.id),
        "checkInDate": "2024-06-01",
        "checkOutDate": "2024-06-04",
        "adults": 2,
        "children": 0,
        "customerInfo": {"name": "Asha Rao", "email": "asha@example.com"},
        "specialRequests": "Late arrival",
    }
