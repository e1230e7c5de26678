"""Concurrency tests for booking operations."""

import asyncio
from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from cottage_booking.core.database import Base
from cottage_booking.core.exceptions import DatesUnavailableError
from cottage_booking.core.locks import CottageLocks
from cottage_booking.models import AvailabilityRecord, Booking, BookingStatus
from cottage_booking.schemas.booking import CreateBookingRequest, CustomerInfo
from cottage_booking.schemas.catalog import CreateCottageRequest, CreatePackageRequest
from cottage_booking.services.booking_service import BookingService
from cottage_booking.services.catalog_service import CatalogService

pytestmark = pytest.mark.concurrency


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """Sessions on separate connections to one SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'concurrency.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def catalog_ids(file_session_factory):
    """IDs of one cottage and one package."""
    async with file_session_factory() as session:
        catalog = CatalogService(session)
        cottage = await catalog.create_cottage(CreateCottageRequest(
            name="Kingfisher", max_adults=2, base_price_per_night=Decimal("3500.00")
        ))
        package = await catalog.create_package(CreatePackageRequest(
            name="Basic", price=Decimal("0.00")
        ))
        return cottage.id, package.id


def _request(cottage_id, package_id, check_in: date, length: int, guest: int) -> CreateBookingRequest:
    return CreateBookingRequest(
        cottage_id=cottage_id,
        package_id=package_id,
        check_in_date=check_in,
        check_out_date=check_in + timedelta(days=length),
        adults=1,
        customer_info=CustomerInfo(name=f"Guest {guest}", email=f"guest{guest}@example.com"),
    )


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_same_range_booked_once(file_session_factory, catalog_ids):
    """Two simultaneous requests for the same nights: one wins, one conflicts."""
    cottage_id, package_id = catalog_ids
    locks = CottageLocks()

    async def book(guest: int):
        async with file_session_factory() as session:
            booking = await BookingService(session, locks=locks).create_booking(
                _request(cottage_id, package_id, date(2024, 8, 1), 3, guest)
            )
            return booking.id

    results = await asyncio.gather(book(1), book(2), return_exceptions=True)

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert isinstance(failures[0], DatesUnavailableError)
    assert await _count(file_session_factory, Booking) == 1
    assert await _count(file_session_factory, AvailabilityRecord) == 3


@pytest.mark.asyncio
async def test_overlapping_requests_never_share_a_night(file_session_factory, catalog_ids):
    """Many overlapping requests leave every night held by at most one booking."""
    cottage_id, package_id = catalog_ids
    locks = CottageLocks()
    start = date(2024, 9, 1)

    async def book(guest: int):
        async with file_session_factory() as session:
            booking = await BookingService(session, locks=locks).create_booking(
                _request(cottage_id, package_id, start + timedelta(days=guest % 7), 3, guest)
            )
            return booking.id

    results = await asyncio.gather(*(book(i) for i in range(20)), return_exceptions=True)

    assert all(isinstance(r, DatesUnavailableError) for r in results if isinstance(r, Exception))
    booked = {r for r in results if not isinstance(r, Exception)}
    assert booked

    async with file_session_factory() as session:
        rows = (await session.execute(
            select(AvailabilityRecord).where(AvailabilityRecord.cottage_id == cottage_id)
        )).scalars().all()

    assert len(rows) == len({row.date for row in rows})
    assert {row.booking_id for row in rows} == booked
    assert len(rows) == 3 * len(booked)


@pytest.mark.asyncio
async def test_cancel_and_rebook_race(file_session_factory, catalog_ids):
    """A cancellation racing a rebooking never leaves the nights double held."""
    cottage_id, package_id = catalog_ids
    locks = CottageLocks()

    async with file_session_factory() as session:
        original = await BookingService(session, locks=locks).create_booking(
            _request(cottage_id, package_id, date(2024, 10, 1), 2, 0)
        )
        original_id = original.id

    async def cancel():
        async with file_session_factory() as session:
            booking = await BookingService(session, locks=locks).update_booking_status(
                original_id, BookingStatus.CANCELLED
            )
            return booking.id

    async def rebook():
        async with file_session_factory() as session:
            booking = await BookingService(session, locks=locks).create_booking(
                _request(cottage_id, package_id, date(2024, 10, 1), 2, 1)
            )
            return booking.id

    cancelled, rebooked = await asyncio.gather(cancel(), rebook(), return_exceptions=True)

    assert cancelled == original_id
    async with file_session_factory() as session:
        rows = (await session.execute(
            select(AvailabilityRecord).where(AvailabilityRecord.is_available.is_(False))
        )).scalars().all()

    if isinstance(rebooked, Exception):
        assert isinstance(rebooked, DatesUnavailableError)
        assert rows == []
    else:
        assert {row.booking_id for row in rows} == {rebooked}
        assert len(rows) == 2


@pytest.mark.asyncio
async def test_unshared_registries_still_book_once(file_session_factory, catalog_ids):
    """Services without a common lock registry fall back on the per-night constraint."""
    cottage_id, package_id = catalog_ids

    async def book(guest: int):
        async with file_session_factory() as session:
            booking = await BookingService(session).create_booking(
                _request(cottage_id, package_id, date(2024, 11, 1), 3, guest)
            )
            return booking.id

    results = await asyncio.gather(book(1), book(2), return_exceptions=True)

    assert len([r for r in results if not isinstance(r, Exception)]) == 1
    assert [type(r) for r in results if isinstance(r, Exception)] == [DatesUnavailableError]
    assert await _count(file_session_factory, Booking) == 1
    assert await _count(file_session_factory, AvailabilityRecord) == 3
