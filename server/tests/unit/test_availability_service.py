"""Unit tests for availability service."""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from cottage_booking.core.exceptions import DatesUnavailableError, ValidationError
from cottage_booking.models import AvailabilityRecord
from cottage_booking.services.availability_service import AvailabilityService
from cottage_booking.services.booking_service import BookingService


@pytest.mark.asyncio
async def test_empty_calendar_is_available(test_session, cottage):
    """No records in range means the range is free."""
    service = AvailabilityService(test_session)

    assert await service.is_range_available(cottage.id, date(2024, 6, 1), date(2024, 6, 4))
    assert await service.find_conflicting_dates(cottage.id, date(2024, 6, 1), date(2024, 6, 4)) == []


@pytest.mark.asyncio
async def test_reserve_range_claims_each_night(test_session, cottage, make_booking_request):
    """A booking over [d0, d3) holds exactly three rows that point at it."""
    booking = await BookingService(test_session).create_booking(make_booking_request())
    service = AvailabilityService(test_session)

    records = await service.get_records(cottage.id, date(2024, 6, 1), date(2024, 6, 10))

    assert [r.date for r in records] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert all(r.is_available is False for r in records)
    assert all(r.booking_id == booking.id for r in records)
    assert not await service.is_range_available(cottage.id, date(2024, 6, 1), date(2024, 6, 4))


@pytest.mark.asyncio
async def test_check_out_day_stays_free(test_session, cottage, make_booking_request):
    """The departure day can start the next stay."""
    await BookingService(test_session).create_booking(make_booking_request())
    service = AvailabilityService(test_session)

    assert await service.is_range_available(cottage.id, date(2024, 6, 4), date(2024, 6, 6))
    assert await service.find_conflicting_dates(cottage.id, date(2024, 5, 30), date(2024, 6, 2)) == [
        date(2024, 6, 1)
    ]


@pytest.mark.asyncio
async def test_check_availability_reports_conflicts(test_session, cottage, make_booking_request):
    """Held nights are returned with the unavailable message."""
    cottage_id = cottage.id
    await BookingService(test_session).create_booking(make_booking_request())

    result = await AvailabilityService(test_session).check_availability(
        cottage_id, date(2024, 6, 3), date(2024, 6, 5)
    )

    assert result.is_available is False
    assert result.conflicting_dates == [date(2024, 6, 3)]
    assert result.message == "Selected dates are not available for this cottage."
    assert result.cottage is None


@pytest.mark.asyncio
async def test_check_availability_returns_cottage(test_session, cottage):
    """A free range of an active cottage comes back with the cottage."""
    result = await AvailabilityService(test_session).check_availability(
        cottage.id, date(2024, 7, 1), date(2024, 7, 3)
    )

    assert result.is_available is True
    assert result.cottage is not None
    assert result.cottage.name == "Hornbill"
    assert result.message == "Cottage is available for selected dates."


@pytest.mark.asyncio
async def test_check_availability_unknown_or_inactive_cottage(test_session, inactive_cottage):
    """Missing and inactive cottages are unavailable, not errors."""
    service = AvailabilityService(test_session)

    missing = await service.check_availability(uuid4(), date(2024, 7, 1), date(2024, 7, 3))
    inactive = await service.check_availability(inactive_cottage.id, date(2024, 7, 1), date(2024, 7, 3))

    for result in (missing, inactive):
        assert result.is_available is False
        assert result.message == "Cottage not found or inactive."


@pytest.mark.asyncio
async def test_check_availability_rejects_empty_range(test_session, cottage):
    """Check-out must come after check-in."""
    with pytest.raises(ValidationError):
        await AvailabilityService(test_session).check_availability(
            cottage.id, date(2024, 7, 3), date(2024, 7, 3)
        )


@pytest.mark.asyncio
async def test_reserve_range_rejects_held_night(test_session, cottage, make_booking_request):
    """A claim on a held night fails at the store and nothing new is written."""
    cottage_id = cottage.id
    booking = await BookingService(test_session).create_booking(make_booking_request())
    booking_id = booking.id
    service = AvailabilityService(test_session)

    with pytest.raises(DatesUnavailableError) as exc_info:
        await service.reserve_range(cottage_id, date(2024, 6, 3), date(2024, 6, 5), uuid4())
    await test_session.rollback()

    assert exc_info.value.dates == [date(2024, 6, 3)]
    count = await test_session.execute(select(func.count()).select_from(AvailabilityRecord))
    assert count.scalar_one() == 3
    held = await service.get_booking_records(booking_id)
    assert len(held) == 3


@pytest.mark.asyncio
async def test_release_booking_frees_rows(test_session, cottage, make_booking_request):
    """Released nights keep their rows but become claimable again."""
    cottage_id = cottage.id
    booking = await BookingService(test_session).create_booking(make_booking_request())
    service = AvailabilityService(test_session)

    released = await service.release_booking(booking.id)
    await test_session.commit()

    assert released == 3
    assert await service.is_range_available(cottage_id, date(2024, 6, 1), date(2024, 6, 4))
    assert await service.get_booking_records(booking.id) == []

    claimed = await service.reserve_range(cottage_id, date(2024, 6, 2), date(2024, 6, 5), booking.id)
    await test_session.commit()

    assert claimed == [date(2024, 6, 2), date(2024, 6, 3), date(2024, 6, 4)]
    records = await service.get_records(cottage_id, date(2024, 6, 1), date(2024, 6, 5))
    assert len(records) == 4
    assert [r.is_available for r in records] == [True, False, False, False]
