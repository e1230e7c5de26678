"""Unit tests for background workers."""

from datetime import date, datetime, timedelta

import pytest

from cottage_booking.models import BookingStatus, IdempotencyRecord
from cottage_booking.services.booking_service import BookingService
from cottage_booking.workers import IdempotencyCleanupWorker, StayCompletionWorker
from cottage_booking.workers.manager import WorkerManager


@pytest.mark.asyncio
async def test_stay_completion_worker(test_session, test_session_factory, make_booking_request):
    """One iteration completes confirmed stays that have ended."""
    service = BookingService(test_session)
    past = await service.create_booking(make_booking_request(date(2024, 6, 1), date(2024, 6, 4)))
    past_id = past.id
    await service.update_booking_status(past_id, BookingStatus.CONFIRMED)

    worker = StayCompletionWorker(session_factory=test_session_factory)
    completed = await worker.run_once()

    assert completed == 1
    assert (await service.get_booking_by_id(past_id)).status == BookingStatus.COMPLETED
    assert await worker.run_once() == 0


@pytest.mark.asyncio
async def test_idempotency_cleanup_worker(test_session, test_session_factory):
    """One iteration purges expired idempotency records."""
    test_session.add(IdempotencyRecord(
        idempotency_key="old",
        operation="createBooking",
        request_body_hash="0" * 64,
        response_status_code=201,
        response_body="{}",
        expires_at=datetime.utcnow() - timedelta(hours=1),
    ))
    await test_session.commit()

    worker = IdempotencyCleanupWorker(session_factory=test_session_factory)

    assert await worker.run_once() == 1
    assert await worker.run_once() == 0


@pytest.mark.asyncio
async def test_worker_start_and_stop(test_session_factory):
    """Workers report their running state."""
    worker = IdempotencyCleanupWorker(interval_seconds=3600, session_factory=test_session_factory)

    await worker.start()
    assert worker.is_running
    await worker.stop()
    assert not worker.is_running


def test_manager_registers_workers():
    """Test the manager knows both workers and none are running."""
    manager = WorkerManager()

    assert manager.get_worker_status() == {"stay_completion": False, "idempotency_cleanup": False}
    assert isinstance(manager.get_worker("stay_completion"), StayCompletionWorker)
    with pytest.raises(KeyError):
        manager.get_worker("unknown")
