"""Operational endpoints served by an app wired to its default store."""

import pytest
from httpx import ASGITransport, AsyncClient

from cottage_booking.main import create_app


@pytest.mark.asyncio
async def test_ready_against_default_store():
    """The configured in-memory store answers the readiness query."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": "ok"}


@pytest.mark.asyncio
async def test_metrics_expose_reservation_counters():
    """Reservation counters are scraped alongside the request metrics."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.post("/v1/health/ping")
        response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    for counter in (
        "bookings_created_total",
        "booking_conflicts_total",
        "availability_checks_total",
        "safari_bookings_created_total",
        "http_requests_total",
    ):
        assert counter in response.text


@pytest.mark.asyncio
async def test_info_reports_lenient_policy_by_default():
    """Status changes are unrestricted unless strict mode is configured."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/info")

    assert response.json()["features"]["strict_status_transitions"] is False
