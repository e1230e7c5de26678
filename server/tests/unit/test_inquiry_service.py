"""Unit tests for safari inquiry service."""

from datetime import date
from uuid import uuid4

import pytest

from cottage_booking.core.exceptions import NotFoundError
from cottage_booking.models import InquiryStatus
from cottage_booking.schemas.safari import CreateSafariInquiryRequest
from cottage_booking.services.inquiry_service import InquiryService


def _inquiry(email: str = "lead@example.com") -> CreateSafariInquiryRequest:
    return CreateSafariInquiryRequest(
        customer_name="Ravi Kumar",
        customer_email=email,
        preferred_date=date(2024, 7, 10),
        preferred_time="Morning",
        num_adults=2,
        num_children=1,
        notes="First visit",
    )


@pytest.mark.asyncio
async def test_create_inquiry(test_session):
    """New inquiries start as New and default to the website source."""
    inquiry = await InquiryService(test_session).create_inquiry(_inquiry())

    assert inquiry.id is not None
    assert inquiry.status == InquiryStatus.NEW
    assert inquiry.source == "Website"
    assert inquiry.num_children == 1


@pytest.mark.asyncio
async def test_list_and_update_inquiries(test_session):
    """Inquiries can be filtered by follow-up status."""
    service = InquiryService(test_session)
    first = await service.create_inquiry(_inquiry("first@example.com"))
    await service.create_inquiry(_inquiry("second@example.com"))

    contacted = await service.update_inquiry_status(first.id, InquiryStatus.CONTACTED)
    assert contacted.status == InquiryStatus.CONTACTED

    assert len(await service.list_inquiries()) == 2
    new = await service.list_inquiries(InquiryStatus.NEW)
    assert [i.customer_email for i in new] == ["second@example.com"]
    assert await service.list_inquiries(InquiryStatus.CLOSED) == []


@pytest.mark.asyncio
async def test_update_inquiry_status_not_found(test_session):
    """Test updating a non-existent inquiry."""
    with pytest.raises(NotFoundError):
        await InquiryService(test_session).update_inquiry_status(uuid4(), InquiryStatus.CLOSED)
