"""Safari inquiry service."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.store import store_call
from ..models.safari import InquiryStatus, SafariInquiry
from ..schemas.safari import CreateSafariInquiryRequest

logger = logging.getLogger(__name__)


class InquiryService:
    """Service for safari leads captured outside the booking flow."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_inquiry(self, request: CreateSafariInquiryRequest) -> SafariInquiry:
        """Record a new inquiry with status ``New``."""
        inquiry = SafariInquiry(
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            preferred_date=request.preferred_date,
            preferred_time=request.preferred_time,
            num_adults=request.num_adults,
            num_children=request.num_children,
            notes=request.notes,
            status=InquiryStatus.NEW.value,
            source=request.source
        )
        try:
            self.db.add(inquiry)
            await store_call(self.db.commit(), "create_safari_inquiry")
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Safari inquiry created",
            extra={"inquiry_id": str(inquiry.id), "source": inquiry.source}
        )
        return inquiry

    async def list_inquiries(self, status: Optional[InquiryStatus] = None) -> list[SafariInquiry]:
        """Inquiries, newest first, optionally filtered by status."""
        stmt = select(SafariInquiry).order_by(SafariInquiry.created_date.desc())
        if status is not None:
            stmt = stmt.where(SafariInquiry.status == status.value)
        result = await store_call(self.db.execute(stmt), "list_safari_inquiries")
        return list(result.scalars().all())

    async def update_inquiry_status(self, inquiry_id: UUID, status: InquiryStatus) -> SafariInquiry:
        """
        Move an inquiry through follow-up.

        Raises:
            NotFoundError: If the inquiry does not exist
        """
        stmt = select(SafariInquiry).where(SafariInquiry.id == inquiry_id)
        result = await store_call(self.db.execute(stmt), "get_safari_inquiry")
        inquiry = result.scalar_one_or_none()
        if not inquiry:
            raise NotFoundError(
                resource_type="safari inquiry",
                resource_id=str(inquiry_id),
                detail="Safari inquiry not found"
            )

        previous = inquiry.status
        inquiry.status = status.value
        inquiry.updated_date = datetime.utcnow()
        try:
            await store_call(self.db.commit(), "update_safari_inquiry_status")
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Safari inquiry status updated",
            extra={"inquiry_id": str(inquiry_id), "from_status": previous, "to_status": status.value}
        )
        return inquiry
