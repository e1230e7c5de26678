"""Background worker that completes finished stays."""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from ..services.booking_service import BookingService
from .base import BaseWorker

logger = logging.getLogger(__name__)


class StayCompletionWorker(BaseWorker):
    """
    Marks confirmed bookings as completed once their check-out day arrives.

    Completed stays keep their availability rows; the nights stay held.
    """

    def __init__(self, interval_seconds: int = 3600, **kwargs):
        super().__init__(name="StayCompletion", interval_seconds=interval_seconds, **kwargs)

    async def process(self, db: AsyncSession) -> int:
        today = datetime.utcnow().date()
        completed = await BookingService(db).complete_finished_stays(today)

        if completed > 0:
            logger.info(
                f"Completed {completed} stays",
                extra={"completed": completed, "as_of": today.isoformat(), "worker": self.name}
            )
        return completed
