"""Per-cottage serialization of the availability check-and-reserve step."""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from .store import store_call

logger = logging.getLogger(__name__)


class CottageLocks:
    """
    Registry of ``asyncio.Lock`` objects keyed by cottage id.

    One registry is created per application and handed to the services that
    need it. Inside a process it stops two requests from interleaving their
    availability check and reservation for the same cottage; on PostgreSQL a
    transaction-scoped advisory lock extends that across processes. The
    ``(cottage_id, date)`` unique constraint remains the final guard.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, db: AsyncSession, cottage_id: str) -> AsyncIterator[None]:
        """
        Hold the range lock for ``cottage_id`` for the duration of the block.

        The advisory lock is released by PostgreSQL when the surrounding
        transaction commits or rolls back, so the block must contain the
        commit.
        """
        lock = self._locks[cottage_id]
        async with lock:
            if db.bind is not None and db.bind.dialect.name == "postgresql":
                await store_call(
                    db.execute(
                        text("SELECT pg_advisory_xact_lock(hashtext(:cottage_id))"),
                        {"cottage_id": cottage_id}
                    ),
                    "acquire_range_lock"
                )
            logger.debug("Acquired range lock for cottage", extra={"cottage_id": cottage_id})
            yield
