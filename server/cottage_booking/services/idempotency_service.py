"""Idempotency service for safely retried create calls."""

import hashlib
import json
import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import IdempotencyMismatchError
from ..core.store import store_call
from ..models.idempotency import IdempotencyRecord

logger = logging.getLogger(__name__)


class IdempotencyService:
    """Service for replaying stored responses of idempotent operations."""

    def __init__(self, db: AsyncSession, ttl_hours: Optional[int] = None):
        self.db = db
        self.ttl_hours = ttl_hours or settings.idempotency_ttl_hours

    @staticmethod
    def compute_request_hash(request_body: dict[str, Any]) -> str:
        """SHA-256 of the request body with keys sorted."""
        normalized = json.dumps(request_body, sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(normalized.encode('utf-8')).hexdigest()

    async def check_idempotency(
        self,
        idempotency_key: str,
        operation: str,
        request_body: dict[str, Any]
    ) -> Optional[tuple[int, dict[str, Any]]]:
        """
        Look up a stored response for a retried request.

        Args:
            idempotency_key: Client-supplied key
            operation: Operation name, e.g. ``createBooking``
            request_body: Request body to hash and compare

        Returns:
            Tuple of (status_code, response_body) for a replay, None for a new request

        Raises:
            IdempotencyMismatchError: If the key was used with a different body
        """
        request_hash = self.compute_request_hash(request_body)

        stmt = select(IdempotencyRecord).where(
            IdempotencyRecord.idempotency_key == idempotency_key,
            IdempotencyRecord.operation == operation,
            IdempotencyRecord.expires_at > datetime.utcnow()
        )
        result = await store_call(self.db.execute(stmt), "check_idempotency")
        existing_record = result.scalar_one_or_none()

        if existing_record is None:
            return None

        if existing_record.request_body_hash != request_hash:
            logger.warning(
                "Idempotency key mismatch",
                extra={
                    "idempotency_key": idempotency_key,
                    "operation": operation,
                    "existing_hash": existing_record.request_body_hash[:8],
                    "new_hash": request_hash[:8]
                }
            )
            raise IdempotencyMismatchError(idempotency_key, operation)

        logger.info(
            "Returning stored idempotent response",
            extra={
                "idempotency_key": idempotency_key,
                "operation": operation,
                "status_code": existing_record.response_status_code
            }
        )
        return existing_record.response_status_code, json.loads(existing_record.response_body)

    async def store_response(
        self,
        idempotency_key: str,
        operation: str,
        request_body: dict[str, Any],
        status_code: int,
        response_body: dict[str, Any]
    ) -> None:
        """
        Store the response of a completed operation for later replays.

        A concurrent request that stored the same key first wins; the
        duplicate insert is rolled back and logged.
        """
        expires_at = datetime.utcnow() + timedelta(hours=self.ttl_hours)
        record = IdempotencyRecord(
            idempotency_key=idempotency_key,
            operation=operation,
            request_body_hash=self.compute_request_hash(request_body),
            response_status_code=status_code,
            response_body=json.dumps(response_body, sort_keys=True, separators=(',', ':')),
            expires_at=expires_at
        )

        try:
            self.db.add(record)
            await store_call(self.db.commit(), "store_idempotent_response")
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(
                "Idempotency record already exists",
                extra={"idempotency_key": idempotency_key, "operation": operation, "error": str(e)}
            )
            return

        logger.info(
            "Stored idempotency record",
            extra={
                "idempotency_key": idempotency_key,
                "operation": operation,
                "status_code": status_code,
                "expires_at": expires_at.isoformat()
            }
        )

    async def cleanup_expired_records(self) -> int:
        """
        Delete expired idempotency records.

        Returns:
            Number of records deleted
        """
        stmt = delete(IdempotencyRecord).where(IdempotencyRecord.expires_at <= datetime.utcnow())
        try:
            result = await store_call(self.db.execute(stmt), "cleanup_idempotency_records")
            await store_call(self.db.commit(), "cleanup_idempotency_records")
        except Exception:
            await self.db.rollback()
            raise

        deleted_count = result.rowcount
        if deleted_count > 0:
            logger.info(
                "Cleaned up expired idempotency records",
                extra={"deleted_count": deleted_count}
            )
        return deleted_count
