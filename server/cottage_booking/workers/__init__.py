"""Background workers for reservation housekeeping."""

from .idempotency_cleanup_worker import IdempotencyCleanupWorker
from .stay_completion_worker import StayCompletionWorker

__all__ = ["IdempotencyCleanupWorker", "StayCompletionWorker"]
