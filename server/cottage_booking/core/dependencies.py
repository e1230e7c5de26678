"""FastAPI dependencies for sessions, range locks and idempotency keys."""

from typing import Optional

from fastapi import Depends, Header, Request

from .database import get_db
from .exceptions import ValidationError
from .locks import CottageLocks


def get_cottage_locks(request: Request) -> CottageLocks:
    """
    Return the application's range-lock registry.

    The registry lives on ``app.state`` so every request of one process
    shares it; it is created lazily for apps assembled without the lifespan
    hook (tests, scripts).
    """
    locks = getattr(request.app.state, "cottage_locks", None)
    if locks is None:
        locks = CottageLocks()
        request.app.state.cottage_locks = locks
    return locks


async def get_idempotency_key(
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key")
) -> Optional[str]:
    """
    Extract and validate the optional idempotency key header.

    Raises:
        ValidationError: If the key is longer than 255 characters or blank
    """
    if idempotency_key is None:
        return None

    key = idempotency_key.strip()
    if not key or len(key) > 255:
        raise ValidationError("Idempotency-Key must be between 1 and 255 characters")
    return key


DatabaseSession = Depends(get_db)
RangeLocks = Depends(get_cottage_locks)
IdempotencyKey = Depends(get_idempotency_key)
