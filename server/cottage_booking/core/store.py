"""Time-bounded access to the reservation store."""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import settings
from .exceptions import StoreError, StoreTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def store_call(
    awaitable: Awaitable[T],
    operation: str,
    timeout_seconds: Optional[float] = None,
) -> T:
    """
    Await a store round trip under the configured timeout.

    Integrity violations pass through untouched so callers can turn them
    into conflicts. Timeouts become ``StoreTimeoutError`` (retryable) and any
    other driver failure becomes ``StoreError``.

    Args:
        awaitable: Pending session call (execute, flush, commit, ...)
        operation: Short label used in logs and error payloads
        timeout_seconds: Override for ``settings.store_timeout_seconds``

    Returns:
        Whatever the awaited call returns
    """
    timeout = timeout_seconds if timeout_seconds is not None else settings.store_timeout_seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(
            "Store call timed out",
            extra={"operation": operation, "timeout_seconds": timeout}
        )
        raise StoreTimeoutError(operation, timeout) from e
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        logger.error(
            "Store call failed",
            extra={"operation": operation, "error": str(e)},
            exc_info=True
        )
        raise StoreError(operation=operation) from e
