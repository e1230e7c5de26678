"""Allowed status changes for bookings and safari bookings."""

from enum import Enum
from typing import Mapping, TypeVar

from ..core.exceptions import InvalidStatusTransitionError
from ..models.booking import BookingStatus
from ..models.safari import SafariStatus

S = TypeVar("S", bound=Enum)

BOOKING_TRANSITIONS: Mapping[BookingStatus, frozenset] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

SAFARI_TRANSITIONS: Mapping[SafariStatus, frozenset] = {
    SafariStatus.PENDING: frozenset({SafariStatus.CONFIRMED, SafariStatus.CANCELLED}),
    SafariStatus.CONFIRMED: frozenset({SafariStatus.CANCELLED}),
    SafariStatus.CANCELLED: frozenset(),
}


def ensure_transition(
    resource_type: str,
    transitions: Mapping[S, frozenset],
    current: S,
    requested: S,
    strict: bool,
) -> None:
    """
    Reject a status change the transition table does not list.

    Lenient mode accepts every change. Re-applying the current status is
    always accepted so the update stays idempotent.

    Raises:
        InvalidStatusTransitionError: In strict mode, for an unlisted change
    """
    if not strict or current == requested:
        return
    if requested not in transitions.get(current, frozenset()):
        raise InvalidStatusTransitionError(resource_type, current.value, requested.value)
