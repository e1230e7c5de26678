"""Stay arithmetic and cost calculation.

Everything here is pure: no store access, no clock. Dates are compared as
calendar days on UTC boundaries, so a check-in at 15:00 and a check-out at
11:00 three days later is a three-night stay.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator, Union

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def _as_decimal(amount: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def normalize_day(value: DateLike) -> date:
    """Zero the time of day, converting aware datetimes to UTC first."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def nights(check_in: DateLike, check_out: DateLike) -> int:
    """
    Number of nights between two days.

    A result below one means the range is empty or reversed; callers decide
    whether that is an error.
    """
    return (normalize_day(check_out) - normalize_day(check_in)).days


class StayDates:
    """
    The calendar days ``[start, end)`` of a stay.

    Iterating yields each day lazily, and every iteration starts over from
    ``start``, so one instance can be walked more than once.
    """

    __slots__ = ("start", "end")

    def __init__(self, start: DateLike, end: DateLike):
        self.start = normalize_day(start)
        self.end = normalize_day(end)

    def __iter__(self) -> Iterator[date]:
        day = self.start
        while day < self.end:
            yield day
            day += ONE_DAY

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= normalize_day(day) < self.end

    def __repr__(self) -> str:
        return f"StayDates({self.start.isoformat()}, {self.end.isoformat()})"


@dataclass(frozen=True)
class CostBreakdown:
    """Price of a stay: per-night room cost plus the flat package price."""

    nights: int
    cost_per_night: Decimal
    room_cost: Decimal
    package_cost: Decimal

    @property
    def total_cost(self) -> Decimal:
        return self.room_cost + self.package_cost


def calculate_cost(
    base_price_per_night: Decimal,
    package_price: Decimal,
    check_in: DateLike,
    check_out: DateLike,
) -> CostBreakdown:
    """
    Price a stay.

    Args:
        base_price_per_night: Cottage nightly rate
        package_price: Flat package price, charged once per booking
        check_in: First night of the stay
        check_out: Departure day (not charged)

    Returns:
        CostBreakdown with room, package and total cost
    """
    stay_nights = nights(check_in, check_out)
    rate = _as_decimal(base_price_per_night)
    return CostBreakdown(
        nights=stay_nights,
        cost_per_night=rate,
        room_cost=rate * stay_nights,
        package_cost=_as_decimal(package_price),
    )
