"""Per-cottage, per-date availability records."""

import datetime as dt
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class AvailabilityRecord(Base):
    """
    Booked/free flag for one cottage on one calendar day.

    A row appears the first time a booking claims the day. Releasing a
    booking flips its rows back to available instead of deleting them, so
    the unique ``(cottage_id, date)`` pair always identifies a single row
    and a second claim on a held day fails at the store.
    """

    __tablename__ = "availability"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    cottage_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("cottages.id"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Set only while the day is held
    booking_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("bookings.id"), nullable=True, index=True)

    created_date: Mapped[dt.datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=dt.datetime.utcnow,
        server_default=func.now()
    )
    updated_date: Mapped[dt.datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=dt.datetime.utcnow,
        server_default=func.now(),
        onupdate=dt.datetime.utcnow
    )

    __table_args__ = (
        UniqueConstraint("cottage_id", "date", name="uq_availability_cottage_date"),
        Index("ix_availability_cottage_available_date", "cottage_id", "is_available", "date"),
    )

    def __repr__(self) -> str:
        state = "free" if self.is_available else f"held by {self.booking_id}"
        return f"<AvailabilityRecord(cottage_id={self.cottage_id}, date={self.date}, {state})>"
