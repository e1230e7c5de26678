"""Safari booking and safari inquiry model definitions."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class SafariStatus(str, Enum):
    """Safari booking status enumeration."""
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


class InquiryStatus(str, Enum):
    """Safari inquiry status enumeration."""
    NEW = "New"
    CONTACTED = "Contacted"
    CLOSED = "Closed"


DEFAULT_SAFARI_TYPE = "Standard"


class SafariBooking(Base):
    """A scheduled excursion slot attached to an existing booking."""

    __tablename__ = "safari_bookings"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    booking_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("bookings.id"), nullable=False, index=True)

    safari_date: Mapped[date] = mapped_column(Date, nullable=False)
    safari_time: Mapped[str] = mapped_column(String(50), nullable=False)
    safari_type: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_SAFARI_TYPE)
    status: Mapped[SafariStatus] = mapped_column(
        String(20),
        nullable=False,
        default=SafariStatus.PENDING,
        index=True
    )

    created_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=func.now()
    )
    updated_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint("length(safari_time) > 0", name="ck_safari_time_not_empty"),
    )

    def __repr__(self) -> str:
        return (
            f"<SafariBooking(id={self.id}, booking_id={self.booking_id}, "
            f"date={self.safari_date}, time='{self.safari_time}', status={self.status})>"
        )


class SafariInquiry(Base):
    """Lead captured from the safari inquiry form; not linked to any booking."""

    __tablename__ = "safari_inquiries"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    preferred_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    preferred_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    num_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    num_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[InquiryStatus] = mapped_column(
        String(20),
        nullable=False,
        default=InquiryStatus.NEW,
        index=True
    )
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="Website")

    created_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=func.now()
    )
    updated_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint("num_adults >= 0", name="ck_inquiry_adults_non_negative"),
        CheckConstraint("num_children >= 0", name="ck_inquiry_children_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<SafariInquiry(id={self.id}, email='{self.customer_email}', status={self.status})>"
