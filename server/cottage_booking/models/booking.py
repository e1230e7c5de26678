"""Booking model definition."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class PaymentStatus(str, Enum):
    """Payment status enumeration."""
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class Booking(Base):
    """A reservation tying a cottage, a package, a stay and the guest together."""

    __tablename__ = "bookings"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Weak references: deleting a cottage or package never touches bookings
    cottage_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("cottages.id"), nullable=False, index=True)
    package_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("packages.id"), nullable=False, index=True)

    # Stay, check-out exclusive
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    adults: Mapped[int] = mapped_column(Integer, nullable=False)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    total_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True
    )

    customer_info: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    payment_status: Mapped[PaymentStatus] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING
    )
    payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    special_requests: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Timestamps
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
        CheckConstraint("check_out_date > check_in_date", name="ck_booking_stay_positive"),
        CheckConstraint("adults >= 1", name="ck_booking_adults_positive"),
        CheckConstraint("children >= 0", name="ck_booking_children_non_negative"),
        CheckConstraint("total_cost >= 0", name="ck_booking_total_cost_non_negative"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, cottage_id={self.cottage_id}, "
            f"stay={self.check_in_date}..{self.check_out_date}, status={self.status})>"
        )
