"""Cottage and package model definitions."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class Cottage(Base):
    """A rentable unit with nightly pricing and occupancy limits."""

    __tablename__ = "cottages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Occupancy limits
    max_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    max_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    base_price_per_night: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    amenities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

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
        CheckConstraint("max_adults >= 1", name="ck_cottage_max_adults_positive"),
        CheckConstraint("max_children >= 0", name="ck_cottage_max_children_non_negative"),
        CheckConstraint("base_price_per_night >= 0", name="ck_cottage_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Cottage(id={self.id}, name='{self.name}', active={self.is_active})>"


class Package(Base):
    """An add-on bundle priced flat per booking, optionally including safaris."""

    __tablename__ = "packages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    includes_safari: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    safari_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    features: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

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
        CheckConstraint("price >= 0", name="ck_package_price_non_negative"),
        CheckConstraint("safari_count >= 0", name="ck_package_safari_count_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, name='{self.name}', price={self.price})>"
