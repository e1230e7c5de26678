"""Cottage and package Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from .common import Amount, CamelModel


class Cottage(CamelModel):
    """Cottage response schema."""

    id: UUID = Field(..., description="Unique cottage ID")
    name: str = Field(..., description="Cottage name")
    description: str = Field("", description="Cottage description")
    max_adults: int = Field(..., ge=1, description="Maximum adults per stay")
    max_children: int = Field(..., ge=0, description="Maximum children per stay")
    base_price_per_night: Amount = Field(..., description="Nightly rate")
    amenities: list[str] = Field(default_factory=list, description="Amenities in display order")
    is_active: bool = Field(..., description="Whether the cottage is offered")
    created_date: datetime
    updated_date: datetime


class Package(CamelModel):
    """Package response schema."""

    id: UUID = Field(..., description="Unique package ID")
    name: str = Field(..., description="Package name")
    description: str = Field("", description="Package description")
    price: Amount = Field(..., description="Flat price per booking")
    includes_safari: bool = Field(..., description="Whether safaris are part of the package")
    safari_count: int = Field(..., ge=0, description="Number of safaris offered")
    features: list[str] = Field(default_factory=list, description="Features in display order")
    is_active: bool = Field(..., description="Whether the package is offered")
    created_date: datetime
    updated_date: datetime


class GetPackageRequest(CamelModel):
    """Request schema for fetching one package."""

    package_id: UUID = Field(..., description="Package to retrieve")


class CreateCottageRequest(CamelModel):
    """Catalog entry for a new cottage (seeding and administration)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=4000)
    max_adults: int = Field(2, ge=1)
    max_children: int = Field(0, ge=0)
    base_price_per_night: Amount = Field(..., ge=0)
    amenities: list[str] = Field(default_factory=list)
    is_active: bool = True


class CreatePackageRequest(CamelModel):
    """Catalog entry for a new package (seeding and administration)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=4000)
    price: Amount = Field(..., ge=0)
    includes_safari: bool = False
    safari_count: int = Field(0, ge=0)
    features: list[str] = Field(default_factory=list)
    is_active: bool = True
