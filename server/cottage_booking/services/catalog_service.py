"""Catalog service: cottages and packages."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..core.store import store_call
from ..models.catalog import Cottage, Package
from ..schemas.catalog import CreateCottageRequest, CreatePackageRequest

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for reading and seeding the cottage and package catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_cottage(self, cottage_id: UUID) -> Optional[Cottage]:
        """
        Get a cottage by ID, active or not.

        Args:
            cottage_id: Cottage UUID

        Returns:
            Cottage entity or None if not found
        """
        stmt = select(Cottage).where(Cottage.id == cottage_id)
        result = await store_call(self.db.execute(stmt), "get_cottage")
        return result.scalar_one_or_none()

    async def get_cottage_or_raise(self, cottage_id: UUID) -> Cottage:
        """
        Get a cottage by ID or raise NotFoundError.

        Raises:
            NotFoundError: If the cottage does not exist
        """
        cottage = await self.get_cottage(cottage_id)
        if not cottage:
            logger.warning("Cottage not found", extra={"cottage_id": str(cottage_id)})
            raise NotFoundError(
                resource_type="cottage",
                resource_id=str(cottage_id),
                detail="Cottage not found"
            )
        return cottage

    async def get_package(self, package_id: UUID) -> Optional[Package]:
        """Get a package by ID, active or not."""
        stmt = select(Package).where(Package.id == package_id)
        result = await store_call(self.db.execute(stmt), "get_package")
        return result.scalar_one_or_none()

    async def get_package_or_raise(self, package_id: UUID) -> Package:
        """
        Get a package by ID or raise NotFoundError.

        Raises:
            NotFoundError: If the package does not exist
        """
        package = await self.get_package(package_id)
        if not package:
            logger.warning("Package not found", extra={"package_id": str(package_id)})
            raise NotFoundError(
                resource_type="package",
                resource_id=str(package_id),
                detail="Package not found"
            )
        return package

    async def list_active_cottages(self) -> list[Cottage]:
        """List cottages currently offered, ordered by name."""
        stmt = select(Cottage).where(Cottage.is_active.is_(True)).order_by(Cottage.name)
        result = await store_call(self.db.execute(stmt), "list_active_cottages")
        return list(result.scalars().all())

    async def list_active_packages(self) -> list[Package]:
        """List packages currently offered, ordered by name."""
        stmt = select(Package).where(Package.is_active.is_(True)).order_by(Package.name)
        result = await store_call(self.db.execute(stmt), "list_active_packages")
        return list(result.scalars().all())

    async def create_cottage(self, request: CreateCottageRequest) -> Cottage:
        """Add a cottage to the catalog."""
        cottage = Cottage(
            name=request.name,
            description=request.description,
            max_adults=request.max_adults,
            max_children=request.max_children,
            base_price_per_night=request.base_price_per_night,
            amenities=list(request.amenities),
            is_active=request.is_active
        )
        self.db.add(cottage)
        await store_call(self.db.commit(), "create_cottage")
        await self.db.refresh(cottage)

        logger.info(
            "Cottage created",
            extra={"cottage_id": str(cottage.id), "cottage_name": cottage.name}
        )
        return cottage

    async def create_package(self, request: CreatePackageRequest) -> Package:
        """Add a package to the catalog."""
        package = Package(
            name=request.name,
            description=request.description,
            price=request.price,
            includes_safari=request.includes_safari,
            safari_count=request.safari_count,
            features=list(request.features),
            is_active=request.is_active
        )
        self.db.add(package)
        await store_call(self.db.commit(), "create_package")
        await self.db.refresh(package)

        logger.info(
            "Package created",
            extra={"package_id": str(package.id), "package_name": package.name}
        )
        return package
