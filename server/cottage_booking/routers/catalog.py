"""Catalog router: cottages and packages."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession
from ..schemas.catalog import Cottage, GetPackageRequest, Package
from ..schemas.common import envelope
from ..services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["catalog"])


@router.get("/getAllCottages")
async def get_all_cottages(db: AsyncSession = DatabaseSession) -> JSONResponse:
    """List active cottages."""
    cottages = await CatalogService(db).list_active_cottages()
    logger.debug("Cottages listed", extra={"count": len(cottages)})
    return JSONResponse(
        status_code=200,
        content=envelope([Cottage.model_validate(c) for c in cottages])
    )


@router.get("/getAvailablePackages")
async def get_available_packages(db: AsyncSession = DatabaseSession) -> JSONResponse:
    """List active packages."""
    packages = await CatalogService(db).list_active_packages()
    logger.debug("Packages listed", extra={"count": len(packages)})
    return JSONResponse(
        status_code=200,
        content=envelope([Package.model_validate(p) for p in packages])
    )


@router.post("/getPackageById")
async def get_package_by_id(
    request: GetPackageRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Get one package, active or not."""
    package = await CatalogService(db).get_package_or_raise(request.package_id)
    return JSONResponse(status_code=200, content=envelope(Package.model_validate(package)))
