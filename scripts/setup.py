#!/usr/bin/env python3
"""Setup script for the cottage reservations API: schema plus sample catalog."""

import asyncio
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from sqlalchemy import func, select  # noqa: E402

from cottage_booking.core.database import async_session_factory, close_db, init_db  # noqa: E402
from cottage_booking.models import Cottage  # noqa: E402
from cottage_booking.schemas.catalog import CreateCottageRequest, CreatePackageRequest  # noqa: E402
from cottage_booking.services.catalog_service import CatalogService  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_COTTAGES = [
    CreateCottageRequest(
        name="Hornbill",
        description="Forest-facing cottage with a private deck",
        max_adults=2,
        max_children=1,
        base_price_per_night=Decimal("4500.00"),
        amenities=["King bed", "Private deck", "Hot water", "Wi-Fi"],
    ),
    CreateCottageRequest(
        name="Kingfisher",
        description="Riverside cottage a short walk from the jetty",
        max_adults=2,
        max_children=2,
        base_price_per_night=Decimal("5000.00"),
        amenities=["Queen bed", "River view", "Hot water"],
    ),
    CreateCottageRequest(
        name="Glass Cottage",
        description="Glass-walled cottage under the canopy",
        max_adults=2,
        max_children=0,
        base_price_per_night=Decimal("7500.00"),
        amenities=["King bed", "Skylight", "Bathtub", "Wi-Fi"],
    ),
]

SAMPLE_PACKAGES = [
    CreatePackageRequest(
        name="Honeymoon",
        description="Candle-lit dinner, room decoration and two safaris",
        price=Decimal("6000.00"),
        includes_safari=True,
        safari_count=2,
        features=["Candle-lit dinner", "Room decoration", "2 safaris"],
    ),
    CreatePackageRequest(
        name="Elderly",
        description="Ground-level access, assisted walks and one safari",
        price=Decimal("3000.00"),
        includes_safari=True,
        safari_count=1,
        features=["Assisted walks", "1 safari"],
    ),
    CreatePackageRequest(
        name="Family Fun",
        description="Nature trail for kids, bonfire night and two safaris",
        price=Decimal("5000.00"),
        includes_safari=True,
        safari_count=2,
        features=["Nature trail", "Bonfire night", "2 safaris"],
    ),
    CreatePackageRequest(
        name="Basic",
        description="Stay with breakfast",
        price=Decimal("0.00"),
        features=["Breakfast"],
    ),
]


async def setup_database():
    """Create the schema if it does not exist yet."""
    logger.info("Setting up database...")
    await init_db()
    logger.info("Database schema ready")


async def create_sample_data():
    """Seed the cottage and package catalog once."""
    logger.info("Creating sample data...")

    async with async_session_factory() as db:
        existing = await db.execute(select(func.count()).select_from(Cottage))
        if existing.scalar_one() > 0:
            logger.info("Sample data already exists, skipping...")
            return

        catalog = CatalogService(db)
        for cottage in SAMPLE_COTTAGES:
            await catalog.create_cottage(cottage)
        for package in SAMPLE_PACKAGES:
            await catalog.create_package(package)

    logger.info(
        "Sample data created successfully",
        extra={"cottages": len(SAMPLE_COTTAGES), "packages": len(SAMPLE_PACKAGES)}
    )


async def main():
    """Main setup function."""
    logger.info("Starting cottage reservations API setup...")

    try:
        await setup_database()
        await create_sample_data()
    finally:
        await close_db()

    logger.info("Setup completed successfully!")
    logger.info("Start the API server with: cd server && uvicorn cottage_booking.main:app --reload")


if __name__ == "__main__":
    asyncio.run(main())
