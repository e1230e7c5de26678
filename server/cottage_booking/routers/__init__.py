"""FastAPI routers package."""

from .availability import router as availability_router
from .booking import router as booking_router
from .catalog import router as catalog_router
from .health import router as health_router
from .metrics import router as metrics_router
from .safari import router as safari_router

__all__ = [
    "availability_router",
    "booking_router",
    "catalog_router",
    "health_router",
    "metrics_router",
    "safari_router",
]
