"""API route modules."""

from .health import router as health_router
from .pets import router as pets_router
from .owners import router as owners_router
from .records import router as records_router
from .admin import router as admin_router

__all__ = [
    "health_router",
    "pets_router",
    "owners_router",
    "records_router",
    "admin_router",
]
