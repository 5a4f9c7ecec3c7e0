"""API routers for the dietplanner application."""

from dietplanner.routers.catalog import router as catalog_router
from dietplanner.routers.optimizations import router as optimizations_router

__all__ = [
    "catalog_router",
    "optimizations_router",
]
