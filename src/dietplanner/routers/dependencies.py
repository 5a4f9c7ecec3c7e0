"""Shared FastAPI dependencies."""

from fastapi import HTTPException, status

from dietplanner.catalog.models import Catalog, CatalogError
from dietplanner.catalog.provider import get_catalog
from dietplanner.logging_config import get_logger

logger = get_logger(__name__)


def require_catalog() -> Catalog:
    """Provide the loaded catalog, or 503 if it cannot be loaded."""
    try:
        return get_catalog()
    except CatalogError as e:
        logger.error(f"Catalog unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Catalog unavailable: {e}",
        ) from e
