"""Food and nutrient catalog."""

from dietplanner.catalog.models import (
    Catalog,
    CatalogError,
    CatalogFormatError,
    FoodItem,
    Nutrient,
    NutrientAmount,
)
from dietplanner.catalog.sr26 import is_excluded_food, load_sr26_catalog

__all__ = [
    "Catalog",
    "CatalogError",
    "CatalogFormatError",
    "FoodItem",
    "Nutrient",
    "NutrientAmount",
    "is_excluded_food",
    "load_sr26_catalog",
]
