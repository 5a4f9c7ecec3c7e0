"""API routes for browsing the food catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dietplanner.catalog.models import Catalog
from dietplanner.routers.dependencies import require_catalog
from dietplanner.schemas import FoodDetailResponse, NutrientSchema, food_detail

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("/nutrients", response_model=list[NutrientSchema])
async def list_nutrients(catalog: Catalog = Depends(require_catalog)) -> list[NutrientSchema]:
    """List every nutrient in the catalog, by id."""
    return [
        NutrientSchema(id=n.id, units=n.units, description=n.description)
        for _, n in sorted(catalog.nutrients.items())
    ]


@router.get("/foods/{food_id}", response_model=FoodDetailResponse)
async def get_food(
    food_id: int,
    grams: Annotated[int, Query(ge=1, le=100000, description="Quantity in grams")] = 100,
    catalog: Catalog = Depends(require_catalog),
) -> FoodDetailResponse:
    """
    Get a food with the nutrients supplied by the given quantity.

    Contributions under 0.01 of their unit are omitted.
    """
    if food_id not in catalog.foods:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Food {food_id} not found",
        )
    return food_detail(catalog, food_id, grams)
