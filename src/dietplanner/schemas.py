"""Common data schemas for the API and background tasks."""

from typing import Annotated

from pydantic import BaseModel, Field

from dietplanner.catalog.models import Catalog
from dietplanner.plan.optimizer import OptimizationResult
from dietplanner.plan.penalty import PenaltyModel
from dietplanner.plan.report import food_breakdown, recipe_totals


class OptimizationRequest(BaseModel):
    """Parameters for one optimization run. Unset fields fall back to settings."""

    step_size: int | None = Field(None, ge=1, description="Grams added/removed per move")
    max_rounds: int | None = Field(None, ge=1, description="Stop after this many rounds")
    verify_consistency: bool | None = None
    initial_quantities: dict[int, Annotated[int, Field(gt=0)]] = Field(
        default_factory=dict,
        description="Starting grams per food id",
    )


class NutrientSchema(BaseModel):
    """Nutrient definition."""

    id: int
    units: str
    description: str


class NutrientAmountSchema(BaseModel):
    """Amount of one nutrient."""

    nutrient_id: int
    description: str
    units: str
    amount: float


class FoodDetailResponse(BaseModel):
    """Food with its nutrient breakdown at a given quantity."""

    id: int
    food_group: str
    description: str
    manufacturer: str
    grams: int
    nutrients: list[NutrientAmountSchema]


class RecipeItemSchema(BaseModel):
    """Food held in a recipe."""

    food_id: int
    description: str
    grams: int


class PenaltyTermSchema(BaseModel):
    """One line of the scoring trace."""

    label: str
    amount: float
    penalty: float
    minimum: float | None = None
    maximum: float | None = None


class OptimizationResultSchema(BaseModel):
    """Serialized optimization result."""

    score: float
    rounds: int
    reason: str
    total_grams: int
    items: list[RecipeItemSchema]
    penalties: list[PenaltyTermSchema]
    nutrient_totals: list[NutrientAmountSchema]
    score_history: list[float] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls,
        result: OptimizationResult,
        catalog: Catalog,
        model: PenaltyModel,
    ) -> "OptimizationResultSchema":
        recipe = result.recipe
        return cls(
            score=result.score,
            rounds=result.rounds,
            reason=result.reason.value,
            total_grams=recipe.total_grams,
            items=[
                RecipeItemSchema(
                    food_id=food_id,
                    description=catalog.foods[food_id].description,
                    grams=grams,
                )
                for food_id, grams in sorted(recipe.quantities.items())
            ],
            penalties=[
                PenaltyTermSchema(
                    label=term.label,
                    amount=term.amount,
                    penalty=term.penalty,
                    minimum=term.minimum,
                    maximum=term.maximum,
                )
                for term in model.breakdown(recipe)
            ],
            nutrient_totals=[
                NutrientAmountSchema(
                    nutrient_id=line.nutrient_id,
                    description=line.description,
                    units=line.units,
                    amount=line.amount,
                )
                for line in recipe_totals(recipe, catalog)
            ],
            score_history=result.score_history,
        )


def food_detail(catalog: Catalog, food_id: int, grams: int) -> FoodDetailResponse:
    """Build the detail view of a catalog food."""
    food = catalog.foods[food_id]
    return FoodDetailResponse(
        id=food.id,
        food_group=food.food_group,
        description=food.description,
        manufacturer=food.manufacturer,
        grams=grams,
        nutrients=[
            NutrientAmountSchema(
                nutrient_id=line.nutrient_id,
                description=line.description,
                units=line.units,
                amount=line.amount,
            )
            for line in food_breakdown(food, grams, catalog)
        ],
    )
