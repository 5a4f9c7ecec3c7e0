"""Reporting helpers for recipes and optimization results."""

from dataclasses import dataclass

from dietplanner.catalog.models import Catalog, FoodItem
from dietplanner.plan.optimizer import OptimizationResult
from dietplanner.plan.penalty import PenaltyModel
from dietplanner.plan.recipe import Recipe

# Contributions below this many units are not worth reporting
MIN_REPORTED_AMOUNT = 0.01


@dataclass(frozen=True)
class NutrientLine:
    """Amount of one nutrient."""

    nutrient_id: int
    description: str
    units: str
    amount: float

    def __str__(self) -> str:
        return f"{self.amount:.2f}{self.units} of {self.description}"


def food_breakdown(food: FoodItem, grams: int, catalog: Catalog) -> list[NutrientLine]:
    """Nutrients supplied by ``grams`` of a food, skipping negligible amounts."""
    lines = []
    for entry in food.nutrients:
        amount = entry.amount_per_gram * grams
        if amount < MIN_REPORTED_AMOUNT:
            continue
        nutrient = catalog.nutrients[entry.nutrient_id]
        lines.append(NutrientLine(nutrient.id, nutrient.description, nutrient.units, amount))
    return lines


def recipe_totals(recipe: Recipe, catalog: Catalog) -> list[NutrientLine]:
    """Total amount of every catalog nutrient in the recipe, by nutrient id."""
    return [
        NutrientLine(
            nutrient_id,
            nutrient.description,
            nutrient.units,
            recipe.nutrient_totals.get(nutrient_id, 0.0),
        )
        for nutrient_id, nutrient in sorted(catalog.nutrients.items())
    ]


def format_report(result: OptimizationResult, catalog: Catalog, model: PenaltyModel) -> str:
    """Render a plain-text report of an optimization result."""
    recipe = result.recipe
    lines = [
        f"Finished after {result.rounds} rounds ({result.reason.value})",
        f"Score: {result.score:.4f}",
        "",
    ]

    for food_id in sorted(recipe.quantities):
        grams = recipe.quantities[food_id]
        food = catalog.foods[food_id]
        lines.append(f"{grams} grams of {food.description}")
        breakdown = food_breakdown(food, grams, catalog)
        if breakdown:
            lines.append("  " + ", ".join(str(line) for line in breakdown))
        lines.append("")

    lines.append("PENALTIES")
    for term in model.breakdown(recipe):
        if term.penalty:
            lines.append(f"  {term.label}: {term.penalty:.2f} (amount={term.amount:.2f})")
    lines.append("")

    lines.append("TOTAL NUTRIENTS")
    lines.extend(str(line) for line in recipe_totals(recipe, catalog))

    return "\n".join(lines)
