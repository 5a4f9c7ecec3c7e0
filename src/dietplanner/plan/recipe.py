"""Recipe state with incrementally maintained nutrient totals."""

from dietplanner.catalog.models import Catalog, FoodItem


class RecipeError(Exception):
    """Base exception for caller misuse of a Recipe."""


class InvalidQuantityError(RecipeError, ValueError):
    """Raised when a gram quantity is not a positive integer."""

    def __init__(self, grams: object):
        super().__init__(f"Quantity must be a positive integer number of grams, got {grams!r}")
        self.grams = grams


class InvalidRemovalError(RecipeError):
    """Raised when removing a food that is absent or held in a smaller quantity."""

    def __init__(self, message: str, food_id: int, requested: int, available: int):
        super().__init__(message)
        self.food_id = food_id
        self.requested = requested
        self.available = available


class UnknownFoodError(RecipeError, KeyError):
    """Raised when a recipe is seeded with a food id missing from the catalog."""

    def __init__(self, food_id: int):
        super().__init__(food_id)
        self.food_id = food_id

    def __str__(self) -> str:
        return f"Food {self.food_id} is not in the catalog"


class InternalConsistencyError(RuntimeError):
    """Raised when incremental bookkeeping diverges from a full recomputation."""


def _check_grams(grams: object) -> None:
    if isinstance(grams, bool) or not isinstance(grams, int) or grams <= 0:
        raise InvalidQuantityError(grams)


class Recipe:
    """
    A candidate combination of food quantities.

    ``quantities`` maps food id to a positive number of grams. ``nutrient_totals``
    holds, for every catalog nutrient, the sum of ``grams * amount_per_gram``
    over the foods in the recipe. Totals are updated on every add/remove
    rather than recomputed.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.quantities: dict[int, int] = {}
        self.nutrient_totals: dict[int, float] = dict.fromkeys(catalog.nutrients, 0.0)

    @classmethod
    def from_quantities(cls, catalog: Catalog, quantities: dict[int, int]) -> "Recipe":
        """Build a recipe holding the given grams per food id."""
        recipe = cls(catalog)
        for food_id, grams in quantities.items():
            if food_id not in catalog.foods:
                raise UnknownFoodError(food_id)
            recipe.add_food(catalog.foods[food_id], grams)
        return recipe

    def add_food(self, food: FoodItem, grams: int) -> None:
        _check_grams(grams)
        self.quantities[food.id] = self.quantities.get(food.id, 0) + grams

        totals = self.nutrient_totals
        for entry in food.nutrients:
            totals[entry.nutrient_id] += entry.amount_per_gram * grams

    def remove_food(self, food: FoodItem, grams: int) -> None:
        _check_grams(grams)
        held = self.quantities.get(food.id)
        if held is None:
            raise InvalidRemovalError(
                f"Food {food.id} is not in the recipe",
                food_id=food.id,
                requested=grams,
                available=0,
            )
        if grams > held:
            raise InvalidRemovalError(
                f"Cannot remove {grams}g of food {food.id}, only {held}g held",
                food_id=food.id,
                requested=grams,
                available=held,
            )

        if grams == held:
            del self.quantities[food.id]
        else:
            self.quantities[food.id] = held - grams

        totals = self.nutrient_totals
        for entry in food.nutrients:
            totals[entry.nutrient_id] -= entry.amount_per_gram * grams

    def has_food(self, food: FoodItem) -> bool:
        return food.id in self.quantities

    def grams_of(self, food: FoodItem) -> int:
        return self.quantities.get(food.id, 0)

    @property
    def food_count(self) -> int:
        """Number of foods with a nonzero quantity."""
        return sum(1 for grams in self.quantities.values() if grams != 0)

    @property
    def total_grams(self) -> int:
        return sum(self.quantities.values())

    def clone(self) -> "Recipe":
        """Return an independent copy sharing only the read-only catalog."""
        copy = Recipe.__new__(Recipe)
        copy.catalog = self.catalog
        copy.quantities = dict(self.quantities)
        copy.nutrient_totals = dict(self.nutrient_totals)
        return copy

    def check_consistency(self, tolerance: float = 0.5) -> None:
        """
        Recompute nutrient totals from scratch and compare with the cache.

        Raises:
            InternalConsistencyError: If a quantity is not positive or a cached
                total differs from the recomputed one by more than ``tolerance``.
        """
        expected: dict[int, float] = dict.fromkeys(self.catalog.nutrients, 0.0)
        for food_id, grams in self.quantities.items():
            if grams <= 0:
                raise InternalConsistencyError(f"Food {food_id} held with quantity {grams}")
            for entry in self.catalog.foods[food_id].nutrients:
                expected[entry.nutrient_id] += entry.amount_per_gram * grams

        for nutrient_id, total in expected.items():
            cached = self.nutrient_totals.get(nutrient_id, 0.0)
            if abs(cached - total) > tolerance:
                raise InternalConsistencyError(
                    f"Nutrient {nutrient_id} total drifted: cached={cached}, recomputed={total}"
                )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.quantities == other.quantities

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Recipe(quantities={self.quantities!r})"
