"""Read-only catalog of nutrients and foods."""

from dataclasses import dataclass, field


class CatalogError(Exception):
    """Base exception for catalog errors."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class CatalogFormatError(CatalogError):
    """Raised when a catalog record is malformed or duplicated."""

    def __init__(self, message: str, path: str | None = None, line_number: int | None = None):
        super().__init__(message, path=path)
        self.line_number = line_number


@dataclass(frozen=True)
class Nutrient:
    """A nutrient definition."""

    id: int
    units: str
    description: str


@dataclass(frozen=True)
class NutrientAmount:
    """Contribution of one nutrient per gram of a food."""

    nutrient_id: int
    amount_per_gram: float


@dataclass(frozen=True)
class FoodItem:
    """A food with its per-gram nutrient contributions."""

    id: int
    food_group: str
    description: str
    manufacturer: str = ""
    nutrients: tuple[NutrientAmount, ...] = ()


@dataclass
class Catalog:
    """
    Immutable set of foods and nutrients available to the optimizer.

    ``name_to_id`` is derived from the nutrient descriptions when not given.
    Every nutrient a food references must be defined in ``nutrients``.
    """

    nutrients: dict[int, Nutrient]
    foods: dict[int, FoodItem]
    name_to_id: dict[str, int] = field(default_factory=dict)
    _ordered_foods: tuple[FoodItem, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name_to_id:
            self.name_to_id = {n.description: n.id for n in self.nutrients.values()}

        for food in self.foods.values():
            for entry in food.nutrients:
                if entry.nutrient_id not in self.nutrients:
                    raise CatalogError(
                        f"Food {food.id} references unknown nutrient {entry.nutrient_id}"
                    )

        self._ordered_foods = tuple(self.foods[food_id] for food_id in sorted(self.foods))

    @property
    def ordered_foods(self) -> tuple[FoodItem, ...]:
        """Foods in ascending id order."""
        return self._ordered_foods

    def nutrient_id(self, name: str) -> int | None:
        """Look up a nutrient id by description, or None if the catalog lacks it."""
        return self.name_to_id.get(name)
