"""Daily nutrient targets used by the penalty model.

Targets are for a 65 kg (145 lb) adult male. A maximum of 0 means the
nutrient has no upper bound.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientTarget:
    """Adequate range for one nutrient, keyed by catalog description."""

    name: str
    minimum: float
    maximum: float = 0.0

    def __post_init__(self) -> None:
        if self.minimum <= 0:
            raise ValueError(f"{self.name}: minimum must be positive, got {self.minimum}")
        if self.maximum and self.maximum <= self.minimum:
            raise ValueError(
                f"{self.name}: maximum {self.maximum} must exceed minimum {self.minimum}"
            )


DAILY_TARGETS: tuple[NutrientTarget, ...] = (
    # Some fat is needed; excess is tolerated within reason
    NutrientTarget("Total lipid (fat)", 60, 300),
    NutrientTarget("Energy, kcal", 2700, 10000),
    # 0.7 g per lb of body weight; 0.82 g/lb is the upper limit of useful intake
    NutrientTarget("Protein", 101.5, 3510),
    NutrientTarget("Fiber, total dietary", 38),
    # Minerals
    NutrientTarget("Calcium, Ca", 1000, 2500),
    NutrientTarget("Iron, Fe", 8, 45),
    NutrientTarget("Magnesium, Mg", 400),
    NutrientTarget("Phosphorus, P", 700, 4000),
    NutrientTarget("Potassium, K", 4700),
    NutrientTarget("Sodium, Na", 1500, 2300),
    NutrientTarget("Zinc, Zn", 11, 40),
    NutrientTarget("Copper, Cu", 0.9, 10),
    NutrientTarget("Manganese, Mn", 2.3, 11),
    NutrientTarget("Selenium, Se", 55, 400),
    # Vitamins
    NutrientTarget("Vitamin A, RAE", 900, 1500),
    NutrientTarget("Vitamin E (alpha-tocopherol)", 15, 1000),
    # 10000ug lutein and 2000ug zeaxanthin, tracked as a sum
    NutrientTarget("Lutein + zeaxanthin", 12000),
    NutrientTarget("Vitamin C, total ascorbic acid", 90, 2000),
    NutrientTarget("Thiamin", 1.2),
    NutrientTarget("Riboflavin", 1.3),
    NutrientTarget("Niacin", 16, 35),
    NutrientTarget("Pantothenic acid", 5),
    NutrientTarget("Vitamin B-6", 1.3, 100),
    NutrientTarget("Vitamin B-12", 2.4),
    NutrientTarget("Choline, total", 550, 3500),
    NutrientTarget("Vitamin K (phylloquinone)", 120),
    # Essential amino acids
    NutrientTarget("Lysine", 1.95),
    NutrientTarget("Leucine", 2.535),
    NutrientTarget("Methionine", 0.65),
    NutrientTarget("Cystine", 0.26),
    NutrientTarget("Valine", 1.69),
    NutrientTarget("Histidine", 0.65),
    NutrientTarget("Tryptophan", 0.26),
    NutrientTarget("Threonine", 0.975),
    NutrientTarget("Isoleucine", 1.3),
    # Omega-3
    NutrientTarget("18:3 n-3 c,c,c (ALA)", 1.6),
    NutrientTarget("20:5 n-3 (EPA)", 1.6),
    NutrientTarget("22:6 n-3 (DHA)", 1.6),
    # Half of the 64 fl oz daily water should come from food (32 fl oz = 946 g)
    NutrientTarget("Water", 946),
)

# Phenylalanine and tyrosine are scored as a pair
PHENYLALANINE = "Phenylalanine"
TYROSINE = "Tyrosine"
PHENYLALANINE_TYROSINE_MIN = 1.625

# Dietary folate equivalents: food folate + 1.7 x folic acid
FOOD_FOLATE = "Folate, food"
FOLIC_ACID = "Folic acid"
FOLIC_ACID_FACTOR = 1.7
FOLATE_DFE_MIN = 400
FOLATE_DFE_MAX = 1000

# Caffeine above the threshold is penalized by (caffeine - offset)
CAFFEINE = "Caffeine"
CAFFEINE_THRESHOLD = 20
CAFFEINE_OFFSET = 5

# Linked to low bone density; every unit counts against the recipe
DIHYDROPHYLLOQUINONE = "Dihydrophylloquinone"

# Size penalties cap at SIZE_PENALTY_WEIGHT once the limit is reached
FOOD_COUNT_LIMIT = 100
TOTAL_GRAMS_LIMIT = 3000
SIZE_PENALTY_WEIGHT = 10
