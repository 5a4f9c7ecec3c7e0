"""Pytest configuration and shared fixtures."""

import pytest

from dietplanner.catalog.models import Catalog, FoodItem, Nutrient, NutrientAmount

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Catalog Fixtures
# =============================================================================

PROTEIN = 203
CALCIUM = 301
CAFFEINE = 262
PHENYLALANINE = 508
TYROSINE = 509
FOOD_FOLATE = 432
FOLIC_ACID = 431
DIHYDROPHYLLOQUINONE = 429
WATER = 255

LENTILS = 16070
COFFEE = 14209
MILK = 1077
SPINACH = 11457


@pytest.fixture
def sample_nutrients():
    """Nutrient definitions named as in SR26."""
    return {
        PROTEIN: Nutrient(PROTEIN, "g", "Protein"),
        CALCIUM: Nutrient(CALCIUM, "mg", "Calcium, Ca"),
        CAFFEINE: Nutrient(CAFFEINE, "mg", "Caffeine"),
        PHENYLALANINE: Nutrient(PHENYLALANINE, "g", "Phenylalanine"),
        TYROSINE: Nutrient(TYROSINE, "g", "Tyrosine"),
        FOOD_FOLATE: Nutrient(FOOD_FOLATE, "µg", "Folate, food"),
        FOLIC_ACID: Nutrient(FOLIC_ACID, "µg", "Folic acid"),
        DIHYDROPHYLLOQUINONE: Nutrient(DIHYDROPHYLLOQUINONE, "µg", "Dihydrophylloquinone"),
        WATER: Nutrient(WATER, "g", "Water"),
    }


@pytest.fixture
def sample_foods():
    """A handful of foods with per-gram nutrient contributions."""
    return {
        LENTILS: FoodItem(
            id=LENTILS,
            food_group="1600",
            description="Lentils, mature seeds, cooked, boiled",
            nutrients=(
                NutrientAmount(PROTEIN, 0.09),
                NutrientAmount(CALCIUM, 0.19),
                NutrientAmount(PHENYLALANINE, 0.0044),
                NutrientAmount(TYROSINE, 0.0024),
                NutrientAmount(FOOD_FOLATE, 1.81),
                NutrientAmount(WATER, 0.69),
            ),
        ),
        COFFEE: FoodItem(
            id=COFFEE,
            food_group="1400",
            description="Coffee, brewed",
            nutrients=(
                NutrientAmount(CAFFEINE, 0.4),
                NutrientAmount(WATER, 0.99),
            ),
        ),
        MILK: FoodItem(
            id=MILK,
            food_group="0100",
            description="Milk, whole",
            manufacturer="",
            nutrients=(
                NutrientAmount(PROTEIN, 0.0315),
                NutrientAmount(CALCIUM, 1.13),
                NutrientAmount(FOLIC_ACID, 0.0),
                NutrientAmount(WATER, 0.88),
            ),
        ),
        SPINACH: FoodItem(
            id=SPINACH,
            food_group="1100",
            description="Spinach, raw",
            nutrients=(
                NutrientAmount(PROTEIN, 0.0286),
                NutrientAmount(CALCIUM, 0.99),
                NutrientAmount(FOOD_FOLATE, 1.94),
                NutrientAmount(DIHYDROPHYLLOQUINONE, 0.001),
                NutrientAmount(WATER, 0.914),
            ),
        ),
    }


@pytest.fixture
def catalog(sample_nutrients, sample_foods):
    """Small catalog built from the sample nutrients and foods."""
    return Catalog(nutrients=sample_nutrients, foods=sample_foods)


@pytest.fixture
def empty_catalog():
    """Catalog with no nutrients and no foods."""
    return Catalog(nutrients={}, foods={})


@pytest.fixture
def lentils(catalog):
    return catalog.foods[LENTILS]


@pytest.fixture
def coffee(catalog):
    return catalog.foods[COFFEE]


@pytest.fixture
def milk(catalog):
    return catalog.foods[MILK]


@pytest.fixture
def spinach(catalog):
    return catalog.foods[SPINACH]
