"""Unit tests for the penalty model."""

import logging

import pytest

from dietplanner.catalog.models import Catalog, FoodItem, Nutrient, NutrientAmount
from dietplanner.plan.penalty import PenaltyModel, penalty
from dietplanner.plan.recipe import Recipe
from dietplanner.plan.targets import DAILY_TARGETS, NutrientTarget


def term_named(terms, label):
    return next(term for term in terms if term.label == label)


# =============================================================================
# Penalty Primitive
# =============================================================================


class TestPenaltyPrimitive:
    """Tests for penalty(amount, minimum, maximum)."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, 100.0),
            (5, 50.0),
            (10, 0.0),
            (15, 0.0),
            (20, 0.0),
            (25, 50.0),
            (30, 100.0),
            (40, 200.0),
        ],
    )
    def test_shape(self, amount, expected):
        """Test ramp below min, safe zone to midpoint, linear excess past it."""
        assert penalty(amount, 10, 30) == pytest.approx(expected)

    @pytest.mark.parametrize("amount", [10, 11, 1000, 1e12])
    def test_no_max_never_penalizes_excess(self, amount):
        """Test a zero maximum means no upper bound."""
        assert penalty(amount, 10, 0) == 0.0

    def test_no_max_still_ramps_below_min(self):
        """Test the minimum ramp applies without a maximum."""
        assert penalty(2.5, 10, 0) == pytest.approx(75.0)

    def test_default_maximum(self):
        """Test the maximum defaults to unbounded."""
        assert penalty(50, 10) == 0.0


# =============================================================================
# Target Table
# =============================================================================


class TestDailyTargets:
    """Tests for the fixed target table."""

    def test_every_target_has_positive_minimum(self):
        """Test each entry ramps to 100 when the nutrient is absent."""
        assert all(target.minimum > 0 for target in DAILY_TARGETS)

    def test_maximum_above_minimum(self):
        """Test bounded ranges are well formed."""
        for target in DAILY_TARGETS:
            assert target.maximum == 0 or target.maximum > target.minimum, target.name

    def test_names_are_unique(self):
        """Test no nutrient is scored twice."""
        names = [target.name for target in DAILY_TARGETS]
        assert len(names) == len(set(names))

    def test_literal_thresholds(self):
        """Test a sample of thresholds."""
        by_name = {target.name: target for target in DAILY_TARGETS}
        assert by_name["Protein"] == NutrientTarget("Protein", 101.5, 3510)
        assert by_name["Sodium, Na"] == NutrientTarget("Sodium, Na", 1500, 2300)
        assert by_name["Water"] == NutrientTarget("Water", 946, 0)
        assert by_name["Leucine"].minimum == 2.535

    @pytest.mark.parametrize("minimum", [0, -1.5])
    def test_non_positive_minimum_rejected(self, minimum):
        """Test a target must have a positive minimum to ramp against."""
        with pytest.raises(ValueError):
            NutrientTarget("Protein", minimum)

    def test_maximum_below_minimum_rejected(self):
        """Test an upper bound must lie above the minimum."""
        with pytest.raises(ValueError):
            NutrientTarget("Protein", 50, 40)

    def test_drifted_negative_total_scores_full_ramp(self, catalog, lentils):
        """Test a slightly negative total is scored without error."""
        model = PenaltyModel(catalog, targets=(NutrientTarget("Protein", 10),))
        recipe = Recipe(catalog)
        recipe.nutrient_totals[lentils.nutrients[0].nutrient_id] = -1e-12

        assert term_named(model.breakdown(recipe), "Protein").penalty == pytest.approx(100.0)


# =============================================================================
# PenaltyModel
# =============================================================================


class TestEmptyRecipeScore:
    """Tests for scoring a recipe with no foods."""

    def test_empty_recipe(self, catalog):
        """Test every target plus the two combined terms score 100."""
        model = PenaltyModel(catalog)

        assert model.score(Recipe(catalog)) == pytest.approx(100 * (len(DAILY_TARGETS) + 2))

    def test_empty_recipe_empty_catalog(self, empty_catalog):
        """Test missing nutrients are scored as zero amounts."""
        model = PenaltyModel(empty_catalog)

        assert model.score(Recipe(empty_catalog)) == pytest.approx(4100.0)


class TestSpecialCases:
    """Tests for the combined, derived, threshold and size terms."""

    def test_phenylalanine_tyrosine_combined(self, catalog, lentils):
        """Test phenylalanine and tyrosine are summed against one minimum."""
        model = PenaltyModel(catalog)
        recipe = Recipe(catalog)
        recipe.add_food(lentils, 100)

        term = term_named(model.breakdown(recipe), "Phenylalanine + Tyrosine")

        assert term.amount == pytest.approx(0.68)
        assert term.penalty == pytest.approx((1.625 - 0.68) / 1.625 * 100)

    def test_folate_dfe(self):
        """Test folic acid counts 1.7 times towards folate."""
        nutrients = {
            1: Nutrient(1, "µg", "Folate, food"),
            2: Nutrient(2, "µg", "Folic acid"),
        }
        food = FoodItem(
            id=1,
            food_group="2000",
            description="Pasta, enriched",
            nutrients=(NutrientAmount(1, 1.0), NutrientAmount(2, 1.0)),
        )
        catalog = Catalog(nutrients=nutrients, foods={1: food})
        recipe = Recipe.from_quantities(catalog, {1: 100})

        term = term_named(PenaltyModel(catalog).breakdown(recipe), "Folate, DFE")

        assert term.amount == pytest.approx(270.0)
        assert term.penalty == pytest.approx(32.5)

    def test_caffeine_above_threshold(self, catalog, coffee):
        """Test caffeine over 20 adds (caffeine - 5) directly."""
        recipe = Recipe.from_quantities(catalog, {coffee.id: 60})

        term = term_named(PenaltyModel(catalog).breakdown(recipe), "Caffeine")

        assert term.amount == pytest.approx(24.0)
        assert term.penalty == pytest.approx(19.0)

    def test_caffeine_below_threshold(self, catalog, coffee):
        """Test caffeine at or below 20 is free."""
        recipe = Recipe.from_quantities(catalog, {coffee.id: 25})

        term = term_named(PenaltyModel(catalog).breakdown(recipe), "Caffeine")

        assert term.penalty == 0.0

    def test_dihydrophylloquinone_pass_through(self, catalog, spinach):
        """Test the raw amount is added without a ramp."""
        recipe = Recipe.from_quantities(catalog, {spinach.id: 1000})

        term = term_named(PenaltyModel(catalog).breakdown(recipe), "Dihydrophylloquinone")

        assert term.penalty == pytest.approx(1.0)

    def test_size_penalties(self, catalog, lentils, milk, spinach):
        """Test food count and mass penalties scale linearly."""
        recipe = Recipe.from_quantities(catalog, {lentils.id: 50, milk.id: 50, spinach.id: 50})
        terms = PenaltyModel(catalog).breakdown(recipe)

        assert term_named(terms, "Number of foods").penalty == pytest.approx(0.3)
        assert term_named(terms, "Total mass (g)").penalty == pytest.approx(0.5)

    def test_size_penalties_cap(self, catalog, milk):
        """Test mass penalty stops growing at 3000 g."""
        recipe = Recipe.from_quantities(catalog, {milk.id: 9000})
        terms = PenaltyModel(catalog).breakdown(recipe)

        assert term_named(terms, "Total mass (g)").penalty == pytest.approx(10.0)

    def test_excess_is_unbounded(self, catalog, milk):
        """Test calcium far beyond its maximum keeps adding penalty."""
        recipe = Recipe.from_quantities(catalog, {milk.id: 5000})
        term = term_named(PenaltyModel(catalog).breakdown(recipe), "Calcium, Ca")

        # 5650 mg against 1000-2500 (midpoint 1750)
        assert term.penalty == pytest.approx((5650 - 1750) / 750 * 100)
        assert term.penalty > 100


class TestScore:
    """Tests for PenaltyModel.score."""

    def test_score_is_sum_of_breakdown(self, catalog, lentils, coffee, spinach):
        """Test the trace adds up to the score."""
        model = PenaltyModel(catalog)
        recipe = Recipe.from_quantities(catalog, {lentils.id: 300, coffee.id: 80, spinach.id: 40})

        assert model.score(recipe) == pytest.approx(sum(t.penalty for t in model.breakdown(recipe)))

    def test_verbose_matches_quiet(self, catalog, lentils, caplog):
        """Test the verbose flag only adds logging."""
        model = PenaltyModel(catalog)
        recipe = Recipe.from_quantities(catalog, {lentils.id: 300})

        with caplog.at_level(logging.INFO, logger="dietplanner.plan.penalty"):
            verbose_score = model.score(recipe, verbose=True)

        assert verbose_score == model.score(recipe)
        assert "Total penalty" in caplog.text
        assert "Penalty for less Protein than min" in caplog.text

    def test_score_is_non_negative(self, catalog, lentils, milk, spinach):
        """Test scores never go below zero."""
        model = PenaltyModel(catalog)
        recipe = Recipe.from_quantities(
            catalog, {lentils.id: 2000, milk.id: 1500, spinach.id: 500}
        )

        assert model.score(recipe) >= 0

    def test_custom_targets(self, catalog, lentils):
        """Test a model can be built with its own target table."""
        model = PenaltyModel(catalog, targets=(NutrientTarget("Protein", 10, 30),))
        recipe = Recipe.from_quantities(catalog, {lentils.id: 200})

        assert term_named(model.breakdown(recipe), "Protein").penalty == 0.0


class TestUnknownNutrients:
    """Tests for target names missing from the catalog."""

    def test_unresolved_names_reported(self, catalog):
        """Test names absent from the catalog are listed."""
        model = PenaltyModel(catalog)

        assert "Energy, kcal" in model.unresolved_names
        assert "Protein" not in model.unresolved_names

    def test_unresolved_names_logged(self, empty_catalog, caplog):
        """Test a warning is logged once when the model is built."""
        with caplog.at_level(logging.WARNING, logger="dietplanner.plan.penalty"):
            PenaltyModel(empty_catalog)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Protein" in warnings[0].getMessage()
