"""Penalty model scoring a recipe's nutrient totals against daily targets."""

from dataclasses import dataclass

from dietplanner.catalog.models import Catalog
from dietplanner.logging_config import get_logger
from dietplanner.plan import targets as t
from dietplanner.plan.recipe import Recipe
from dietplanner.plan.targets import DAILY_TARGETS, NutrientTarget

logger = get_logger(__name__)


@dataclass(frozen=True)
class PenaltyTerm:
    """One line of a scoring trace."""

    label: str
    amount: float
    penalty: float
    minimum: float | None = None
    maximum: float | None = None


def penalty(amount: float, minimum: float, maximum: float = 0.0) -> float:
    """
    Penalty for one nutrient amount against a [minimum, maximum] range.

    Below the minimum the penalty ramps linearly from 100 (nothing) to 0. From
    the minimum up to the midpoint of the range there is no penalty. From the
    midpoint it grows linearly, reaching 100 at the maximum and continuing
    past it. A maximum of 0 means no upper bound.
    """
    if amount < minimum:
        return (minimum - amount) / minimum * 100

    if not maximum:
        return 0.0

    midpoint = minimum + (maximum - minimum) / 2
    if amount < midpoint:
        return 0.0
    return (amount - midpoint) / (maximum - midpoint) * 100


class PenaltyModel:
    """
    Maps a recipe to a non-negative score; lower is better and 0 is ideal.

    Target names are resolved against the catalog once. A name the catalog
    does not define is scored as an amount of 0.
    """

    def __init__(self, catalog: Catalog, targets: tuple[NutrientTarget, ...] = DAILY_TARGETS):
        self.catalog = catalog
        self.targets = targets

        self._unresolved: list[str] = []
        self._target_ids = [self._resolve(target.name) for target in targets]
        self._phenylalanine = self._resolve(t.PHENYLALANINE)
        self._tyrosine = self._resolve(t.TYROSINE)
        self._food_folate = self._resolve(t.FOOD_FOLATE)
        self._folic_acid = self._resolve(t.FOLIC_ACID)
        self._caffeine = self._resolve(t.CAFFEINE)
        self._dihydrophylloquinone = self._resolve(t.DIHYDROPHYLLOQUINONE)

        if self._unresolved:
            logger.warning(
                f"{len(self._unresolved)} target nutrient(s) missing from catalog, "
                f"scored as 0: {', '.join(self._unresolved)}"
            )

    @property
    def unresolved_names(self) -> list[str]:
        """Target nutrient names the catalog does not define."""
        return list(self._unresolved)

    def _resolve(self, name: str) -> int | None:
        nutrient_id = self.catalog.nutrient_id(name)
        if nutrient_id is None and name not in self._unresolved:
            self._unresolved.append(name)
        return nutrient_id

    @staticmethod
    def _amount(totals: dict[int, float], nutrient_id: int | None) -> float:
        if nutrient_id is None:
            return 0.0
        return totals.get(nutrient_id, 0.0)

    def score(self, recipe: Recipe, verbose: bool = False) -> float:
        """
        Score a recipe.

        Args:
            recipe: Recipe to score.
            verbose: Log the per-nutrient breakdown at INFO level.
        """
        if not verbose:
            return self._evaluate(recipe, None)

        terms: list[PenaltyTerm] = []
        total = self._evaluate(recipe, terms)
        for term in terms:
            logger.info(_describe(term))
        logger.info(f"Total penalty: {total:.4f}")
        return total

    def breakdown(self, recipe: Recipe) -> list[PenaltyTerm]:
        """Per-term scoring trace, in evaluation order."""
        terms: list[PenaltyTerm] = []
        self._evaluate(recipe, terms)
        return terms

    def _evaluate(self, recipe: Recipe, terms: list[PenaltyTerm] | None) -> float:
        totals = recipe.nutrient_totals
        amount_of = self._amount
        total = 0.0

        for target, nutrient_id in zip(self.targets, self._target_ids):
            amount = amount_of(totals, nutrient_id)
            value = penalty(amount, target.minimum, target.maximum)
            total += value
            if terms is not None:
                terms.append(
                    PenaltyTerm(target.name, amount, value, target.minimum, target.maximum)
                )

        # Phenylalanine + tyrosine
        amount = amount_of(totals, self._phenylalanine) + amount_of(totals, self._tyrosine)
        value = penalty(amount, t.PHENYLALANINE_TYROSINE_MIN)
        total += value
        if terms is not None:
            terms.append(
                PenaltyTerm(
                    f"{t.PHENYLALANINE} + {t.TYROSINE}",
                    amount,
                    value,
                    t.PHENYLALANINE_TYROSINE_MIN,
                    0.0,
                )
            )

        # Folate, DFE
        amount = amount_of(totals, self._food_folate) + t.FOLIC_ACID_FACTOR * amount_of(
            totals, self._folic_acid
        )
        value = penalty(amount, t.FOLATE_DFE_MIN, t.FOLATE_DFE_MAX)
        total += value
        if terms is not None:
            terms.append(
                PenaltyTerm("Folate, DFE", amount, value, t.FOLATE_DFE_MIN, t.FOLATE_DFE_MAX)
            )

        caffeine = amount_of(totals, self._caffeine)
        value = caffeine - t.CAFFEINE_OFFSET if caffeine > t.CAFFEINE_THRESHOLD else 0.0
        total += value
        if terms is not None:
            terms.append(PenaltyTerm(t.CAFFEINE, caffeine, value))

        amount = amount_of(totals, self._dihydrophylloquinone)
        total += amount
        if terms is not None:
            terms.append(PenaltyTerm(t.DIHYDROPHYLLOQUINONE, amount, amount))

        food_count = recipe.food_count
        value = min(food_count / t.FOOD_COUNT_LIMIT, 1) * t.SIZE_PENALTY_WEIGHT
        total += value
        if terms is not None:
            terms.append(PenaltyTerm("Number of foods", food_count, value))

        total_grams = recipe.total_grams
        value = min(total_grams / t.TOTAL_GRAMS_LIMIT, 1) * t.SIZE_PENALTY_WEIGHT
        total += value
        if terms is not None:
            terms.append(PenaltyTerm("Total mass (g)", total_grams, value))

        return total


def _describe(term: PenaltyTerm) -> str:
    if term.minimum is None:
        return f"Penalty for {term.label} (amount={term.amount:.4f}): {term.penalty:.4f}"
    if term.penalty == 0:
        return f"No penalty for {term.label}"
    if term.amount < term.minimum:
        return (
            f"Penalty for less {term.label} than min "
            f"(have {term.amount:.4f}, need {term.minimum}): {term.penalty:.4f}"
        )
    return (
        f"Penalty for excess {term.label} "
        f"(amount={term.amount:.4f}, min={term.minimum}, max={term.maximum}): {term.penalty:.4f}"
    )
