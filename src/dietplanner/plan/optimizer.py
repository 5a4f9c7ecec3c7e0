"""Hill-climbing search over recipe quantities."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from dietplanner.catalog.models import Catalog
from dietplanner.config import Settings
from dietplanner.logging_config import get_logger
from dietplanner.plan.penalty import PenaltyModel
from dietplanner.plan.recipe import InternalConsistencyError, Recipe

logger = get_logger(__name__)


class OptimizerState(str, Enum):
    EXPLORING = "exploring"
    TERMINATED = "terminated"


class TerminationReason(str, Enum):
    LOCAL_OPTIMUM = "local_optimum"
    IDEAL_SCORE = "ideal_score"
    ROUND_LIMIT = "round_limit"


@dataclass(frozen=True)
class OptimizerConfig:
    """Search parameters."""

    step_size: int = 5  # grams added or removed per trial move
    max_rounds: int | None = None  # None = run until a local optimum or ideal score
    verify_consistency: bool = False
    consistency_tolerance: float = 0.5

    def __post_init__(self) -> None:
        if isinstance(self.step_size, bool) or not isinstance(self.step_size, int):
            raise ValueError(f"step_size must be an integer, got {self.step_size!r}")
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.max_rounds is not None and self.max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {self.max_rounds}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "OptimizerConfig":
        return cls(
            step_size=settings.step_size,
            max_rounds=settings.max_rounds,
            verify_consistency=settings.verify_consistency,
            consistency_tolerance=settings.consistency_tolerance,
        )


@dataclass(frozen=True)
class Move:
    """Single-food change applied in a round; negative grams is a removal."""

    food_id: int
    grams: int


@dataclass(frozen=True)
class RoundReport:
    """Outcome of an adopted round."""

    round_number: int
    score: float
    move: Move


@dataclass
class OptimizationResult:
    """Best recipe found and how the search ended."""

    recipe: Recipe
    score: float
    rounds: int
    reason: TerminationReason
    score_history: list[float] = field(default_factory=list)


class HillClimbOptimizer:
    """
    Steepest-descent hill climber.

    Each round tries removing and adding one step of every catalog food (in
    ascending id order) to a working copy of the best recipe, undoing each
    trial. The strictly best neighbor of the round is adopted; the earliest
    one wins ties. The search stops at a local optimum (no improving
    neighbor) or when the score reaches 0.
    """

    def __init__(
        self,
        catalog: Catalog,
        penalty_model: PenaltyModel | None = None,
        config: OptimizerConfig | None = None,
    ):
        self.catalog = catalog
        self.penalty_model = penalty_model or PenaltyModel(catalog)
        self.config = config or OptimizerConfig()
        self.state = OptimizerState.EXPLORING

    def run_round(self, best: Recipe, best_score: float) -> tuple[Recipe, float, Move] | None:
        """
        Search every single-step neighbor of ``best``.

        Returns:
            (candidate, score, move) for the best strictly improving neighbor,
            or None if ``best`` is a local optimum.
        """
        step = self.config.step_size
        score = self.penalty_model.score
        working = best.clone()

        candidate: Recipe | None = None
        candidate_score = best_score
        candidate_move: Move | None = None

        for food in self.catalog.ordered_foods:
            if working.grams_of(food) >= step:
                working.remove_food(food, step)
                trial_score = score(working)
                if trial_score < candidate_score:
                    candidate = working.clone()
                    candidate_score = trial_score
                    candidate_move = Move(food.id, -step)
                working.add_food(food, step)
                self._verify(working)

            working.add_food(food, step)
            trial_score = score(working)
            if trial_score < candidate_score:
                candidate = working.clone()
                candidate_score = trial_score
                candidate_move = Move(food.id, step)
            working.remove_food(food, step)
            self._verify(working)

        if candidate is None or candidate_move is None:
            return None
        return candidate, candidate_score, candidate_move

    def optimize(
        self,
        start: Recipe | None = None,
        on_round: Callable[[RoundReport], None] | None = None,
    ) -> OptimizationResult:
        """
        Run rounds until the search terminates.

        Args:
            start: Recipe to start from. Defaults to the empty recipe. Not modified.
            on_round: Called after each adopted round.

        Returns:
            OptimizationResult with the best recipe found.
        """
        self.state = OptimizerState.EXPLORING
        best = start.clone() if start is not None else Recipe(self.catalog)
        best_score = self.penalty_model.score(best)
        history = [best_score]
        rounds = 0

        logger.info(
            f"Starting optimization: {len(self.catalog.foods)} foods, "
            f"step={self.config.step_size}g, score={best_score:.4f}"
        )

        while True:
            if best_score <= 0:
                reason = TerminationReason.IDEAL_SCORE
                break
            if self.config.max_rounds is not None and rounds >= self.config.max_rounds:
                reason = TerminationReason.ROUND_LIMIT
                break

            outcome = self.run_round(best, best_score)
            if outcome is None:
                reason = TerminationReason.LOCAL_OPTIMUM
                break

            candidate, candidate_score, move = outcome
            if candidate_score > best_score:
                raise InternalConsistencyError(
                    f"Round {rounds + 1} candidate scored {candidate_score} "
                    f"above the current best {best_score}"
                )
            if self.config.verify_consistency:
                candidate.check_consistency(self.config.consistency_tolerance)

            best, best_score = candidate, candidate_score
            rounds += 1
            history.append(best_score)
            logger.debug(
                f"Round {rounds}: food={move.food_id} {move.grams:+d}g score={best_score:.4f}"
            )
            if on_round is not None:
                on_round(RoundReport(round_number=rounds, score=best_score, move=move))

        self.state = OptimizerState.TERMINATED
        logger.info(
            f"Optimization finished after {rounds} rounds ({reason.value}): "
            f"score={best_score:.4f}, foods={best.food_count}, mass={best.total_grams}g"
        )
        return OptimizationResult(
            recipe=best,
            score=best_score,
            rounds=rounds,
            reason=reason,
            score_history=history,
        )

    def _verify(self, recipe: Recipe) -> None:
        if self.config.verify_consistency:
            recipe.check_consistency(self.config.consistency_tolerance)
