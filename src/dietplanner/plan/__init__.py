"""Recipe search: state, scoring and optimization."""

from dietplanner.plan.optimizer import (
    HillClimbOptimizer,
    Move,
    OptimizationResult,
    OptimizerConfig,
    OptimizerState,
    RoundReport,
    TerminationReason,
)
from dietplanner.plan.penalty import PenaltyModel, PenaltyTerm, penalty
from dietplanner.plan.recipe import (
    InternalConsistencyError,
    InvalidQuantityError,
    InvalidRemovalError,
    Recipe,
    RecipeError,
    UnknownFoodError,
)
from dietplanner.plan.targets import DAILY_TARGETS, NutrientTarget

__all__ = [
    "DAILY_TARGETS",
    "HillClimbOptimizer",
    "InternalConsistencyError",
    "InvalidQuantityError",
    "InvalidRemovalError",
    "Move",
    "NutrientTarget",
    "OptimizationResult",
    "OptimizerConfig",
    "OptimizerState",
    "PenaltyModel",
    "PenaltyTerm",
    "Recipe",
    "RecipeError",
    "RoundReport",
    "TerminationReason",
    "UnknownFoodError",
    "penalty",
]
