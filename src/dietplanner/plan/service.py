"""Entry point running an optimization from a request."""

import uuid
from collections.abc import Callable

from dietplanner.catalog.models import Catalog
from dietplanner.config import Settings, get_settings
from dietplanner.logging_config import LoggingContext, get_logger
from dietplanner.plan.optimizer import HillClimbOptimizer, OptimizerConfig, RoundReport
from dietplanner.plan.penalty import PenaltyModel
from dietplanner.plan.recipe import Recipe
from dietplanner.schemas import OptimizationRequest, OptimizationResultSchema

logger = get_logger(__name__)


def build_config(request: OptimizationRequest, settings: Settings) -> OptimizerConfig:
    """Merge request overrides onto the configured defaults."""
    base = OptimizerConfig.from_settings(settings)
    return OptimizerConfig(
        step_size=request.step_size if request.step_size is not None else base.step_size,
        max_rounds=request.max_rounds if request.max_rounds is not None else base.max_rounds,
        verify_consistency=(
            request.verify_consistency
            if request.verify_consistency is not None
            else base.verify_consistency
        ),
        consistency_tolerance=base.consistency_tolerance,
    )


def run_optimization(
    catalog: Catalog,
    request: OptimizationRequest,
    settings: Settings | None = None,
    on_round: Callable[[RoundReport], None] | None = None,
) -> OptimizationResultSchema:
    """
    Run one optimization and serialize its result.

    Raises:
        UnknownFoodError: If ``initial_quantities`` names a food not in the catalog.
    """
    config = build_config(request, settings or get_settings())
    model = PenaltyModel(catalog)
    start = Recipe.from_quantities(catalog, request.initial_quantities)

    with LoggingContext(run_id=uuid.uuid4().hex):
        logger.info(
            f"Running optimization: step={config.step_size}g, max_rounds={config.max_rounds}, "
            f"seeded_foods={len(request.initial_quantities)}"
        )

        optimizer = HillClimbOptimizer(catalog, penalty_model=model, config=config)
        result = optimizer.optimize(start=start, on_round=on_round)

        logger.info(
            f"Optimization finished after {result.rounds} rounds "
            f"({result.reason.value}): score={result.score:.4f}"
        )
    return OptimizationResultSchema.from_result(result, catalog, model)
