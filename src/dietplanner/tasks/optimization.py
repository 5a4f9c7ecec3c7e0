"""Celery tasks for running optimizations in the background."""

from typing import Any

from dietplanner.catalog.provider import get_catalog
from dietplanner.celery_app import celery_app
from dietplanner.config import get_settings
from dietplanner.logging_config import LoggingContext, configure_logging, get_logger
from dietplanner.plan.optimizer import RoundReport
from dietplanner.plan.service import run_optimization
from dietplanner.schemas import OptimizationRequest

settings = get_settings()

configure_logging(log_level=settings.log_level, log_file=settings.log_file)
logger = get_logger(__name__)


@celery_app.task(
    bind=True,
    name="dietplanner.tasks.optimization.run_optimization_task",
    acks_late=True,
    reject_on_worker_lost=True,
)
def run_optimization_task(
    self,
    step_size: int | None = None,
    max_rounds: int | None = None,
    initial_quantities: dict[str, int] | None = None,
    verify_consistency: bool | None = None,
) -> dict[str, Any]:
    """
    Run one optimization against the configured catalog.

    Progress is published as a PROGRESS state carrying the round number and
    current best score.

    Args:
        step_size: Grams per move; defaults to settings.
        max_rounds: Optional round cap; defaults to settings.
        initial_quantities: Starting grams per food id (JSON keys are strings).
        verify_consistency: Recompute nutrient totals after every move; defaults to settings.

    Returns:
        Serialized OptimizationResultSchema.
    """
    task_id = self.request.id
    request = OptimizationRequest(
        step_size=step_size,
        max_rounds=max_rounds,
        initial_quantities=initial_quantities or {},
        verify_consistency=verify_consistency,
    )

    def publish_progress(report: RoundReport) -> None:
        if self.request.called_directly or self.request.is_eager:
            return
        self.update_state(
            state="PROGRESS",
            meta={"round": report.round_number, "score": report.score},
        )

    with LoggingContext(task_id=task_id):
        logger.info(f"Starting optimization task {task_id}")

        try:
            result = run_optimization(get_catalog(), request, on_round=publish_progress)
        except Exception as e:
            logger.exception(f"Optimization task {task_id} failed: {e}")
            raise

        logger.info(
            f"Optimization task {task_id} finished: score={result.score:.4f}, "
            f"rounds={result.rounds}, reason={result.reason}"
        )
        return result.model_dump()
