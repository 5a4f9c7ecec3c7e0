"""API routes for running recipe optimizations."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from dietplanner.catalog.models import Catalog
from dietplanner.logging_config import get_logger
from dietplanner.plan.recipe import UnknownFoodError
from dietplanner.plan.service import run_optimization
from dietplanner.routers.dependencies import require_catalog
from dietplanner.schemas import OptimizationRequest, OptimizationResultSchema

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/optimizations", tags=["optimizations"])


# =============================================================================
# Response Schemas
# =============================================================================


class OptimizationJobResponse(BaseModel):
    """Response from queueing an optimization."""

    task_id: str
    status: str
    message: str


class OptimizationJobStatusResponse(BaseModel):
    """Progress or outcome of a queued optimization."""

    task_id: str
    status: str
    round: int | None = None
    score: float | None = None
    result: OptimizationResultSchema | None = None
    error: str | None = None


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=OptimizationResultSchema)
def optimize(
    request: OptimizationRequest,
    catalog: Catalog = Depends(require_catalog),
) -> OptimizationResultSchema:
    """
    Run an optimization and wait for the result.

    Searches until a local optimum, an ideal score, or ``max_rounds``. For a
    full catalog prefer the background job endpoints.
    """
    try:
        return run_optimization(catalog, request)
    except UnknownFoodError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.post("/jobs", response_model=OptimizationJobResponse, status_code=status.HTTP_202_ACCEPTED)
async def queue_optimization(request: OptimizationRequest) -> OptimizationJobResponse:
    """
    Queue an optimization as a background Celery task.

    Use the returned task_id with /jobs/{task_id} to follow progress.
    """
    from dietplanner.tasks.optimization import run_optimization_task

    logger.info(
        f"Queueing optimization: step={request.step_size}, max_rounds={request.max_rounds}"
    )

    try:
        task = run_optimization_task.delay(
            step_size=request.step_size,
            max_rounds=request.max_rounds,
            initial_quantities={str(k): v for k, v in request.initial_quantities.items()},
            verify_consistency=request.verify_consistency,
        )
    except Exception as e:
        logger.error(f"Failed to queue optimization task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to queue optimization task: {e}",
        ) from e

    return OptimizationJobResponse(
        task_id=task.id,
        status="queued",
        message="Optimization queued. Use /jobs/{task_id} to monitor progress.",
    )


@router.get("/jobs/{task_id}", response_model=OptimizationJobStatusResponse)
async def get_optimization_job(task_id: str) -> OptimizationJobStatusResponse:
    """Get the progress or result of a queued optimization."""
    from celery.result import AsyncResult

    from dietplanner.celery_app import celery_app

    result = AsyncResult(task_id, app=celery_app)
    state = result.state

    if state == "PROGRESS":
        meta: dict[str, Any] = result.info or {}
        return OptimizationJobStatusResponse(
            task_id=task_id,
            status="running",
            round=meta.get("round"),
            score=meta.get("score"),
        )
    if state == "SUCCESS":
        payload = OptimizationResultSchema.model_validate(result.result)
        return OptimizationJobStatusResponse(
            task_id=task_id,
            status="completed",
            round=payload.rounds,
            score=payload.score,
            result=payload,
        )
    if state == "FAILURE":
        return OptimizationJobStatusResponse(
            task_id=task_id,
            status="failed",
            error=str(result.result) if result.result else "Unknown error",
        )
    return OptimizationJobStatusResponse(task_id=task_id, status=state.lower())
