"""Celery tasks for background job processing."""

from dietplanner.tasks.optimization import run_optimization_task

__all__ = ["run_optimization_task"]
