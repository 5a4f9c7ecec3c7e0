"""Script to search for a recipe meeting the daily nutrient targets.

Loads the USDA SR26 database, hill-climbs from an empty recipe and prints
the foods, penalties and nutrient totals of the best recipe found.

Run with: uv run python scripts/run_optimizer.py --data-dir ./sr26
"""

import argparse
import sys
import time

from dietplanner.catalog import CatalogError, load_sr26_catalog
from dietplanner.config import settings
from dietplanner.logging_config import configure_logging, get_logger
from dietplanner.plan import HillClimbOptimizer, OptimizerConfig, PenaltyModel, RoundReport
from dietplanner.plan.report import format_report

logger = get_logger(__name__)


def print_progress(report: RoundReport) -> None:
    sign = "+" if report.move.grams > 0 else "-"
    print(
        f"Round {report.round_number:4d}: {sign}{abs(report.move.grams)}g of food "
        f"{report.move.food_id}, score {report.score:.4f}"
    )


def main():
    parser = argparse.ArgumentParser(description="Optimize food quantities against daily targets")
    parser.add_argument(
        "--data-dir", "-d", type=str, default=settings.usda_data_dir, help="SR26 directory"
    )
    parser.add_argument(
        "--step-size", "-s", type=int, default=settings.step_size, help="Grams per move"
    )
    parser.add_argument(
        "--max-rounds", "-r", type=int, default=settings.max_rounds, help="Stop after N rounds"
    )
    parser.add_argument(
        "--verify", action="store_true", help="Recompute nutrient totals after every move"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log the final penalty breakdown"
    )

    args = parser.parse_args()

    try:
        config = OptimizerConfig(
            step_size=args.step_size,
            max_rounds=args.max_rounds,
            verify_consistency=args.verify or settings.verify_consistency,
            consistency_tolerance=settings.consistency_tolerance,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(log_level=settings.log_level, log_file=settings.log_file)

    try:
        catalog = load_sr26_catalog(args.data_dir)
    except CatalogError as e:
        logger.error(f"Could not load catalog: {e}")
        sys.exit(1)

    model = PenaltyModel(catalog)

    print(f"\n{'='*60}")
    print("Optimizing recipe")
    print(f"  Foods: {len(catalog.foods)}")
    print(f"  Step size: {config.step_size}g")
    print(f"  Max rounds: {config.max_rounds or 'unlimited'}")
    print(f"{'='*60}\n")

    started = time.monotonic()
    optimizer = HillClimbOptimizer(catalog, penalty_model=model, config=config)
    result = optimizer.optimize(on_round=print_progress)
    elapsed = time.monotonic() - started

    if args.verbose:
        model.score(result.recipe, verbose=True)

    print(f"\n{format_report(result, catalog, model)}")
    print(f"\nElapsed: {elapsed:.1f}s")


if __name__ == "__main__":
    main()
