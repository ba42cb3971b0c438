#!/usr/bin/env python3
"""
Law suite: fixing / moving laws over the action catalog.

Runs verify_laws on every selected catalog action and writes one JSON
receipt per action.

Critical invariants:
- passed = True for every action (no law has a counterexample)
- faithful-only laws are skipped, not failed, on non-faithful actions
- group-only laws are skipped, not failed, on monoids

Usage:
    python run_law_suite.py --actions S3 D4_grid2 T3 --max-points 9
"""

import argparse
import logging
import sys
from pathlib import Path

# Add repository root to path to import action_universe
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from action_universe.act_fixing.laws import DEFAULT_SEED, MAX_EXHAUSTIVE_POINTS, verify_laws
from action_universe.integration_tests.utils import (
    build_receipt,
    compute_summary_stats,
    save_receipt,
    select_actions,
    setup_logger,
)


def run_action(name, factory, max_points, seed, logger):
    """Build one catalog action and check it. Returns a run receipt."""
    try:
        action = factory()
        logger.info(f"{name}: {action!r}")
        law_receipt = verify_laws(action, max_points=max_points, seed=seed)
    except ValueError as e:
        logger.error(f"{name}: {type(e).__name__}: {e}")
        return build_receipt(name, error=f"{type(e).__name__}: {e}")

    data = law_receipt.to_dict()
    if law_receipt.passed:
        logger.info(f"{name}: PASS ({data['total_checks']} checks, skipped {law_receipt.skipped})")
    else:
        for failure in law_receipt.failures:
            logger.error(f"{name}: {failure}")
    return build_receipt(name, law_data=data)


def main():
    parser = argparse.ArgumentParser(
        description="Check fixing / moving substructure laws over the action catalog"
    )
    parser.add_argument(
        "--actions",
        nargs="*",
        default=None,
        help="Catalog names to check (default: all)",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=MAX_EXHAUSTIVE_POINTS,
        help=f"Refuse carriers with more points (default: {MAX_EXHAUSTIVE_POINTS})",
    )
    parser.add_argument(
        "--seed", type=int, default=DEFAULT_SEED, help="Seed for sampling subset pairs"
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path(__file__).parent / "receipts" / "laws",
        help="Directory for JSON receipts",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()

    logs_dir = Path(__file__).parent / "logs"
    logger = setup_logger("law_suite", logs_dir / "law_suite.log", getattr(logging, args.log_level))

    try:
        actions = select_actions(args.actions)
    except ValueError as e:
        logger.error(str(e))
        return 2

    logger.info("=" * 80)
    logger.info("Law suite")
    logger.info(f"Actions: {', '.join(actions)}")
    logger.info(f"Max points: {args.max_points}  Seed: {args.seed}")
    logger.info("=" * 80)

    receipts = []
    for name, factory in actions.items():
        logger.info(f"\n--- {name} ---")
        receipt = run_action(name, factory, args.max_points, args.seed, logger)
        save_receipt(receipt, args.out_dir)
        receipts.append(receipt)

    stats = compute_summary_stats(receipts)
    logger.info("\n" + "=" * 80)
    logger.info("SUMMARY")
    logger.info("=" * 80)
    logger.info(f"Actions: {stats['total_actions']}")
    logger.info(f"Passed: {stats['passed']}")
    logger.info(f"Failed: {stats['failed']}")
    logger.info(f"Pass rate: {stats['pass_rate']:.2%}")
    logger.info(f"Total checks: {stats['total_checks']}")
    for law, count in sorted(stats["failures_by_law"].items()):
        logger.error(f"  {law}: {count} counterexamples")
    logger.info(f"Receipts saved to: {args.out_dir}")

    return 0 if stats["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
