"""
Utility functions for law-suite integration runs.

Provides:
- Catalog selection by name
- Receipt saving
- Summary statistics over receipts
- Logging setup
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from action_universe.act_core.action import FiniteAction
from action_universe.act_core.catalog import CATALOG


def select_actions(names: Optional[List[str]] = None) -> Dict[str, Callable[[], FiniteAction]]:
    """
    Pick catalog entries by name (all of them when names is empty).

    Raises:
        ValueError: If a name is not in the catalog
    """
    if not names:
        return dict(CATALOG)

    unknown = [n for n in names if n not in CATALOG]
    if unknown:
        raise ValueError(
            f"Unknown action(s) {unknown}. Must be among {sorted(CATALOG)}"
        )
    return {n: CATALOG[n] for n in names}


LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, log_file: Path, level=logging.INFO) -> logging.Logger:
    """
    Logger for a law-suite run: full detail to log_file, INFO and up to the console.

    The library loggers (action_universe.*) write to the same file, so
    counterexamples logged at DEBUG by the checkers end up next to the
    run summary.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler = logging.FileHandler(log_file, mode="w")
    console_handler = logging.StreamHandler()
    for handler, handler_level in ((file_handler, level), (console_handler, logging.INFO)):
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)

    run_logger = logging.getLogger(name)
    run_logger.setLevel(level)
    run_logger.propagate = False
    run_logger.handlers = [file_handler, console_handler]

    library_logger = logging.getLogger("action_universe")
    library_logger.setLevel(level)
    library_logger.handlers = [file_handler]

    return run_logger


def build_receipt(action_name: str, law_data: Optional[Dict[str, Any]] = None,
                  error: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a LawReceipt dict (or an error) with run metadata."""
    passed = law_data is not None and law_data.get("passed", False)
    receipt = {
        "action": action_name,
        "timestamp": datetime.now().isoformat(),
        "status": "PASS" if passed and error is None else "FAIL",
    }
    if law_data is not None:
        receipt["laws"] = law_data
    if error is not None:
        receipt["error"] = error
    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> Path:
    """Save receipt to <output_dir>/<action>.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"{receipt['action']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)

    return receipt_file


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summary statistics over run receipts.

    Returns:
        Dict with counts, pass rate, total checks and per-law failure totals
    """
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")

    law_receipts = [r["laws"] for r in receipts if "laws" in r]
    failures: Dict[str, int] = {}
    for laws in law_receipts:
        for law, count in laws["failure_counts"].items():
            failures[law] = failures.get(law, 0) + count

    return {
        "total_actions": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
        "total_checks": sum(laws["total_checks"] for laws in law_receipts),
        "failures_by_law": failures,
    }
