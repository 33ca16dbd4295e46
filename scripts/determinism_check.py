#!/usr/bin/env python3
"""
Determinism Check: evaluate the same indicator graph twice, verify 100% match

Validates that indicator outputs are reproducible by:
1. Building the configured graph over a fixed synthetic series and evaluating
   every index in ascending order
2. Building it again over an identical series and evaluating in descending
   order (cold caches, different evaluation order)
3. Comparing every value bit-for-bit (string form of the backing value)
4. Writing artifacts/determinism_diff.txt with the results
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from configs import config_loader
from indicore.indicators.manager import IndicatorManager
from indicore.models.synthetic import synthetic_series
from indicore.utils.json_logging import setup_logging
from indicore.utils.numeric import num_factory_for

logger = logging.getLogger(__name__)


def run_graph(bars_count, numeric_config, descending=False):
    """
    Evaluate every configured indicator at every index.

    Args:
        bars_count: Number of synthetic bars
        numeric_config: Numeric backing config
        descending: Evaluate from the last index down

    Returns:
        Dict of indicator name to list of string values (ascending index order)
    """
    series = synthetic_series(bars_count, num_factory_for(numeric_config))
    manager = IndicatorManager(series, config_loader.get_config('indicators').get('indicators', {}))

    indices = list(range(series.begin_index, series.end_index + 1))
    if descending:
        indices.reverse()

    results = {name: {} for name in manager.names}
    for index in indices:
        for name, value in manager.snapshot(index).items():
            results[name][index] = str(value)

    return {name: [values[i] for i in sorted(values)] for name, values in results.items()}


def compare_runs(run1, run2):
    """
    Compare two runs value by value.

    Returns:
        Tuple of (is_match, diff_report)
    """
    diff_report = {
        "indicators": len(run1),
        "values": sum(len(v) for v in run1.values()),
        "values_match": True,
        "mismatches": [],
    }

    for name, values1 in run1.items():
        values2 = run2.get(name, [])
        if len(values1) != len(values2):
            diff_report["values_match"] = False
            diff_report["mismatches"].append({
                "indicator": name,
                "type": "count_mismatch",
                "run1": len(values1),
                "run2": len(values2),
            })
            continue
        for index, (v1, v2) in enumerate(zip(values1, values2)):
            if v1 != v2:
                diff_report["values_match"] = False
                diff_report["mismatches"].append({
                    "indicator": name,
                    "index": index,
                    "run1": v1,
                    "run2": v2,
                })

    return diff_report["values_match"], diff_report


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Indicator determinism check")
    parser.add_argument("--bars", type=int, default=300, help="Number of synthetic bars")
    parser.add_argument("--numeric", choices=["decimal", "double"], default=None,
                        help="Override the configured numeric backing")
    args = parser.parse_args()

    print("\n" + "=" * 70)
    print(f"DETERMINISM CHECK: {args.bars}-Bar Replay Test")
    print("=" * 70)

    log_file = setup_logging(log_dir="logs", prefix="determinism_check")
    logger.info(f"Logging to {log_file}")

    numeric_config = dict(config_loader.get_config('numeric'))
    if args.numeric:
        numeric_config['type'] = args.numeric

    run1 = run_graph(args.bars, numeric_config)
    run2 = run_graph(args.bars, numeric_config, descending=True)
    is_match, diff_report = compare_runs(run1, run2)

    diff_file = Path("artifacts") / "determinism_diff.txt"
    diff_file.parent.mkdir(parents=True, exist_ok=True)
    with open(diff_file, "w", encoding="utf-8") as f:
        f.write("DETERMINISM CHECK RESULTS\n")
        f.write(f"Indicators: {diff_report['indicators']}\n")
        f.write(f"Values compared: {diff_report['values']}\n")
        f.write(f"Values Match: {diff_report['values_match']}\n\n")
        for mismatch in diff_report["mismatches"][:10]:  # Show first 10
            f.write(json.dumps(mismatch, indent=2) + "\n")
        if len(diff_report["mismatches"]) > 10:
            f.write(f"... and {len(diff_report['mismatches']) - 10} more mismatches\n")

    print(f"Indicators: {diff_report['indicators']}")
    print(f"Values compared: {diff_report['values']}")
    print(f"Diff report: {diff_file}")

    if is_match:
        print("\nOK: 100% determinism match")
        return 0
    print(f"\nFAIL: {len(diff_report['mismatches'])} mismatches")
    return 1


if __name__ == "__main__":
    sys.exit(main())
