#!/usr/bin/env python3
"""
Resource Usage & Deadlock Analyzer
Main entry point for the analysis tool.

Reads total resources and per-employee requests, then reports availability,
on-hold demand, deadlock status, a safe sequence and recovery suggestions.
"""

import argparse
import json
import sys
from typing import List, Optional, Sequence

import numpy as np

from algorithms.avoidance import verify_safe_sequence
from algorithms.recovery import suggest_recovery
from analysis.analyzer import AnalysisResult, analyze_snapshot
from config import DEFAULT_CONSUMER_COUNT
from models.consumer import Consumer
from models.resource import counts_to_vector
from models.system_state import ResourceSnapshot
from utils.input_loader import ScenarioLoadError, build_inline_scenario, load_scenario
from utils.logger import AnalysisLogger
from utils.report import chart_series, render_report


def run_analysis(
    snapshot: ResourceSnapshot,
    consumers: Sequence[Consumer],
    logger: AnalysisLogger
) -> AnalysisResult:
    """
    Analyze one snapshot and log the report.

    Args:
        snapshot: Input snapshot of totals and requests
        consumers: Consumers in display order
        logger: Logger instance

    Returns:
        AnalysisResult for the snapshot
    """
    logger.log(snapshot.display(), "debug")

    result = analyze_snapshot(snapshot)

    logger.log_ledger(result.available, result.on_hold)
    logger.log_deadlock(result.deadlock_resources)
    names = [c.name for c in consumers]
    logger.log_safe_sequence(result.safe_sequence, names)

    if logger.verbose:
        available = np.array(counts_to_vector(result.available, snapshot.kinds), dtype=np.int64)
        if result.safe_sequence is not None:
            replay_ok = verify_safe_sequence(available, snapshot.request_matrix, result.safe_sequence)
            logger.log(f"Safe sequence replay: {'OK' if replay_ok else 'FAILED'}", "debug")
        if result.deadlock:
            logger.log_recovery(suggest_recovery(available, snapshot.request_matrix, names))

    logger.log(render_report(result, consumers))
    return result


def write_chart_data(result: AnalysisResult, path: str) -> None:
    """Write the two-series chart data as JSON."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(chart_series(result), f, indent=2)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Resource Usage & Deadlock Analyzer'
    )

    def non_negative_int(value: str) -> int:
        ivalue = int(value)
        if ivalue < 0:
            raise argparse.ArgumentTypeError("use an integer >= 0 for --consumers")
        return ivalue

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--scenario',
        type=str,
        help='Path to scenario JSON file'
    )
    source.add_argument(
        '--total',
        type=str,
        help='Total resources, e.g. printers=10,faxes=10,scanners=10,tapeDrives=10'
    )
    parser.add_argument(
        '--request',
        action='append',
        default=[],
        help='Request of one consumer, e.g. Kashyap:printers=2,faxes=1 (repeatable, use with --total)'
    )
    parser.add_argument(
        '--consumers',
        type=non_negative_int,
        default=DEFAULT_CONSUMER_COUNT,
        help=f'Minimum number of consumers; missing ones request nothing (default: {DEFAULT_CONSUMER_COUNT})'
    )
    parser.add_argument(
        '--chart-json',
        type=str,
        help='Write available/on-hold chart series to this JSON file'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write the log to this file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    if args.request and args.scenario:
        parser.error('--request can only be used with --total')

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the analyzer."""
    args = parse_args(argv)
    logger = AnalysisLogger(verbose=args.verbose, log_file=args.log_file)

    try:
        if args.scenario:
            snapshot, consumers = load_scenario(args.scenario, args.consumers, logger)
        else:
            snapshot, consumers = build_inline_scenario(args.total, args.request, args.consumers, logger)
    except ScenarioLoadError as e:
        logger.log(f"Failed to load input: {e}", "error")
        logger.close()
        return 1

    result = run_analysis(snapshot, consumers, logger)

    if args.chart_json:
        try:
            write_chart_data(result, args.chart_json)
        except OSError as e:
            logger.log(f"Failed to write chart data: {e}", "error")
            logger.close()
            return 1
        logger.log(f"Chart data written to {args.chart_json}", "debug")

    logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
