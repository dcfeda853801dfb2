"""
Report rendering for the Resource Usage & Deadlock Analyzer.

Turns an AnalysisResult into the text report and the two-series chart
data consumed by the presentation layer.
"""

from typing import Dict, List, Optional, Sequence

from analysis.analyzer import AnalysisResult
from config import (
    AVAILABLE_SERIES_COLOR,
    AVAILABLE_SERIES_LABEL,
    ON_HOLD_SERIES_COLOR,
    ON_HOLD_SERIES_LABEL,
)
from models.consumer import Consumer, default_consumer_name


def chart_series(result: AnalysisResult) -> Dict:
    """
    Build bar chart data keyed by resource kind labels.

    Returns:
        {"labels": [...], "datasets": [available series, on-hold series]}
    """
    return {
        "labels": [kind.label for kind in result.kinds],
        "datasets": [
            {
                "label": AVAILABLE_SERIES_LABEL,
                "data": [result.available.get(kind.key, 0) for kind in result.kinds],
                "backgroundColor": AVAILABLE_SERIES_COLOR,
            },
            {
                "label": ON_HOLD_SERIES_LABEL,
                "data": [result.on_hold.get(kind.key, 0) for kind in result.kinds],
                "backgroundColor": ON_HOLD_SERIES_COLOR,
            },
        ],
    }


def format_safe_sequence(sequence: Optional[Sequence[int]], consumers: Sequence[Consumer] = ()) -> str:
    """Render a safe sequence with consumer names, or the not-safe message."""
    if sequence is None:
        return "No safe sequence exists"
    if not sequence:
        return "(no consumers)"
    names = [consumer.name for consumer in consumers]
    return " -> ".join(names[i] if i < len(names) else default_consumer_name(i) for i in sequence)


def _counts_table(title: str, counts: Dict[str, int], result: AnalysisResult) -> List[str]:
    """Two-line table of a kind-keyed mapping under a heading."""
    width = max(max(len(kind.label) for kind in result.kinds), 4)
    lines = [f"\n{title}:"]
    lines.append("  " + " ".join(f"{kind.label:>{width}}" for kind in result.kinds))
    lines.append("  " + " ".join(f"{counts.get(kind.key, 0):>{width}}" for kind in result.kinds))
    return lines


def render_report(result: AnalysisResult, consumers: Sequence[Consumer] = ()) -> str:
    """
    Generate the readable results report.

    Args:
        result: Analysis outcome
        consumers: Consumers in display order, for naming the safe sequence

    Returns:
        Formatted multi-line report
    """
    output = []
    output.append("=" * 60)
    output.append("RESULTS")
    output.append("=" * 60)

    output.extend(_counts_table("Available Resources", result.available, result))
    output.extend(_counts_table("On Hold Resources", result.on_hold, result))

    status = "Deadlock Detected" if result.deadlock else "No Deadlock"
    output.append(f"\nDeadlock Status: {status}")
    output.append(result.deadlock_info)

    if result.deadlock:
        output.append("\nResources Causing Deadlock:")
        for resource in result.deadlock_resources:
            output.append(f"  - {resource}")

    output.append(f"\nSafe Sequence: {format_safe_sequence(result.safe_sequence, consumers)}")

    if result.deadlock:
        output.append(f"\nRecovery: {result.recovery_message}")

    output.append("=" * 60)
    return "\n".join(output)
