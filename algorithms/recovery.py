"""
Deadlock Recovery advice for the Resource Usage & Deadlock Analyzer.

Lists the individual consumer requests that could be granted as-is.
"""

import numpy as np
from typing import List, Optional, Sequence

from algorithms.avoidance import can_allocate
from config import NO_RECOVERY_OPTIONS, RECOVERY_SUGGESTION


def suggest_recovery(
    available: np.ndarray,
    requests: np.ndarray,
    consumer_labels: Optional[Sequence[str]] = None
) -> List[str]:
    """
    Suggest which consumer requests can be fulfilled to ease a deadlock.

    Each request is tested in isolation against Available (not against a
    simulated work pool), in consumer index order. An all-zero request fits
    unless some kind's availability is negative.

    Args:
        available: [R] Net availability from the ledger
        requests: [P][R] Pending request of each consumer
        consumer_labels: Optional names to use instead of "Employee <n>"

    Returns:
        One suggestion per satisfiable consumer, empty if none
    """
    available = np.asarray(available, dtype=np.int64)
    requests = np.asarray(requests, dtype=np.int64).reshape(-1, available.shape[0])
    suggestions = []

    for i, request in enumerate(requests):
        if can_allocate(available, request):
            if consumer_labels is not None and i < len(consumer_labels):
                suggestions.append(
                    f"Request from {consumer_labels[i]} can be fulfilled. "
                    "This will help in resolving the deadlock."
                )
            else:
                suggestions.append(RECOVERY_SUGGESTION.format(number=i + 1))

    return suggestions


def recovery_message(suggestions: Sequence[str]) -> str:
    """Join suggestions with spaces, or fall back to the no-options message."""
    return " ".join(suggestions) if suggestions else NO_RECOVERY_OPTIONS
