"""
Resource Ledger for the Resource Usage & Deadlock Analyzer.

Computes aggregate on-hold demand and remaining availability per kind.
"""

import numpy as np
from typing import Tuple


def compute_ledger(total: np.ndarray, requests: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute on-hold demand and availability from totals and requests.

    On-Hold[k]   = sum over consumers of Request[i][k]
    Available[k] = Total[k] - On-Hold[k]

    Availability is not clamped: a negative value means the kind is
    over-subscribed and is passed on as-is to detection and recovery.

    Args:
        total: [R] Total units per resource kind
        requests: [P][R] Pending request of each consumer

    Returns:
        Tuple of (on_hold [R], available [R]) as new int arrays
    """
    total = np.asarray(total, dtype=np.int64)
    requests = np.asarray(requests, dtype=np.int64).reshape(-1, total.shape[0])

    on_hold = requests.sum(axis=0, dtype=np.int64)
    available = total - on_hold
    return on_hold, available
