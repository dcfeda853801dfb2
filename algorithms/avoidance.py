"""
Safety Analysis (Banker's-style) for the Resource Usage & Deadlock Analyzer.

Simulates iterative request satisfaction over a single resource pool to
find an order in which every consumer can finish.
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple


def can_allocate(work: np.ndarray, request: np.ndarray) -> bool:
    """
    Check whether a request fits the current pool.

    Args:
        work: [R] Units currently in the pool (may be negative)
        request: [R] Units requested

    Returns:
        True if Work[k] >= Request[k] for every kind k
    """
    return bool(np.all(np.asarray(work) >= np.asarray(request)))


def is_safe_state(available: np.ndarray, requests: np.ndarray) -> Tuple[bool, Optional[List[int]]]:
    """
    Check whether all consumers can finish, and in which order.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_consumers
    2. Scan consumers in index order; for each unfinished i with
       Request[i] <= Work: Finish[i] = True, Work += Request[i], append i
    3. Repeat passes until every consumer finished (SAFE) or a whole
       pass admits nobody (NOT SAFE)

    Several consumers may be admitted in one pass, and each release is
    visible to later indices of the same pass.

    Work starts from Available, which is already net of all demand, and a
    finishing consumer releases its requested amount. There are no separate
    allocation or need matrices.

    Args:
        available: [R] Net availability from the ledger
        requests: [P][R] Pending request of each consumer

    Returns:
        Tuple of (is_safe, safe_sequence of consumer indices if safe else None)
    """
    work = np.array(available, dtype=np.int64)
    requests = np.asarray(requests, dtype=np.int64).reshape(-1, work.shape[0])
    num_consumers = requests.shape[0]
    finish = np.zeros(num_consumers, dtype=bool)
    safe_sequence = []

    while len(safe_sequence) < num_consumers:
        found = False

        for i in range(num_consumers):
            if finish[i]:
                continue

            if can_allocate(work, requests[i]):
                safe_sequence.append(i)
                finish[i] = True
                # Consumer completes and hands its units back to the pool
                work += requests[i]
                found = True

        if not found:
            return False, None

    return True, safe_sequence


def verify_safe_sequence(
    available: np.ndarray,
    requests: np.ndarray,
    sequence: Sequence[int]
) -> bool:
    """
    Replay a sequence and confirm every step could be satisfied.

    Args:
        available: [R] Net availability from the ledger
        requests: [P][R] Pending request of each consumer
        sequence: Consumer indices in finishing order

    Returns:
        True if the sequence is a permutation of all consumers and each
        consumer's request fits the pool at the moment it is applied
    """
    work = np.array(available, dtype=np.int64)
    requests = np.asarray(requests, dtype=np.int64).reshape(-1, work.shape[0])

    if sorted(sequence) != list(range(requests.shape[0])):
        return False

    for i in sequence:
        if not can_allocate(work, requests[i]):
            return False
        work += requests[i]
    return True
