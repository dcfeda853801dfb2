"""
Deadlock Detection for the Resource Usage & Deadlock Analyzer.

Implements the per-kind over-subscription test applied to the ledger.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from models.resource import ResourceKind


@dataclass(frozen=True)
class DeadlockKind:
    """
    One resource kind that triggered the deadlock test.

    Attributes:
        kind: The offending resource kind
        requested: Aggregate on-hold demand for the kind
        available: Remaining availability for the kind (may be negative)
    """
    kind: ResourceKind
    requested: int
    available: int

    def __str__(self) -> str:
        return format_deadlock_kind(self)


def detect_deadlock(
    on_hold: np.ndarray,
    available: np.ndarray,
    kinds: Sequence[ResourceKind]
) -> Tuple[bool, List[DeadlockKind]]:
    """
    Flag deadlock when demand for any kind exceeds what remains of it.

    Algorithm:
    1. For each kind k in enumeration order, test On-Hold[k] > Available[k]
    2. Record every kind that passes the test (not only the first)
    3. Deadlock exists if at least one kind was recorded

    Since Available = Total - On-Hold, the test is Total[k] < 2 * On-Hold[k]:
    a kind is flagged once aggregate demand exceeds half its supply. This is
    a heuristic over one static snapshot, not a wait-for-graph analysis.

    Args:
        on_hold: [R] Aggregate demand per kind
        available: [R] Remaining units per kind
        kinds: Ordered resource kinds matching the vector columns

    Returns:
        Tuple of (deadlock_exists, offending kinds in enumeration order)
    """
    deadlock_kinds = []

    for k, kind in enumerate(kinds):
        requested = int(on_hold[k])
        remaining = int(available[k])
        if requested > remaining:
            deadlock_kinds.append(DeadlockKind(kind=kind, requested=requested, available=remaining))

    return len(deadlock_kinds) > 0, deadlock_kinds


def format_deadlock_kind(entry: DeadlockKind) -> str:
    """Render an entry as "<Kind> (Requested: <on_hold>, Available: <available>)"."""
    return f"{entry.kind.display_name} (Requested: {entry.requested}, Available: {entry.available})"
