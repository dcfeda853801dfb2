"""
Analysis engine for the Resource Usage & Deadlock Analyzer.

Runs the ledger, deadlock detection, safety analysis and recovery advice
over one snapshot and packages the outcome as an AnalysisResult.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from algorithms.avoidance import is_safe_state
from algorithms.detection import DeadlockKind, detect_deadlock, format_deadlock_kind
from algorithms.ledger import compute_ledger
from algorithms.recovery import recovery_message, suggest_recovery
from config import DEADLOCK_INFO, NO_DEADLOCK_INFO
from models.resource import ResourceKind, vector_to_counts
from models.system_state import ResourceSnapshot


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of one analysis.

    Attributes:
        available: Total minus on-hold per kind key (may be negative)
        on_hold: Aggregate demand per kind key
        deadlock: Whether any kind failed the over-subscription test
        deadlock_kinds: Offending kinds in enumeration order
        safe_sequence: Consumer indices in a safe finishing order, or None
            when no safe order exists
        recovery_suggestions: One message per consumer whose request is
            satisfiable on its own (only produced when deadlocked)
        kinds: Ordered resource kinds the mappings are keyed by

    The available and on-hold mappings are read-only views.
    """
    available: Mapping[str, int]
    on_hold: Mapping[str, int]
    deadlock: bool
    deadlock_kinds: Tuple[DeadlockKind, ...]
    safe_sequence: Optional[Tuple[int, ...]]
    recovery_suggestions: Tuple[str, ...]
    kinds: Tuple[ResourceKind, ...]

    @property
    def is_safe(self) -> bool:
        """True if a safe finishing order exists."""
        return self.safe_sequence is not None

    @property
    def deadlock_info(self) -> str:
        """Status sentence shown under the deadlock verdict."""
        return DEADLOCK_INFO if self.deadlock else NO_DEADLOCK_INFO

    @property
    def deadlock_resources(self) -> Tuple[str, ...]:
        """Formatted deadlock kind entries, e.g. "Printers (Requested: 6, Available: 2)"."""
        return tuple(format_deadlock_kind(entry) for entry in self.deadlock_kinds)

    @property
    def recovery_message(self) -> str:
        """Joined suggestions, the no-options message, or "" without deadlock."""
        if not self.deadlock:
            return ""
        return recovery_message(self.recovery_suggestions)


def analyze_snapshot(snapshot: ResourceSnapshot) -> AnalysisResult:
    """
    Analyze one resource snapshot.

    Order of evaluation:
    1. Ledger: On-Hold and Available from Total and Requests
    2. Detection: per-kind over-subscription test on the ledger
    3. Safety: Banker's-style simulation starting from Available
    4. Recovery: only when deadlock was flagged

    Every call builds its own working state; the snapshot is not modified.

    Args:
        snapshot: Immutable input snapshot

    Returns:
        New AnalysisResult
    """
    kinds = snapshot.kinds
    requests = snapshot.request_matrix

    on_hold, available = compute_ledger(snapshot.total_vector, requests)
    deadlock, deadlock_kinds = detect_deadlock(on_hold, available, kinds)
    is_safe, safe_sequence = is_safe_state(available, requests)

    suggestions = []
    if deadlock:
        suggestions = suggest_recovery(available, requests)

    return AnalysisResult(
        available=MappingProxyType(vector_to_counts(available, kinds)),
        on_hold=MappingProxyType(vector_to_counts(on_hold, kinds)),
        deadlock=deadlock,
        deadlock_kinds=tuple(deadlock_kinds),
        safe_sequence=tuple(safe_sequence) if is_safe else None,
        recovery_suggestions=tuple(suggestions),
        kinds=kinds,
    )


def analyze(
    total: Mapping[str, int],
    requests: Sequence[Mapping[str, int]],
    kinds: Optional[Sequence[ResourceKind]] = None
) -> AnalysisResult:
    """
    Analyze totals and per-consumer requests given as kind-keyed mappings.

    Args:
        total: Total units per kind key (missing kinds are 0)
        requests: One request mapping per consumer, in display order
        kinds: Ordered resource kinds (defaults to the four office kinds)

    Returns:
        New AnalysisResult
    """
    return analyze_snapshot(ResourceSnapshot.from_counts(total, requests, kinds))
