"""
Resource model for the Resource Usage & Deadlock Analyzer.

Represents the fixed, ordered set of resource kinds and the per-kind
count mappings (pools and requests) built over them.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from config import DEFAULT_KIND_DEFINITIONS


@dataclass(frozen=True)
class ResourceKind:
    """
    One category of shared resource.

    Attributes:
        key: Stable identifier used in pools and requests (e.g. "tapeDrives")
        label: Human-readable chart label (e.g. "Tape Drives")
    """
    key: str
    label: str = ""

    def __post_init__(self):
        """Validate the kind and default its label."""
        if not self.key:
            raise ValueError("ResourceKind key cannot be empty")
        if not self.label:
            object.__setattr__(self, "label", self.display_name)

    @property
    def display_name(self) -> str:
        """Key with its first character upper-cased, used in deadlock listings."""
        return self.key[0].upper() + self.key[1:]


DEFAULT_RESOURCE_KINDS: Tuple[ResourceKind, ...] = tuple(
    ResourceKind(key, label) for key, label in DEFAULT_KIND_DEFINITIONS
)


def validate_kinds(kinds: Sequence[ResourceKind]) -> Tuple[ResourceKind, ...]:
    """
    Check that a kind set is non-empty and its keys are unique.

    Args:
        kinds: Ordered resource kinds

    Returns:
        The kinds as a tuple, order preserved

    Raises:
        ValueError: If there are no kinds or a key repeats
    """
    kinds = tuple(kinds)
    if not kinds:
        raise ValueError("At least one resource kind is required")
    keys = [kind.key for kind in kinds]
    duplicates = sorted({key for key in keys if keys.count(key) > 1})
    if duplicates:
        raise ValueError(f"Duplicate resource kind keys: {', '.join(duplicates)}")
    return kinds


def counts_to_vector(counts: Mapping[str, int], kinds: Iterable[ResourceKind]) -> list:
    """Flatten a kind-keyed mapping into a list in kind order (missing kinds are 0)."""
    return [int(counts.get(kind.key, 0)) for kind in kinds]


def vector_to_counts(vector: Iterable[int], kinds: Iterable[ResourceKind]) -> Dict[str, int]:
    """Inverse of counts_to_vector, converting numpy scalars to plain ints."""
    return {kind.key: int(value) for kind, value in zip(kinds, vector)}
