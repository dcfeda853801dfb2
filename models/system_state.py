"""
System State model for the Resource Usage & Deadlock Analyzer.

Holds one declared snapshot of total resources and per-consumer requests
as the vector and matrix the analysis algorithms operate on.
"""

import numpy as np
from typing import Dict, List, Mapping, Optional, Sequence
from dataclasses import dataclass, field

from models.resource import (
    DEFAULT_RESOURCE_KINDS,
    ResourceKind,
    counts_to_vector,
    validate_kinds,
    vector_to_counts,
)


@dataclass(frozen=True, eq=False)
class ResourceSnapshot:
    """
    Immutable input snapshot for one analysis.

    Attributes:
        total_vector: [R] Total system-wide units per resource kind
        request_matrix: [P][R] Pending request of each consumer
        kinds: Ordered resource kinds (column order of both arrays)

    A new user action produces a new snapshot; existing ones are never
    patched in place. Both arrays are marked read-only.
    """
    total_vector: np.ndarray
    request_matrix: np.ndarray
    kinds: tuple = field(default=DEFAULT_RESOURCE_KINDS)

    def __post_init__(self):
        """Validate shapes and freeze the arrays."""
        kinds = validate_kinds(self.kinds)
        total = np.array(self.total_vector, dtype=np.int64).reshape(-1)
        requests = np.array(self.request_matrix, dtype=np.int64)
        if requests.size == 0:
            requests = requests.reshape(0, len(kinds))

        if total.shape != (len(kinds),):
            raise ValueError(
                f"Total vector has {total.shape[0]} entries "
                f"but {len(kinds)} resource kinds are defined"
            )
        if requests.ndim != 2 or requests.shape[1] != len(kinds):
            raise ValueError(
                f"Request matrix shape {requests.shape} does not match "
                f"{len(kinds)} resource kinds"
            )

        total.setflags(write=False)
        requests.setflags(write=False)
        object.__setattr__(self, "kinds", kinds)
        object.__setattr__(self, "total_vector", total)
        object.__setattr__(self, "request_matrix", requests)

    @classmethod
    def from_counts(
        cls,
        total: Mapping[str, int],
        requests: Sequence[Mapping[str, int]],
        kinds: Optional[Sequence[ResourceKind]] = None
    ) -> "ResourceSnapshot":
        """
        Build a snapshot from kind-keyed mappings.

        Args:
            total: Total units per kind key (missing kinds are 0)
            requests: One request mapping per consumer, in display order
            kinds: Ordered resource kinds (defaults to the four office kinds)

        Returns:
            New ResourceSnapshot
        """
        kinds = validate_kinds(kinds if kinds is not None else DEFAULT_RESOURCE_KINDS)
        total_vector = counts_to_vector(total, kinds)
        request_rows = [counts_to_vector(request, kinds) for request in requests]
        request_matrix = np.array(request_rows, dtype=np.int64).reshape(len(request_rows), len(kinds))
        return cls(total_vector=total_vector, request_matrix=request_matrix, kinds=kinds)

    @property
    def num_consumers(self) -> int:
        """Number of consumers in the snapshot."""
        return self.request_matrix.shape[0]

    @property
    def num_kinds(self) -> int:
        """Number of resource kinds."""
        return len(self.kinds)

    @property
    def total(self) -> Dict[str, int]:
        """Total units as a kind-keyed mapping."""
        return vector_to_counts(self.total_vector, self.kinds)

    @property
    def requests(self) -> List[Dict[str, int]]:
        """Per-consumer requests as kind-keyed mappings."""
        return [vector_to_counts(row, self.kinds) for row in self.request_matrix]

    def display(self) -> str:
        """
        Generate readable string representation of the snapshot.

        Returns:
            Formatted string showing the total vector and request matrix
        """
        width = max(len(kind.display_name) for kind in self.kinds)
        header = "      " + " ".join(f"{kind.display_name:>{width}}" for kind in self.kinds)

        output = []
        output.append("\nTotal Resources:")
        output.append(header)
        output.append("      " + " ".join(f"{value:>{width}}" for value in self.total_vector))

        output.append("\nRequest Matrix:")
        output.append(header)
        for i, row in enumerate(self.request_matrix):
            output.append(f"  C{i}: " + " ".join(f"{value:>{width}}" for value in row))
        return "\n".join(output)
