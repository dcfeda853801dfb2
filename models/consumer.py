"""
Consumer model for the Resource Usage & Deadlock Analyzer.

A consumer is one requester (an employee in the default setup) with a
single pending request per resource kind.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from config import DEFAULT_CONSUMER_COUNT, DEFAULT_CONSUMER_NAMES


@dataclass
class Consumer:
    """
    Represents one consumer of shared resources.

    Attributes:
        index: Position in the ordered consumer sequence (display order)
        name: Display name attached by the presentation layer
        request: Requested amount per resource kind key
    """
    index: int
    name: str = ""
    request: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            self.name = default_consumer_name(self.index)

    @property
    def number(self) -> int:
        """One-based position, as shown to users."""
        return self.index + 1

    def total_requested(self) -> int:
        """Sum of this consumer's request across all kinds."""
        return sum(self.request.values())


def default_consumer_name(index: int) -> str:
    """Name for the consumer at a position when none was supplied."""
    if index < len(DEFAULT_CONSUMER_NAMES):
        return DEFAULT_CONSUMER_NAMES[index]
    return f"Employee {index + 1}"


def pad_consumers(consumers: Sequence[Consumer], count: int = DEFAULT_CONSUMER_COUNT) -> List[Consumer]:
    """
    Extend a consumer list with zero-request consumers up to a fixed length.

    The input form always shows `count` rows, so absent rows behave as
    all-zero requests. Longer lists are returned unchanged.
    """
    padded = list(consumers)
    for index in range(len(padded), count):
        padded.append(Consumer(index=index))
    return padded
