from __future__ import annotations

import heapq
import itertools
import logging

from .largestmodel import UNBOUNDED
from .largestmodel import FileCandidate


class TopKSelector:
    """Keep the largest files offered so far, up to a fixed capacity."""

    logger = logging.getLogger(__name__)

    def __init__(self, capacity: int = UNBOUNDED) -> None:
        """
        Initialize an empty selector.

        Args:
            capacity: The number of files to keep. -1 keeps every file.

        Raises:
            ValueError: If capacity is zero or below -1.
        """
        if capacity != UNBOUNDED and capacity < 1:
            raise ValueError(f"Capacity must be positive or {UNBOUNDED}: {capacity}")

        self._capacity = capacity
        self._counter = itertools.count()
        # Min-heap of (size, discovery order, candidate) when bounded
        self._entries: list[tuple[int, int, FileCandidate]] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def capacity(self) -> int:
        """Return the capacity, -1 when unbounded."""
        return self._capacity

    @property
    def is_bounded(self) -> bool:
        """True if the selector discards files beyond its capacity."""
        return self._capacity != UNBOUNDED

    def offer(self, candidate: FileCandidate) -> bool:
        """
        Consider a candidate for the result set.

        Returns:
            True if the candidate is retained, False if it was discarded.
        """
        entry = (candidate.size, next(self._counter), candidate)

        if not self.is_bounded:
            self._entries.append(entry)
            return True

        if len(self._entries) < self._capacity:
            heapq.heappush(self._entries, entry)
            return True

        if candidate.size > self._entries[0][0]:
            evicted = heapq.heapreplace(self._entries, entry)
            self.logger.debug("Evicted '%s' (%d bytes)", evicted[2].path, evicted[0])
            return True

        return False

    def results(self) -> list[FileCandidate]:
        """Return the retained files, largest first and in discovery order on ties."""
        ordered = sorted(self._entries, key=lambda entry: (-entry[0], entry[1]))
        return [candidate for _, _, candidate in ordered]
