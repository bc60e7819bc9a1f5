"""
In-memory reference point store.

Readers take a ``ReferencePointSnapshot`` and iterate it freely; a
refresh builds a brand new snapshot and swaps the store's reference, so
a published snapshot is never modified underneath a running match.
"""

import logging
import threading

from tollroute.domain import BoundingBox, CandidatePoint

logger = logging.getLogger(__name__)


class ReferencePointSnapshot:
    """Immutable collection of candidate points."""

    def __init__(self, points=()):
        self._points: tuple[CandidatePoint, ...] = tuple(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def within(self, box: BoundingBox) -> list[CandidatePoint]:
        """Points inside ``box`` (edges inclusive)."""
        return [p for p in self._points if box.contains(p.point)]


class ReferencePointStore:
    def __init__(self, points=()):
        self._snapshot = ReferencePointSnapshot(points)
        self._write_lock = threading.Lock()

    def snapshot(self) -> ReferencePointSnapshot:
        return self._snapshot

    def replace(self, points) -> ReferencePointSnapshot:
        """Publish a new snapshot built from ``points`` and return it."""
        snapshot = ReferencePointSnapshot(points)
        with self._write_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        logger.info(
            "Reference points replaced: %d -> %d", len(previous), len(snapshot)
        )
        return snapshot

    def count(self) -> int:
        return len(self._snapshot)
