"""High-level rectangle database built on top of the skip list.

The skip list stays agnostic about what it stores; everything that knows
about geometry lives here: validating rectangles before they are inserted,
turning "remove by coordinates" into a value match, and the region and
pairwise overlap scans.

Every operation writes human-readable report lines to the ``out`` stream and
also returns its result so callers do not have to parse text.
"""
from __future__ import annotations

import logging
import random
import sys
from typing import Optional, TextIO

from .kvpair import KVPair
from .rectangle import InvalidRectangleError, Rectangle
from .skiplist import DEFAULT_MAX_LEVEL, DEFAULT_P, SkipList

__all__ = ["Database"]

logger = logging.getLogger(__name__)

Entry = KVPair[str, Rectangle]


class Database:
    """In-memory rectangle store keyed by name; duplicate names are allowed."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        *,
        max_level: int = DEFAULT_MAX_LEVEL,
        p: float = DEFAULT_P,
        rng: Optional[random.Random] = None,
    ):
        self._out = out or sys.stdout
        self._list = SkipList[str, Rectangle](max_level, p, rng=rng)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, name: str, rect: Rectangle) -> bool:
        """Store ``rect`` under ``name`` unless its geometry is invalid."""
        pair = KVPair(name, rect)
        try:
            rect.validate()
        except InvalidRectangleError as exc:
            logger.info("rejecting insert of %r: %s", name, exc)
            self._report(f"Rectangle rejected: {pair}")
            return False
        self._list.insert(name, rect)
        logger.debug("inserted %s, size now %d", pair, len(self._list))
        self._report(f"Rectangle inserted: {pair}")
        return True

    def remove_by_name(self, name: str) -> Optional[Entry]:
        """Remove the first rectangle stored under ``name``."""
        removed = self._list.remove(name)
        if removed is None:
            self._report(f"Rectangle not found: ({name})")
            return None
        logger.debug("removed %s by name", removed)
        self._report(f"Rectangle removed: {removed}")
        return removed

    def remove_by_geometry(self, x: int, y: int, w: int, h: int) -> Optional[Entry]:
        """Remove the first rectangle, in name order, equal to ``(x, y, w, h)``."""
        rect = Rectangle(x, y, w, h)
        try:
            rect.validate()
        except InvalidRectangleError as exc:
            logger.info("rejecting remove: %s", exc)
            self._report(f"Rectangle rejected: ({rect})")
            return None
        removed = self._list.remove_by_value(rect)
        if removed is None:
            self._report(f"Rectangle not found: ({rect})")
            return None
        logger.debug("removed %s by geometry", removed)
        self._report(f"Rectangle removed: {removed}")
        return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def region_search(self, x: int, y: int, w: int, h: int) -> list[Entry]:
        """Report every rectangle overlapping the region with positive area.

        Only the region's size is checked; its origin may be negative.
        """
        region = Rectangle(x, y, w, h)
        if w <= 0 or h <= 0:
            logger.info("rejecting region search with empty region (%s)", region)
            self._report(f"Rectangle rejected: ({region})")
            return []
        self._report(f"Rectangles intersecting region ({region}):")
        hits = [pair for pair in self._list if pair.value.intersects(region)]
        for pair in hits:
            self._report(str(pair))
        return hits

    def intersections(self) -> list[tuple[Entry, Entry]]:
        """Report every unordered pair of stored rectangles that overlap.

        The inner scan restarts from the head and only starts comparing
        once it has passed the outer entry itself, so each pair shows up
        once and an entry is never paired with itself. Identity, not key or
        value equality, decides which entry is "itself".
        """
        self._report("Intersection pairs:")
        pairs: list[tuple[Entry, Entry]] = []
        for outer in self._list:
            past_outer = False
            for inner in self._list:
                if inner is outer:
                    past_outer = True
                    continue
                if past_outer and outer.value.intersects(inner.value):
                    pairs.append((outer, inner))
                    self._report(f"{outer} | {inner}")
        return pairs

    def search(self, name: str) -> list[Entry]:
        """Report every rectangle stored under ``name``."""
        matches = self._list.search(name)
        if not matches:
            self._report(f"Rectangle not found: {name}")
            return matches
        self._report(f'Rectangles found matching "{name}":')
        for pair in matches:
            self._report(str(pair))
        return matches

    def dump(self) -> None:
        self._list.dump(self._out)

    def __len__(self) -> int:
        return len(self._list)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _report(self, line: str) -> None:
        print(line, file=self._out)
