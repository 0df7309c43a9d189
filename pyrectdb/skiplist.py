"""A small skip-list multi-map used as the rectangle store.

Entries are kept sorted by key and the same key may appear any number of
times. A new entry is linked *after* every existing entry with an equal key,
so duplicates are traversed oldest first and ``remove`` takes the oldest one.

Complexities (average case):
    • search   – O(log n + d)   (d = number of duplicates returned)
    • insert   – O(log n)
    • remove   – O(log n)
    • remove_by_value – O(n)
    • iterate  – O(n)

The probabilistic height algorithm uses the classic 50 % branching factor by
default; both the branching factor and the height cap are per-instance knobs
and the random source can be injected for reproducible layouts.
"""
from __future__ import annotations

import logging
import random
import sys
from collections.abc import Callable, Iterator
from typing import Generic, Optional, TextIO, TypeVar

from .kvpair import KVPair

__all__ = ["SkipList", "DEFAULT_MAX_LEVEL", "DEFAULT_P"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_MAX_LEVEL = 16  # Supports > 65k elements on average.
DEFAULT_P = 0.5


class _Node(Generic[K, V]):
    __slots__ = ("entry", "forward")

    def __init__(self, entry: Optional[KVPair[K, V]], level: int):
        self.entry = entry
        self.forward: list[Optional[_Node[K, V]]] = [None] * level

    @property
    def key(self) -> K:
        return self.entry.key  # type: ignore[union-attr]

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.entry!s}:{len(self.forward)}>"


class SkipList(Generic[K, V]):
    """Sorted multi-map from keys to arbitrary values."""

    def __init__(
        self,
        max_level: int = DEFAULT_MAX_LEVEL,
        p: float = DEFAULT_P,
        *,
        rng: Optional[random.Random] = None,
    ):
        if max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {max_level}")
        if not 0.0 < p < 1.0:
            raise ValueError(f"p must be in (0, 1), got {p}")
        self._max_level = max_level
        self._p = p
        self._rng = rng or random.Random()
        self._level = 1
        self._size = 0
        self._header: _Node[K, V] = _Node(None, max_level)

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def insert(self, key: K, value: V) -> KVPair[K, V]:
        """Insert a new ``(key, value)`` entry; existing keys are never replaced."""
        update: list[_Node[K, V]] = [self._header] * self._max_level
        x = self._header
        for i in reversed(range(self._level)):
            while (nxt := x.forward[i]) and nxt.key <= key:  # type: ignore[operator]
                x = nxt
            update[i] = x
        lvl = self._random_level()
        if lvl > self._level:
            logger.debug("skip list grows from %d to %d levels", self._level, lvl)
            self._level = lvl
        entry = KVPair(key, value)
        new_node: _Node[K, V] = _Node(entry, lvl)
        for i in range(lvl):
            new_node.forward[i] = update[i].forward[i]
            update[i].forward[i] = new_node
        self._size += 1
        return entry

    def remove(self, key: K) -> Optional[KVPair[K, V]]:
        """Remove the first entry with ``key``; ``None`` when there is none."""
        update: list[_Node[K, V]] = [self._header] * self._max_level
        x = self._header
        for i in reversed(range(self._level)):
            while (nxt := x.forward[i]) and nxt.key < key:  # type: ignore[operator]
                x = nxt
            update[i] = x
        target = x.forward[0]
        if target is None or target.key != key:
            return None
        self._unlink(target, update)
        return target.entry

    def remove_by_value(self, value: V) -> Optional[KVPair[K, V]]:
        """Remove the first entry, in key order, whose value equals ``value``."""
        return self._remove_first(lambda entry: entry.value == value)

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def search(self, key: K) -> list[KVPair[K, V]]:
        """Return every entry stored under ``key`` in traversal order."""
        x = self._header
        for i in reversed(range(self._level)):
            while (nxt := x.forward[i]) and nxt.key < key:  # type: ignore[operator]
                x = nxt
        matches: list[KVPair[K, V]] = []
        x = x.forward[0]
        while x is not None and x.key == key:
            matches.append(x.entry)  # type: ignore[arg-type]
            x = x.forward[0]
        return matches

    @property
    def level(self) -> int:
        """Number of levels currently spanned by the header."""
        return self._level

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return bool(self.search(key))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[KVPair[K, V]]:
        x = self._header.forward[0]
        while x is not None:
            yield x.entry  # type: ignore[misc]
            x = x.forward[0]

    def dump(self, out: Optional[TextIO] = None) -> None:
        """Write every node with its depth, followed by the entry count."""
        out = out or sys.stdout
        print("SkipList dump:", file=out)
        print(f"Node has depth {self._level}, value (null)", file=out)
        x = self._header.forward[0]
        while x is not None:
            print(f"Node has depth {len(x.forward)}, value {x.entry}", file=out)
            x = x.forward[0]
        print(f"SkipList size is: {self._size}", file=out)

    def check_invariants(self) -> None:
        """Assert the structural invariants; a failure is a bug in this module."""
        assert 1 <= self._level <= self._max_level
        assert len(self._header.forward) == self._max_level
        for i in range(self._level, self._max_level):
            assert self._header.forward[i] is None, f"link above top level {i}"
        below: Optional[list[_Node[K, V]]] = None
        for i in range(self._level):
            chain: list[_Node[K, V]] = []
            x = self._header.forward[i]
            while x is not None:
                assert len(x.forward) > i, f"node {x!r} linked above its height"
                if chain:
                    assert chain[-1].key <= x.key, f"level {i} out of order"  # type: ignore[operator]
                chain.append(x)
                x = x.forward[i]
            if below is not None:
                ids = iter(id(n) for n in below)
                assert all(id(n) in ids for n in chain), f"level {i} not a subsequence"
            else:
                assert len(chain) == self._size, "level 0 does not hold every entry"
            below = chain

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _random_level(self) -> int:
        lvl = 1
        while self._rng.random() < self._p and lvl < self._max_level:
            lvl += 1
        return lvl

    def _remove_first(self, match: Callable[[KVPair[K, V]], bool]) -> Optional[KVPair[K, V]]:
        # Walk level 0 while remembering the last node seen at every level;
        # those are the predecessors to patch once a match turns up.
        update: list[_Node[K, V]] = [self._header] * self._max_level
        x = self._header
        while (nxt := x.forward[0]) is not None:
            for i in range(len(x.forward)):
                update[i] = x
            if match(nxt.entry):  # type: ignore[arg-type]
                self._unlink(nxt, update)
                return nxt.entry
            x = nxt
        return None

    def _unlink(self, target: _Node[K, V], update: list[_Node[K, V]]) -> None:
        for i in range(len(target.forward)):
            if update[i].forward[i] is not target:
                break
            update[i].forward[i] = target.forward[i]
        self._size -= 1
        while self._level > 1 and self._header.forward[self._level - 1] is None:
            self._level -= 1
            logger.debug("skip list shrinks to %d levels", self._level)
