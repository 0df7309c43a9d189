"""PyRectDB: an in-memory rectangle database backed by a skip list.

The package exposes the high-level `pyrectdb.Database` while keeping the
ordered multi-map (`SkipList`) independent of what it stores, so it can be
reused for any comparable key and arbitrary value.
"""

from __future__ import annotations

__all__ = [
    "Database",
    "InvalidRectangleError",
    "KVPair",
    "Rectangle",
    "SkipList",
]

from .db import Database
from .kvpair import KVPair
from .rectangle import InvalidRectangleError, Rectangle
from .skiplist import SkipList
