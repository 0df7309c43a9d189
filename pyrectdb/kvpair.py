"""Key/value pair stored by the skip list."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

__all__ = ["KVPair"]

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class KVPair(Generic[K, V]):
    """Immutable key/value pair.

    Equality looks at both fields, ordering looks at the key only so that
    pairs sharing a key compare as neither smaller nor greater.
    """

    key: K
    value: V

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, KVPair):
            return NotImplemented
        return self.key < other.key  # type: ignore[operator]

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, KVPair):
            return NotImplemented
        return self.key <= other.key  # type: ignore[operator]

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, KVPair):
            return NotImplemented
        return self.key > other.key  # type: ignore[operator]

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, KVPair):
            return NotImplemented
        return self.key >= other.key  # type: ignore[operator]

    def __str__(self) -> str:
        return f"({self.key}, {self.value})"
