"""Axis-aligned integer rectangles stored by the database."""
from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Rectangle", "InvalidRectangleError"]


class InvalidRectangleError(ValueError):
    """Raised when a rectangle has a negative origin or a non-positive size."""


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Rectangle with its origin at the top-left corner ``(x, y)``."""

    x: int
    y: int
    width: int
    height: int

    def is_invalid(self) -> bool:
        return self.x < 0 or self.y < 0 or self.width <= 0 or self.height <= 0

    def validate(self) -> None:
        if self.is_invalid():
            raise InvalidRectangleError(f"invalid rectangle ({self})")

    def intersects(self, other: Rectangle) -> bool:
        """True when both rectangles share a region of positive area.

        Rectangles that only touch along an edge or at a corner do not
        intersect.
        """
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )

    def __str__(self) -> str:
        return f"{self.x}, {self.y}, {self.width}, {self.height}"
