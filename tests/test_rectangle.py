"""Unit tests for the rectangle value type."""
import pytest

from pyrectdb.rectangle import InvalidRectangleError, Rectangle


@pytest.mark.parametrize(
    "rect",
    [
        Rectangle(-1, 0, 5, 5),
        Rectangle(0, -1, 5, 5),
        Rectangle(0, 0, 0, 5),
        Rectangle(0, 0, 5, 0),
        Rectangle(0, 0, -3, 5),
    ],
)
def test_invalid(rect):
    """Negative origins and non-positive sizes are invalid."""
    assert rect.is_invalid()
    with pytest.raises(InvalidRectangleError):
        rect.validate()


def test_valid():
    rect = Rectangle(0, 0, 1, 1)
    assert not rect.is_invalid()
    rect.validate()


def test_edge_and_corner_contact_do_not_intersect():
    """Zero-area contact is not an overlap."""
    region = Rectangle(0, 0, 10, 10)
    assert not region.intersects(Rectangle(10, 0, 5, 5))
    assert not region.intersects(Rectangle(0, 10, 5, 5))
    assert not region.intersects(Rectangle(10, 10, 5, 5))


def test_positive_area_overlap():
    region = Rectangle(0, 0, 10, 10)
    assert region.intersects(Rectangle(9, 9, 5, 5))
    assert Rectangle(9, 9, 5, 5).intersects(region)
    assert region.intersects(Rectangle(2, 2, 1, 1))  # fully contained
    assert region.intersects(region)


def test_structural_equality_and_text():
    assert Rectangle(1, 2, 3, 4) == Rectangle(1, 2, 3, 4)
    assert str(Rectangle(1, 2, 3, 4)) == "1, 2, 3, 4"
