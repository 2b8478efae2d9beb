"""Unit tests for popup placement."""

import pytest

from text_assist.geometry import (
    DEFAULT_OVERLAP,
    AnchorGeometry,
    Point,
    Rect,
    Size,
    anchor_point,
    place,
    place_for,
)

SCREEN = Rect(0, 0, 1920, 1080)
PARENT = Rect(100, 500, 300, 30)


def test_anchor_point_below_field_with_overlap():
    """Test the anchor sits below the field, nudged up by the overlap."""
    field = Rect(100, 500, 300, 30)
    assert anchor_point(field) == Point(100, 530 - DEFAULT_OVERLAP)
    assert anchor_point(field, border_width=2, overlap=3) == Point(100, 529)
    assert anchor_point(field, overlap=0) == Point(100, 530)


def test_place_unchanged_when_it_fits():
    """Test a popup that fits stays at the anchor."""
    assert place(Point(100, 527), Size(200, 150), SCREEN, PARENT) == Point(100, 527)


@pytest.mark.parametrize(
    "anchor_y,height,expected_y",
    [
        (1000, 80, 1000),  # exactly touches the bottom edge
        (1000, 81, 500 - 81),  # one past the edge flips above the parent
        (900, 300, 500 - 300),
    ],
)
def test_place_flips_above_parent_past_bottom(anchor_y, height, expected_y):
    """Test the popup flips above the parent past the screen bottom."""
    assert place(Point(10, anchor_y), Size(50, height), SCREEN, PARENT).y == expected_y


@pytest.mark.parametrize(
    "anchor_x,width,expected_x",
    [
        (1700, 220, 1700),  # exactly touches the right edge
        (1700, 221, 1920 - 221),
        (1900, 400, 1520),
    ],
)
def test_place_clamps_to_right_edge(anchor_x, width, expected_x):
    """Test the popup is pulled back from the right edge."""
    assert place(Point(anchor_x, 10), Size(width, 50), SCREEN, PARENT).x == expected_x


def test_place_flip_and_clamp_together():
    """Test flip and clamp apply together."""
    origin = place(Point(1800, 1050), Size(300, 100), SCREEN, PARENT)
    assert origin == Point(1620, 400)


def test_place_respects_screen_origin():
    """Test a screen that does not start at 0,0."""
    # Second monitor to the right of the first
    screen = Rect(1920, 0, 1280, 1024)
    parent = Rect(3000, 990, 150, 20)
    origin = place(Point(3100, 1007), Size(200, 40), screen, parent)
    assert origin == Point(3200 - 200, 990 - 40)


def test_top_edge_is_not_clamped():
    """Known gap: flipping above can leave the popup partly off the top."""
    parent = Rect(0, 20, 100, 30)
    origin = place(Point(0, 47), Size(100, 1100), SCREEN, parent)
    assert origin.y == 20 - 1100
    assert origin.y < SCREEN.top


def test_left_edge_is_not_clamped():
    """Known gap: an overlay wider than the screen ends up left of it."""
    origin = place(Point(50, 10), Size(2000, 20), SCREEN, PARENT)
    assert origin.x == 1920 - 2000
    assert origin.x < SCREEN.left


def test_place_for_uses_sampled_geometry():
    """Test placement from an AnchorGeometry sample."""
    geometry = AnchorGeometry(
        field=Rect(2, 5, 40, 3),
        screen=Rect(0, 0, 80, 24),
        parent=Rect(2, 5, 40, 3),
        overlap=1,
    )
    assert place_for(geometry, Size(12, 5)) == Point(2, 7)
    # Too tall for the space below: flips above the parent
    assert place_for(geometry, Size(12, 20)) == Point(2, 5 - 20)
