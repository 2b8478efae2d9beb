"""Popup placement geometry.

Pure functions that decide where the suggestions overlay goes relative
to the input field. Nothing here touches a widget; the host samples the
rectangles and the controller feeds them in.
"""

from __future__ import annotations

from dataclasses import dataclass

# Rows/pixels the popup is pulled up so it touches the field's border
DEFAULT_OVERLAP = 3


@dataclass(frozen=True)
class Point:
    """A screen coordinate."""

    x: int
    y: int


@dataclass(frozen=True)
class Size:
    """Width and height of an overlay."""

    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width


@dataclass(frozen=True)
class AnchorGeometry:
    """Geometry sampled from the host every time the popup is shown.

    Attributes:
        field: Bounds of the text field
        screen: Client area of the screen/monitor the field lives on
        parent: Bounds of the widget that contains the field
        border_width: Border width of the field
        overlap: How far the popup is nudged up onto the field
    """

    field: Rect
    screen: Rect
    parent: Rect
    border_width: int = 0
    overlap: int = DEFAULT_OVERLAP


def anchor_point(field: Rect, border_width: int = 0, overlap: int = DEFAULT_OVERLAP) -> Point:
    """Default popup origin: just below the field's bottom-left corner."""
    return Point(field.left, field.bottom + border_width - overlap)


def place(anchor: Point, overlay: Size, screen: Rect, parent: Rect) -> Point:
    """Compute where the overlay should be shown.

    The overlay flips above the parent when it would run off the bottom
    of the screen, and is pushed left when it would run off the right.
    The top and left edges are never clamped.

    Args:
        anchor: Default origin (see ``anchor_point``)
        overlay: Size of the packed overlay
        screen: Screen client area
        parent: Bounds of the containing widget

    Returns:
        The advisory top-left corner of the overlay
    """
    x, y = anchor.x, anchor.y

    if y + overlay.height > screen.bottom:
        y = parent.top - overlay.height
    if x + overlay.width > screen.right:
        x = screen.right - overlay.width

    return Point(x, y)


def place_for(geometry: AnchorGeometry, overlay: Size) -> Point:
    """Run ``anchor_point`` and ``place`` for a sampled geometry."""
    anchor = anchor_point(geometry.field, geometry.border_width, geometry.overlap)
    return place(anchor, overlay, geometry.screen, geometry.parent)
