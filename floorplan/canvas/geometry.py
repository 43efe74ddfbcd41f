"""
Table node geometry

Pure functions mapping a table's seat count to its node footprint, the
chair layout of the top-down table icon, and the name label box. All
coordinates are relative to the node origin (its top-left corner) unless
stated otherwise.
"""

from enum import Enum
from typing import Optional, Tuple
import math

from pydantic import BaseModel, ConfigDict

# Footprint
CIRCLE_DIAMETER = 100.0
CIRCLE_MAX_SEATS = 2
BASE_WIDTH = 90.0
PER_SEAT_WIDTH = 12.0
MIN_WIDTH = 90.0
MAX_WIDTH = 200.0
NODE_HEIGHT = 110.0
CORNER_RADIUS = 12.0

# Icon
CHAIR_RADIUS = 3.0
CHAIR_GAP = 3.0
ICON_TABLE_RADIUS = 10.0
ICON_TABLE_HEIGHT = 16.0
ICON_TABLE_MAX_WIDTH = 50.0
ICON_TABLE_WIDTH_RATIO = 0.4
ICON_CORNER_RADIUS = 4.0

# Label
LABEL_CHAR_WIDTH = 7.0
LABEL_PADDING_X = 10.0
LABEL_MIN_WIDTH = 60.0
LABEL_HEIGHT = 20.0


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    RECT = "rect"


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Footprint(BaseModel):
    """Bounding shape of a table node"""
    model_config = ConfigDict(frozen=True)

    kind: ShapeKind
    width: float
    height: float
    corner_radius: float = 0.0

    @property
    def is_circle(self) -> bool:
        return self.kind == ShapeKind.CIRCLE

    @property
    def radius(self) -> float:
        return self.width / 2

    @property
    def center(self) -> Point:
        return Point(x=self.width / 2, y=self.height / 2)

    def contains(self, x: float, y: float) -> bool:
        """Whether a node-relative point lies inside the footprint"""
        if self.is_circle:
            return math.hypot(x - self.width / 2, y - self.height / 2) <= self.radius
        return 0 <= x <= self.width and 0 <= y <= self.height


class ChairLayout(BaseModel):
    """Top-down table icon: table surface plus one chair per seat.

    Coordinates are relative to the icon center.
    """
    model_config = ConfigDict(frozen=True)

    surface: ShapeKind
    surface_width: float
    surface_height: float
    chairs: Tuple[Point, ...]

    @property
    def chair_count(self) -> int:
        return len(self.chairs)


class LabelBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float


def _require_seats(seats: int) -> None:
    if seats < 1:
        raise ValueError(f"seats must be at least 1, got {seats}")


def is_circular(seats: int) -> bool:
    _require_seats(seats)
    return seats <= CIRCLE_MAX_SEATS


def rect_width(seats: int) -> float:
    """Rectangle width, non-decreasing in seats until MAX_WIDTH"""
    return min(MAX_WIDTH, max(MIN_WIDTH, BASE_WIDTH + seats * PER_SEAT_WIDTH))


def footprint(seats: int) -> Footprint:
    """Node footprint: a circle up to two seats, a rounded rectangle above"""
    if is_circular(seats):
        return Footprint(kind=ShapeKind.CIRCLE, width=CIRCLE_DIAMETER, height=CIRCLE_DIAMETER)
    return Footprint(
        kind=ShapeKind.RECT,
        width=rect_width(seats),
        height=NODE_HEIGHT,
        corner_radius=CORNER_RADIUS,
    )


def side_split(seats: int) -> Tuple[int, int, int, int]:
    """Chairs per side as (top, bottom, left, right)"""
    _require_seats(seats)
    top = math.ceil(seats / 4)
    bottom = math.ceil((seats - top) / 3)
    left = math.ceil((seats - top - bottom) / 2)
    right = seats - top - bottom - left
    return top, bottom, left, right


def _spaced(start: float, length: float, count: int) -> list:
    # count + 1 equal gaps keep chairs off the corners
    spacing = length / (count + 1)
    return [start + spacing * (i + 1) for i in range(count)]


def chair_layout(seats: int, node_width: Optional[float] = None) -> ChairLayout:
    """Place exactly ``seats`` chairs around the icon's table surface.

    Round icons start at the top (-90 degrees) and go clockwise. Rectangular
    icons spread chairs over the four sides using ``side_split``.
    """
    if node_width is None:
        node_width = footprint(seats).width

    if is_circular(seats):
        distance = ICON_TABLE_RADIUS + CHAIR_GAP + CHAIR_RADIUS
        chairs = []
        for i in range(seats):
            angle = (2 * math.pi * i) / seats - math.pi / 2
            chairs.append(Point(x=math.cos(angle) * distance, y=math.sin(angle) * distance))
        return ChairLayout(
            surface=ShapeKind.CIRCLE,
            surface_width=ICON_TABLE_RADIUS * 2,
            surface_height=ICON_TABLE_RADIUS * 2,
            chairs=tuple(chairs),
        )

    tw = min(node_width * ICON_TABLE_WIDTH_RATIO, ICON_TABLE_MAX_WIDTH)
    th = ICON_TABLE_HEIGHT
    offset = CHAIR_GAP + CHAIR_RADIUS
    top, bottom, left, right = side_split(seats)

    chairs = []
    chairs += [Point(x=x, y=-th / 2 - offset) for x in _spaced(-tw / 2, tw, top)]
    chairs += [Point(x=x, y=th / 2 + offset) for x in _spaced(-tw / 2, tw, bottom)]
    chairs += [Point(x=-tw / 2 - offset, y=y) for y in _spaced(-th / 2, th, left)]
    chairs += [Point(x=tw / 2 + offset, y=y) for y in _spaced(-th / 2, th, right)]

    return ChairLayout(
        surface=ShapeKind.RECT,
        surface_width=tw,
        surface_height=th,
        chairs=tuple(chairs),
    )


def icon_center(seats: int) -> Point:
    """Where the table icon sits inside the node"""
    shape = footprint(seats)
    return Point(x=shape.width / 2, y=30.0 if shape.is_circle else 32.0)


def caption_y(seats: int) -> float:
    """Top of the "N Seats" caption"""
    return 52.0 if is_circular(seats) else 60.0


def label_box(text: str, node_width: float, node_height: float) -> LabelBox:
    """Name label centered under the node, straddling its bottom edge"""
    width = max(len(text) * LABEL_CHAR_WIDTH + LABEL_PADDING_X * 2, LABEL_MIN_WIDTH)
    return LabelBox(
        x=(node_width - width) / 2,
        y=node_height - LABEL_HEIGHT / 2,
        width=width,
        height=LABEL_HEIGHT,
    )
