"""
Unit tests for table node geometry
"""

import math
import pytest

from floorplan.canvas import geometry
from floorplan.canvas.geometry import ShapeKind


class TestFootprint:
    """Shape regime and sizing"""

    def test_two_seats_is_circle(self):
        shape = geometry.footprint(2)

        assert shape.kind == ShapeKind.CIRCLE
        assert shape.width == geometry.CIRCLE_DIAMETER
        assert shape.height == geometry.CIRCLE_DIAMETER
        assert shape.radius == geometry.CIRCLE_DIAMETER / 2

    def test_three_seats_is_rectangle(self):
        shape = geometry.footprint(3)

        assert shape.kind == ShapeKind.RECT
        assert shape.height == geometry.NODE_HEIGHT
        assert shape.corner_radius == geometry.CORNER_RADIUS

    def test_rectangle_width_formula(self):
        assert geometry.footprint(4).width == 90 + 4 * 12
        assert geometry.footprint(8).width == 90 + 8 * 12

    def test_width_monotonic_until_clamp(self):
        widths = [geometry.footprint(seats).width for seats in range(3, 51)]

        for narrower, wider in zip(widths, widths[1:]):
            assert wider >= narrower
        assert max(widths) == geometry.MAX_WIDTH

    def test_width_constant_once_clamped(self):
        # 90 + 10 * 12 > 200
        assert geometry.footprint(10).width == geometry.MAX_WIDTH
        assert geometry.footprint(11).width == geometry.MAX_WIDTH
        assert geometry.footprint(50).width == geometry.MAX_WIDTH

    def test_contains_circle(self):
        shape = geometry.footprint(1)

        assert shape.contains(50, 50)
        assert not shape.contains(2, 2)

    def test_contains_rectangle(self):
        shape = geometry.footprint(4)

        assert shape.contains(1, 1)
        assert not shape.contains(shape.width + 1, 10)

    @pytest.mark.parametrize("seats", [0, -3])
    def test_rejects_fewer_than_one_seat(self, seats):
        with pytest.raises(ValueError, match="at least 1"):
            geometry.footprint(seats)


class TestChairLayout:
    """Chair placement around the icon table"""

    @pytest.mark.parametrize("seats", range(1, 51))
    def test_chair_count_matches_seats(self, seats):
        assert geometry.chair_layout(seats).chair_count == seats

    def test_layout_is_deterministic(self):
        for seats in range(1, 51):
            first = geometry.chair_layout(seats)
            second = geometry.chair_layout(seats)

            assert first == second
            assert geometry.footprint(seats) == geometry.footprint(seats)

    def test_single_chair_at_top(self):
        layout = geometry.chair_layout(1)
        (chair,) = layout.chairs

        assert layout.surface == ShapeKind.CIRCLE
        assert math.atan2(chair.y, chair.x) == pytest.approx(-math.pi / 2)
        assert chair.x == pytest.approx(0.0, abs=1e-9)
        assert chair.y < 0

    def test_two_chairs_top_and_bottom(self):
        top, bottom = geometry.chair_layout(2).chairs
        distance = geometry.ICON_TABLE_RADIUS + geometry.CHAIR_GAP + geometry.CHAIR_RADIUS

        assert top.x == pytest.approx(0.0, abs=1e-9)
        assert top.y == pytest.approx(-distance)
        assert bottom.x == pytest.approx(0.0, abs=1e-9)
        assert bottom.y == pytest.approx(distance)

    @pytest.mark.parametrize("seats, expected", [
        (3, (1, 1, 1, 0)),
        (4, (1, 1, 1, 1)),
        (6, (2, 2, 1, 1)),
        (8, (2, 2, 2, 2)),
        (10, (3, 3, 2, 2)),
    ])
    def test_side_split(self, seats, expected):
        split = geometry.side_split(seats)

        assert split == expected
        assert sum(split) == seats

    def test_rectangle_chairs_stay_off_corners(self):
        layout = geometry.chair_layout(12)
        half_w = layout.surface_width / 2
        half_h = layout.surface_height / 2

        for chair in layout.chairs:
            on_horizontal_side = abs(chair.y) > half_h
            if on_horizontal_side:
                assert -half_w < chair.x < half_w
            else:
                assert -half_h < chair.y < half_h

    def test_icon_surface_width_is_capped(self):
        for seats in (3, 4, 20):
            assert geometry.chair_layout(seats).surface_width == geometry.ICON_TABLE_MAX_WIDTH


class TestLabelBox:
    """Name label sizing"""

    def test_short_label_uses_minimum_width(self):
        box = geometry.label_box("T1", 100, 100)

        assert box.width == geometry.LABEL_MIN_WIDTH
        assert box.x == pytest.approx((100 - 60) / 2)

    def test_long_label_grows_with_text(self):
        text = "Window table 12"
        box = geometry.label_box(text, 150, 110)

        assert box.width == len(text) * 7 + 20
        assert box.x == pytest.approx((150 - box.width) / 2)

    def test_label_straddles_bottom_edge(self):
        box = geometry.label_box("A1", 138, 110)

        assert box.y < 110 < box.y + box.height
        assert box.y + box.height / 2 == 110
