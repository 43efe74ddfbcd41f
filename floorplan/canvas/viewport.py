"""
Viewport controller

Pan and uniform zoom over the drawing surface. ``Viewport`` is an immutable
value: every operation returns a new viewport, so a frame can be drawn from
a snapshot without aliasing. Screen = logical * scale + offset.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict

MIN_SCALE = 0.3
MAX_SCALE = 3.0
SCALE_STEP = 0.15

DEFAULT_STAGE_WIDTH = 800.0
MIN_STAGE_HEIGHT = 500.0
UI_CHROME_HEIGHT = 240.0


class StageSize(BaseModel):
    """Size of the drawing surface in screen pixels"""
    model_config = ConfigDict(frozen=True)

    width: float = DEFAULT_STAGE_WIDTH
    height: float = MIN_STAGE_HEIGHT

    @classmethod
    def fit(cls, container_width: float, viewport_height: float) -> "StageSize":
        """Track the container width; keep a usable minimum height"""
        return cls(
            width=container_width,
            height=max(MIN_STAGE_HEIGHT, viewport_height - UI_CHROME_HEIGHT),
        )

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @property
    def zoom_percent(self) -> int:
        return round(self.scale * 100)

    @property
    def can_zoom_in(self) -> bool:
        return self.scale < MAX_SCALE

    @property
    def can_zoom_out(self) -> bool:
        return self.scale > MIN_SCALE

    def to_logical(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        return (
            (screen_x - self.offset_x) / self.scale,
            (screen_y - self.offset_y) / self.scale,
        )

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale + self.offset_x, y * self.scale + self.offset_y

    def zoom_to(self, scale: float, stage: StageSize) -> "Viewport":
        """Rescale about the stage center, keeping the point under it fixed"""
        new_scale = min(MAX_SCALE, max(MIN_SCALE, scale))
        if new_scale == self.scale:
            return self

        cx, cy = stage.center
        lx, ly = self.to_logical(cx, cy)
        return Viewport(
            scale=new_scale,
            offset_x=cx - lx * new_scale,
            offset_y=cy - ly * new_scale,
        )

    def zoom_in(self, stage: StageSize) -> "Viewport":
        return self.zoom_to(self.scale + SCALE_STEP, stage)

    def zoom_out(self, stage: StageSize) -> "Viewport":
        return self.zoom_to(self.scale - SCALE_STEP, stage)

    def pan(self, dx: float, dy: float) -> "Viewport":
        """Drag the whole surface; scale is untouched"""
        return self.model_copy(update={
            "offset_x": self.offset_x + dx,
            "offset_y": self.offset_y + dy,
        })

    def reset(self) -> "Viewport":
        return Viewport()
