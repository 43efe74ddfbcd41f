"""
Table node renderer

Turns one table into a retained group of primitive shapes positioned on the
logical plane: footprint, top-down chair icon, seat caption and name label.
The renderer is stateless; the orchestrator decides when to redraw.
"""

from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from floorplan.canvas import geometry
from floorplan.canvas.status import TableStatus
from floorplan.canvas.viewport import StageSize, Viewport

SELECTED_STROKE = "#a78bfa"
LABEL_FILL = "#111118"
STROKE_WIDTH = 1.5
SELECTED_STROKE_WIDTH = 2.5
ICON_STROKE_WIDTH = 1.5
CHAIR_STROKE_WIDTH = 1.2
CAPTION_FONT_SIZE = 13
LABEL_FONT_SIZE = 11
FONT_FAMILY = "system-ui, sans-serif"
TINT_OPACITY = 0.08


class StatusColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    stroke: str
    fill: str
    text: str


def _palette(rgb: Tuple[int, int, int], hex_color: str) -> StatusColors:
    r, g, b = rgb
    return StatusColors(
        stroke=hex_color,
        fill=f"rgba({r},{g},{b},{TINT_OPACITY})",
        text=hex_color,
    )


STATUS_COLORS = {
    TableStatus.AVAILABLE: _palette((34, 197, 94), "#22c55e"),
    TableStatus.OCCUPIED: _palette((234, 179, 8), "#eab308"),
    TableStatus.INACTIVE: _palette((239, 68, 68), "#ef4444"),
}


class CircleShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["circle"] = "circle"
    x: float
    y: float
    radius: float
    stroke: str
    stroke_width: float
    fill: Optional[str] = None


class RectShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float
    stroke: str
    stroke_width: float
    fill: Optional[str] = None
    corner_radius: float = 0.0


class TextShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str
    x: float
    y: float
    width: float
    font_size: float
    fill: str
    align: str = "center"
    font_family: str = FONT_FAMILY
    font_weight: str = "normal"


Shape = Union[CircleShape, RectShape, TextShape]


class TableNodeProps(BaseModel):
    """Everything the renderer needs to draw one table"""
    model_config = ConfigDict(frozen=True)

    id: int
    table_number: str
    x: float
    y: float
    seats: int = Field(ge=1)
    status: TableStatus
    is_selected: bool = False


class NodeGroup(BaseModel):
    """A drawable, click-selectable and draggable table node"""
    model_config = ConfigDict(frozen=True)

    id: int
    x: float
    y: float
    footprint: geometry.Footprint
    stroke: str
    shapes: Tuple[Shape, ...]

    def hit_test(self, x: float, y: float) -> bool:
        """Whether a logical-plane point falls on this node"""
        return self.footprint.contains(x - self.x, y - self.y)

    def moved_to(self, x: float, y: float) -> Tuple[int, float, float]:
        """Drag-end payload reported to the orchestrator"""
        return self.id, x, y


class Scene(BaseModel):
    """Everything needed to paint one frame of the floor plan"""
    model_config = ConfigDict(frozen=True)

    stage: StageSize
    viewport: Viewport
    nodes: Tuple[NodeGroup, ...]

    def node_at(self, screen_x: float, screen_y: float) -> Optional[NodeGroup]:
        """Topmost node under a screen point, if any"""
        x, y = self.viewport.to_logical(screen_x, screen_y)
        for node in reversed(self.nodes):
            if node.hit_test(x, y):
                return node
        return None


def _table_icon(seats: int, node_width: float, color: str) -> List[Shape]:
    center = geometry.icon_center(seats)
    layout = geometry.chair_layout(seats, node_width)
    shapes: List[Shape] = []

    if layout.surface == geometry.ShapeKind.CIRCLE:
        shapes.append(CircleShape(
            x=center.x,
            y=center.y,
            radius=layout.surface_width / 2,
            stroke=color,
            stroke_width=ICON_STROKE_WIDTH,
        ))
    else:
        shapes.append(RectShape(
            x=center.x - layout.surface_width / 2,
            y=center.y - layout.surface_height / 2,
            width=layout.surface_width,
            height=layout.surface_height,
            stroke=color,
            stroke_width=ICON_STROKE_WIDTH,
            corner_radius=geometry.ICON_CORNER_RADIUS,
        ))

    for chair in layout.chairs:
        shapes.append(CircleShape(
            x=center.x + chair.x,
            y=center.y + chair.y,
            radius=geometry.CHAIR_RADIUS,
            stroke=color,
            stroke_width=CHAIR_STROKE_WIDTH,
        ))
    return shapes


def render_table_node(props: TableNodeProps) -> NodeGroup:
    """Draw one table as a node group at its logical position"""
    shape = geometry.footprint(props.seats)
    colors = STATUS_COLORS[props.status]
    stroke = SELECTED_STROKE if props.is_selected else colors.stroke
    stroke_width = SELECTED_STROKE_WIDTH if props.is_selected else STROKE_WIDTH

    shapes: List[Shape] = []

    if shape.is_circle:
        shapes.append(CircleShape(
            x=shape.width / 2,
            y=shape.height / 2,
            radius=shape.radius,
            fill=colors.fill,
            stroke=stroke,
            stroke_width=stroke_width,
        ))
    else:
        shapes.append(RectShape(
            x=0,
            y=0,
            width=shape.width,
            height=shape.height,
            fill=colors.fill,
            stroke=stroke,
            stroke_width=stroke_width,
            corner_radius=shape.corner_radius,
        ))

    shapes.extend(_table_icon(props.seats, shape.width, colors.text))

    shapes.append(TextShape(
        text=f"{props.seats} Seats",
        x=0,
        y=geometry.caption_y(props.seats),
        width=shape.width,
        font_size=CAPTION_FONT_SIZE,
        fill=colors.text,
    ))

    label = geometry.label_box(props.table_number, shape.width, shape.height)
    shapes.append(RectShape(
        x=label.x,
        y=label.y,
        width=label.width,
        height=label.height,
        fill=LABEL_FILL,
        stroke=stroke,
        stroke_width=stroke_width,
        corner_radius=5,
    ))
    shapes.append(TextShape(
        text=props.table_number,
        x=label.x,
        y=label.y + (label.height - LABEL_FONT_SIZE) / 2,
        width=label.width,
        font_size=LABEL_FONT_SIZE,
        fill=stroke,
        font_weight="600",
    ))

    return NodeGroup(
        id=props.id,
        x=props.x,
        y=props.y,
        footprint=shape,
        stroke=stroke,
        shapes=tuple(shapes),
    )


def render_scene(nodes: List[TableNodeProps], viewport: Viewport, stage: StageSize) -> Scene:
    return Scene(
        stage=stage,
        viewport=viewport,
        nodes=tuple(render_table_node(props) for props in nodes),
    )
