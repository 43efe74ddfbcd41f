"""
Interactive floor plan: geometry, node rendering, viewport and orchestration
"""

from floorplan.canvas.geometry import footprint, chair_layout, label_box
from floorplan.canvas.status import TableStatus
from floorplan.canvas.viewport import StageSize, Viewport
from floorplan.canvas.renderer import NodeGroup, Scene, TableNodeProps, render_table_node
from floorplan.canvas.orchestrator import FloorPlanOrchestrator

__all__ = [
    "footprint",
    "chair_layout",
    "label_box",
    "TableStatus",
    "StageSize",
    "Viewport",
    "NodeGroup",
    "Scene",
    "TableNodeProps",
    "render_table_node",
    "FloorPlanOrchestrator",
]
