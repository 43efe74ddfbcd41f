"""
Table model for restaurant seating
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from floorplan.models.zone import Zone


class Table(SQLModel, table=True):
    """Table model for restaurant seating"""

    __tablename__ = "tables"

    id: Optional[int] = Field(default=None, primary_key=True)
    restaurant_id: int = Field(foreign_key="restaurants.id", index=True, description="Restaurant this table is in")
    zone_id: Optional[int] = Field(default=None, foreign_key="zones.id", index=True, description="Zone, null when unassigned")

    # Table details
    table_number: str = Field(max_length=50, nullable=False, description="Display label (e.g., 'A1', 'Window 3')")
    seats: int = Field(default=2, ge=1, description="Number of seats, drives node geometry")

    # Position on the floor plan, unbounded logical plane
    position_x: float = Field(default=0.0, description="X coordinate on floor plan")
    position_y: float = Field(default=0.0, description="Y coordinate on floor plan")

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    zone: Optional["Zone"] = Relationship(back_populates="tables")
