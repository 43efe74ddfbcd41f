"""
Zone model for grouping tables on the floor plan
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from floorplan.models.table import Table

DEFAULT_ZONE_COLOR = "#6b7280"


class Zone(SQLModel, table=True):
    """Named, colored grouping of tables (e.g. 'Patio', 'Bar')"""

    __tablename__ = "zones"

    id: Optional[int] = Field(default=None, primary_key=True)
    restaurant_id: int = Field(foreign_key="restaurants.id", index=True, description="Restaurant this zone belongs to")

    name: str = Field(max_length=100, nullable=False, description="Zone name (e.g., 'Patio', 'Bar')")
    color: Optional[str] = Field(default=None, max_length=32, description="Display color, gray when absent")

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    tables: list["Table"] = Relationship(back_populates="zone")
