"""
Order model, read by the floor plan to derive table occupancy
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum


class OrderStatus(str, Enum):
    """Status of an order"""
    PENDING = "pending"           # Placed, waiting for staff
    CONFIRMED = "confirmed"       # Accepted by staff
    PREPARING = "preparing"       # Kitchen is preparing
    READY = "ready"               # Ready to serve
    COMPLETED = "completed"       # Served and closed
    CANCELLED = "cancelled"       # Cancelled

    @property
    def is_active(self) -> bool:
        """Non-terminal orders keep their table occupied"""
        return self in ACTIVE_ORDER_STATUSES


ACTIVE_ORDER_STATUSES = frozenset({
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
})


class Order(SQLModel, table=True):
    """Order placed at a table"""

    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    restaurant_id: int = Field(foreign_key="restaurants.id", index=True)
    table_id: Optional[int] = Field(default=None, foreign_key="tables.id", index=True, description="Table the order is served at")

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        index=True,
        description="Current status of the order"
    )
    notes: Optional[str] = Field(default=None, max_length=500)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
