"""
API schemas for tables, zones, orders and order tokens
"""

from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional, List

from floorplan.models.order import OrderStatus

# ============================================================================
# Zone Schemas
# ============================================================================

class ZoneCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, max_length=32)


class ZoneUpdate(ZoneCreate):
    pass


class ZoneRead(SQLModel):
    id: int
    restaurant_id: int
    name: str
    color: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


# ============================================================================
# Table Schemas
# ============================================================================

class TableCreate(SQLModel):
    table_number: str = Field(min_length=1, max_length=50)
    seats: int = Field(default=2, ge=1)
    zone_id: Optional[int] = None
    position_x: float = 0.0
    position_y: float = 0.0
    is_active: bool = True


class TableUpdate(SQLModel):
    """Full replacement of a table record; every field must be sent"""
    table_number: str = Field(min_length=1, max_length=50)
    is_active: bool
    seats: int = Field(ge=1)
    zone_id: Optional[int]
    position_x: float
    position_y: float


class TableRead(SQLModel):
    id: int
    restaurant_id: int
    table_number: str
    seats: int
    zone_id: Optional[int] = None
    position_x: float
    position_y: float
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class FloorPlanTablePosition(SQLModel):
    id: int
    x: float
    y: float


class FloorPlanUpdate(SQLModel):
    tables: List[FloorPlanTablePosition] = Field(min_length=1)


# ============================================================================
# Order Schemas
# ============================================================================

class OrderCreate(SQLModel):
    table_id: int
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None


class OrderRead(SQLModel):
    id: int
    restaurant_id: int
    table_id: Optional[int] = None
    status: OrderStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


# ============================================================================
# Order Token Schemas
# ============================================================================

class OrderTokenResponse(SQLModel):
    token: str
    expires_at: datetime


class GuestTableResponse(SQLModel):
    """What a guest sees after scanning a table QR code"""
    restaurant_id: int
    table: TableRead
    expires_at: datetime
