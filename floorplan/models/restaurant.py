"""
Restaurant model - Multi-tenancy foundation
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional


class Restaurant(SQLModel, table=True):
    """Restaurant owning tables, zones, orders and order tokens"""

    __tablename__ = "restaurants"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(unique=True, index=True, description="Unique restaurant identifier")
    address: Optional[str] = None
    phone: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
    is_active: bool = Field(default=True, index=True)
