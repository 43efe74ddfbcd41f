"""
Time-limited token letting a guest order at a table by scanning a QR code
"""

from sqlmodel import Field, SQLModel
from datetime import datetime, timedelta
from typing import Optional
import secrets


def new_token() -> str:
    return secrets.token_urlsafe(24)


class OrderToken(SQLModel, table=True):
    """QR ordering token bound to one table"""

    __tablename__ = "order_tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    restaurant_id: int = Field(foreign_key="restaurants.id", index=True)
    table_id: int = Field(foreign_key="tables.id", index=True)

    token: str = Field(default_factory=new_token, unique=True, index=True, max_length=64)
    expires_at: datetime = Field(nullable=False)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def issue(cls, restaurant_id: int, table_id: int, ttl_minutes: int) -> "OrderToken":
        return cls(
            restaurant_id=restaurant_id,
            table_id=table_id,
            expires_at=datetime.utcnow() + timedelta(minutes=ttl_minutes),
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at
