"""
Tables API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from typing import List, Optional
from datetime import datetime
import structlog

from floorplan.core.config import get_settings
from floorplan.core.database import get_session
from floorplan.core.dependencies import get_restaurant_id
from floorplan.models.table import Table
from floorplan.models.zone import Zone
from floorplan.models.order_token import OrderToken
from floorplan.api.schemas import (
    TableCreate, TableUpdate, TableRead, FloorPlanUpdate, OrderTokenResponse
)

logger = structlog.get_logger(__name__)
settings = get_settings()
router = APIRouter()


def get_restaurant_table(session: Session, restaurant_id: int, table_id: int) -> Table:
    """Load a table, 404 when missing or owned by another restaurant"""
    table = session.get(Table, table_id)
    if not table or table.restaurant_id != restaurant_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Table not found"
        )
    return table


def check_zone(session: Session, restaurant_id: int, zone_id: Optional[int]) -> None:
    """A table may only be assigned to a zone of its own restaurant"""
    if zone_id is None:
        return
    zone = session.get(Zone, zone_id)
    if not zone or zone.restaurant_id != restaurant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Zone {zone_id} does not exist in this restaurant"
        )


@router.get("/", response_model=List[TableRead])
def list_tables(
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """List all tables of a restaurant"""
    tables = session.exec(
        select(Table)
        .where(Table.restaurant_id == restaurant_id)
        .order_by(Table.id)
    ).all()
    return tables


@router.post("/", response_model=TableRead, status_code=status.HTTP_201_CREATED)
def create_table(
    table_data: TableCreate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Create a new table"""
    check_zone(session, restaurant_id, table_data.zone_id)

    new_table = Table(restaurant_id=restaurant_id, **table_data.model_dump())
    session.add(new_table)
    session.commit()
    session.refresh(new_table)

    logger.info("Table created", table_id=new_table.id, restaurant_id=restaurant_id)
    return new_table


@router.put("/floor-plan", response_model=List[TableRead])
def save_floor_plan(
    floor_plan: FloorPlanUpdate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Persist positions for the listed tables only"""
    ids = list(dict.fromkeys(item.id for item in floor_plan.tables))
    tables = {
        table.id: table
        for table in session.exec(
            select(Table).where(
                Table.restaurant_id == restaurant_id,
                Table.id.in_(ids)
            )
        ).all()
    }

    missing = [table_id for table_id in ids if table_id not in tables]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tables not found: {missing}"
        )

    try:
        now = datetime.utcnow()
        # Later entries for the same table win
        for item in floor_plan.tables:
            table = tables[item.id]
            table.position_x = item.x
            table.position_y = item.y
            table.updated_at = now
            session.add(table)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error("Error saving floor plan", restaurant_id=restaurant_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save floor plan"
        )

    for table in tables.values():
        session.refresh(table)

    logger.info("Floor plan saved", restaurant_id=restaurant_id, table_ids=ids)
    return [tables[table_id] for table_id in ids]


@router.get("/{table_id}", response_model=TableRead)
def get_table(
    table_id: int,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Get table by ID"""
    return get_restaurant_table(session, restaurant_id, table_id)


@router.put("/{table_id}", response_model=TableRead)
def update_table(
    table_id: int,
    table_data: TableUpdate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Replace a table record"""
    table = get_restaurant_table(session, restaurant_id, table_id)
    check_zone(session, restaurant_id, table_data.zone_id)

    for key, value in table_data.model_dump().items():
        setattr(table, key, value)

    table.updated_at = datetime.utcnow()
    session.add(table)
    session.commit()
    session.refresh(table)

    logger.info("Table updated", table_id=table_id, restaurant_id=restaurant_id)
    return table


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(
    table_id: int,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Delete a table and its order tokens"""
    table = get_restaurant_table(session, restaurant_id, table_id)

    for token in session.exec(select(OrderToken).where(OrderToken.table_id == table_id)).all():
        session.delete(token)
    session.delete(table)
    session.commit()

    logger.info("Table deleted", table_id=table_id, restaurant_id=restaurant_id)


@router.post("/{table_id}/order-token", response_model=OrderTokenResponse, status_code=status.HTTP_201_CREATED)
def generate_order_token(
    table_id: int,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Issue a time-limited QR ordering token for a table"""
    table = get_restaurant_table(session, restaurant_id, table_id)
    if not table.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive tables cannot take guest orders"
        )

    order_token = OrderToken.issue(
        restaurant_id=restaurant_id,
        table_id=table_id,
        ttl_minutes=settings.ORDER_TOKEN_EXPIRE_MINUTES,
    )
    session.add(order_token)
    session.commit()
    session.refresh(order_token)

    logger.info("Order token generated", table_id=table_id, restaurant_id=restaurant_id)
    return order_token
