"""
Orders API endpoints
Read side used by the floor plan to derive table occupancy
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session, select
from typing import List, Optional
import structlog

from floorplan.core.database import get_session
from floorplan.core.dependencies import get_restaurant_id
from floorplan.models.order import Order, OrderStatus
from floorplan.api.schemas import OrderCreate, OrderRead
from floorplan.api.tables import get_restaurant_table

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/", response_model=List[OrderRead])
def list_orders(
    table_id: Optional[int] = Query(None, description="Filter by table"),
    status_filter: Optional[OrderStatus] = Query(None, alias="status", description="Filter by status"),
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """List orders of a restaurant"""
    query = select(Order).where(Order.restaurant_id == restaurant_id)

    if table_id is not None:
        query = query.where(Order.table_id == table_id)

    if status_filter:
        query = query.where(Order.status == status_filter)

    return session.exec(query.order_by(Order.created_at.desc())).all()


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Open an order at a table"""
    table = get_restaurant_table(session, restaurant_id, order_data.table_id)
    if not table.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot open an order at an inactive table"
        )

    order = Order(restaurant_id=restaurant_id, **order_data.model_dump())
    session.add(order)
    session.commit()
    session.refresh(order)

    logger.info("Order created", order_id=order.id, table_id=table.id)
    return order
