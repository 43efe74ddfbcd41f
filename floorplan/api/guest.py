"""
Guest endpoints, reached by scanning a table QR code without logging in
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
import structlog

from floorplan.core.database import get_session
from floorplan.models.order_token import OrderToken
from floorplan.models.table import Table
from floorplan.api.schemas import GuestTableResponse, TableRead

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/order-tokens/{token}", response_model=GuestTableResponse)
def resolve_order_token(
    token: str,
    session: Session = Depends(get_session)
):
    """Resolve a scanned token to its table"""
    order_token = session.exec(
        select(OrderToken).where(OrderToken.token == token)
    ).first()

    if not order_token:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order token not found"
        )

    if order_token.is_expired():
        logger.info("Expired order token used", table_id=order_token.table_id)
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Order token has expired"
        )

    table = session.get(Table, order_token.table_id)
    if not table or not table.is_active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Table is not taking orders"
        )

    return GuestTableResponse(
        restaurant_id=order_token.restaurant_id,
        table=TableRead.model_validate(table),
        expires_at=order_token.expires_at,
    )
