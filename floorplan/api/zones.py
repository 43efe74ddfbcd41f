"""
Zones API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from typing import List
from datetime import datetime
import structlog

from floorplan.core.database import get_session
from floorplan.core.dependencies import get_restaurant_id
from floorplan.models.table import Table
from floorplan.models.zone import Zone
from floorplan.api.schemas import ZoneCreate, ZoneUpdate, ZoneRead

logger = structlog.get_logger(__name__)
router = APIRouter()


def get_restaurant_zone(session: Session, restaurant_id: int, zone_id: int) -> Zone:
    zone = session.get(Zone, zone_id)
    if not zone or zone.restaurant_id != restaurant_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Zone not found"
        )
    return zone


@router.get("/", response_model=List[ZoneRead])
def list_zones(
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """List all zones of a restaurant"""
    return session.exec(
        select(Zone).where(Zone.restaurant_id == restaurant_id).order_by(Zone.id)
    ).all()


@router.post("/", response_model=ZoneRead, status_code=status.HTTP_201_CREATED)
def create_zone(
    zone_data: ZoneCreate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Create a new zone"""
    zone = Zone(restaurant_id=restaurant_id, **zone_data.model_dump())
    session.add(zone)
    session.commit()
    session.refresh(zone)

    logger.info("Zone created", zone_id=zone.id, restaurant_id=restaurant_id)
    return zone


@router.put("/{zone_id}", response_model=ZoneRead)
def update_zone(
    zone_id: int,
    zone_data: ZoneUpdate,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Rename or recolor a zone"""
    zone = get_restaurant_zone(session, restaurant_id, zone_id)
    zone.name = zone_data.name
    zone.color = zone_data.color
    zone.updated_at = datetime.utcnow()
    session.add(zone)
    session.commit()
    session.refresh(zone)

    logger.info("Zone updated", zone_id=zone_id, restaurant_id=restaurant_id)
    return zone


@router.delete("/{zone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_zone(
    zone_id: int,
    restaurant_id: int = Depends(get_restaurant_id),
    session: Session = Depends(get_session)
):
    """Delete a zone; its tables become unassigned"""
    zone = get_restaurant_zone(session, restaurant_id, zone_id)

    try:
        members = session.exec(select(Table).where(Table.zone_id == zone_id)).all()
        now = datetime.utcnow()
        for table in members:
            table.zone_id = None
            table.updated_at = now
            session.add(table)
        session.delete(zone)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error("Error deleting zone", zone_id=zone_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete zone"
        )

    logger.info("Zone deleted", zone_id=zone_id, unassigned_tables=len(members))
