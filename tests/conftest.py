"""
Test configuration for pytest
"""

import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session
from typing import Generator

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["GUEST_BASE_URL"] = "https://menu.test"

from httpx import AsyncClient, ASGITransport

from floorplan.core.auth import create_access_token
from floorplan.core.database import get_session
from floorplan.main import app
from floorplan.models import Restaurant, Table, Zone
from floorplan.services.client import FloorPlanClient

# In-memory SQLite shared by the test and the app through one connection
test_engine = create_engine(
    "sqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

API_ROOT = "http://test/api/v1"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    SQLModel.metadata.create_all(test_engine)

    def override_get_session():
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    with Session(test_engine) as session:
        yield session

    app.dependency_overrides.clear()
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def restaurant(db: Session) -> Restaurant:
    restaurant = Restaurant(name="Trattoria", slug="trattoria")
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


@pytest.fixture
def other_restaurant(db: Session) -> Restaurant:
    restaurant = Restaurant(name="Bistro", slug="bistro")
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


@pytest.fixture
def patio(db: Session, restaurant: Restaurant) -> Zone:
    zone = Zone(restaurant_id=restaurant.id, name="Patio", color="#22d3ee")
    db.add(zone)
    db.commit()
    db.refresh(zone)
    return zone


@pytest.fixture
def tables(db: Session, restaurant: Restaurant, patio: Zone) -> list:
    """Six tables: two on the patio, four unassigned"""
    layout = [
        ("P1", 2, patio.id, 40.0, 40.0),
        ("P2", 6, patio.id, 200.0, 40.0),
        ("T1", 4, None, 100.0, 200.0),
        ("T2", 4, None, 260.0, 200.0),
        ("T3", 8, None, 420.0, 200.0),
        ("Bar", 1, None, -120.0, 35.5),
    ]
    created = []
    for number, seats, zone_id, x, y in layout:
        table = Table(
            restaurant_id=restaurant.id,
            table_number=number,
            seats=seats,
            zone_id=zone_id,
            position_x=x,
            position_y=y,
        )
        db.add(table)
        created.append(table)
    db.commit()
    for table in created:
        db.refresh(table)
    return created


@pytest.fixture
def access_token(restaurant: Restaurant) -> str:
    return create_access_token(user_id=1, restaurant_id=restaurant.id)


@pytest.fixture
def auth_headers(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def api(db: Session):
    """HTTP client wired straight into the ASGI app"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=API_ROOT) as client:
        yield client


@pytest.fixture
async def floor_plan_client(db: Session, access_token: str):
    client = FloorPlanClient(
        access_token,
        base_url=API_ROOT,
        transport=ASGITransport(app=app),
    )
    yield client
    await client.aclose()
