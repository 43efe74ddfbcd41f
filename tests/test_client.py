"""
Unit tests for the floor plan REST client
"""

import json
from datetime import datetime

import httpx
import pytest

from floorplan.api.schemas import FloorPlanTablePosition, TableRead
from floorplan.services.client import FloorPlanAPIError, FloorPlanClient

BASE_URL = "http://floorplan.test/api/v1"

TABLE_JSON = {
    "id": 3,
    "restaurant_id": 1,
    "table_number": "T1",
    "seats": 4,
    "zone_id": None,
    "position_x": 150.0,
    "position_y": 250.0,
    "is_active": True,
    "created_at": "2026-03-01T12:00:00",
    "updated_at": None,
}


def make_client(handler) -> FloorPlanClient:
    return FloorPlanClient("staff-token", base_url=BASE_URL, transport=httpx.MockTransport(handler))


async def test_sends_bearer_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[TABLE_JSON])

    async with make_client(handler) as client:
        tables = await client.list_tables(1)

    assert seen[0].headers["Authorization"] == "Bearer staff-token"
    assert seen[0].url.path == "/api/v1/restaurants/1/tables/"
    assert tables[0].table_number == "T1"


async def test_save_floor_plan_body():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append((request.method, request.url.path, json.loads(request.content)))
        return httpx.Response(200, json=[TABLE_JSON])

    async with make_client(handler) as client:
        saved = await client.save_floor_plan(1, [FloorPlanTablePosition(id=3, x=150, y=250)])

    assert bodies == [("PUT", "/api/v1/restaurants/1/tables/floor-plan", {"tables": [{"id": 3, "x": 150.0, "y": 250.0}]})]
    assert saved[0].position_x == 150.0


async def test_update_table_sends_full_record():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=TABLE_JSON)

    table = TableRead.model_validate({**TABLE_JSON, "created_at": datetime(2026, 3, 1)})
    async with make_client(handler) as client:
        await client.update_table(1, table)

    assert bodies == [{
        "table_number": "T1",
        "is_active": True,
        "seats": 4,
        "zone_id": None,
        "position_x": 150.0,
        "position_y": 250.0,
    }]


async def test_list_orders_filters_by_table():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json=[])

    async with make_client(handler) as client:
        assert await client.list_orders(1, table_id=3) == []

    assert seen[0].params["table_id"] == "3"


async def test_error_detail_is_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Tables not found: [9]"})

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.save_floor_plan(1, [FloorPlanTablePosition(id=9, x=0, y=0)])

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Tables not found: [9]"


async def test_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.list_zones(1)

    assert exc_info.value.status_code == 502
    assert exc_info.value.detail == "Bad Gateway"


async def test_network_failure_has_no_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.list_tables(1)

    assert exc_info.value.status_code is None
    assert "connection refused" in exc_info.value.detail


async def test_malformed_item_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{**TABLE_JSON, "position_x": "left"}])

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.list_tables(1)

    assert exc_info.value.status_code is None
    assert "TableRead" in exc_info.value.detail


async def test_object_where_list_expected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"tables": []})

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError):
            await client.save_floor_plan(1, [FloorPlanTablePosition(id=3, x=1, y=1)])


async def test_success_body_not_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>")

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.list_zones(1)

    assert exc_info.value.status_code == 200
    assert exc_info.value.detail == "Malformed response body"


async def test_error_body_that_is_a_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json=[{"loc": ["body"], "msg": "bad"}])

    async with make_client(handler) as client:
        with pytest.raises(FloorPlanAPIError) as exc_info:
            await client.list_tables(1)

    assert exc_info.value.status_code == 422
