"""
Floor plan REST client
Async HTTP client for the tables, zones, orders and order-token endpoints
"""

from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar
import httpx
from pydantic import ValidationError
from sqlmodel import SQLModel
import structlog

from floorplan.core.config import get_settings
from floorplan.api.schemas import (
    TableRead, ZoneRead, OrderRead, OrderTokenResponse, FloorPlanTablePosition
)

logger = structlog.get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=SQLModel)


class FloorPlanAPIError(Exception):
    """Backend request failed"""

    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(f"{status_code or 'network'}: {detail}")
        self.status_code = status_code
        self.detail = detail


class FloorPlanClient:
    """Talks to the floor plan backend on behalf of one staff session"""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client

        Args:
            access_token: Staff JWT issued for the restaurant being managed
            base_url: API root including version prefix (defaults to settings)
            transport: Optional httpx transport, e.g. ASGITransport in tests
            timeout: Request timeout in seconds (defaults to settings)
        """
        settings = get_settings()
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "FloorPlanClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Floor plan request failed", method=method, url=url, error=str(e))
            raise FloorPlanAPIError(None, str(e)) from e

        if response.is_error:
            try:
                body = response.json()
                detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            except ValueError:
                detail = response.text
            logger.warning(
                "Floor plan request rejected",
                method=method,
                url=url,
                status_code=response.status_code,
                detail=detail,
            )
            raise FloorPlanAPIError(response.status_code, str(detail))

        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "Floor plan response is not JSON",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise FloorPlanAPIError(response.status_code, "Malformed response body") from e

    def _parse(self, schema: Type[SchemaT], data: Any) -> SchemaT:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected floor plan response", schema=schema.__name__, errors=e.error_count())
            raise FloorPlanAPIError(None, f"Unexpected response for {schema.__name__}") from e

    def _parse_list(self, schema: Type[SchemaT], data: Any) -> List[SchemaT]:
        if not isinstance(data, list):
            logger.error("Expected a list response", schema=schema.__name__)
            raise FloorPlanAPIError(None, f"Unexpected response for {schema.__name__} list")
        return [self._parse(schema, item) for item in data]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_tables(self, restaurant_id: int) -> List[TableRead]:
        data = await self._request("GET", f"/restaurants/{restaurant_id}/tables/")
        return self._parse_list(TableRead, data)

    async def get_table(self, restaurant_id: int, table_id: int) -> TableRead:
        data = await self._request("GET", f"/restaurants/{restaurant_id}/tables/{table_id}")
        return self._parse(TableRead, data)

    async def list_zones(self, restaurant_id: int) -> List[ZoneRead]:
        data = await self._request("GET", f"/restaurants/{restaurant_id}/zones/")
        return self._parse_list(ZoneRead, data)

    async def list_orders(self, restaurant_id: int, table_id: Optional[int] = None) -> List[OrderRead]:
        params = {"table_id": table_id} if table_id is not None else None
        data = await self._request("GET", f"/restaurants/{restaurant_id}/orders/", params=params)
        return self._parse_list(OrderRead, data)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def save_floor_plan(
        self,
        restaurant_id: int,
        positions: Iterable[FloorPlanTablePosition],
    ) -> List[TableRead]:
        """Persist positions for a batch of tables"""
        body = {"tables": [position.model_dump() for position in positions]}
        data = await self._request("PUT", f"/restaurants/{restaurant_id}/tables/floor-plan", json=body)
        return self._parse_list(TableRead, data)

    async def update_table(self, restaurant_id: int, table: TableRead) -> TableRead:
        """Replace a table record; unchanged fields are resent as they are"""
        body: Dict[str, Any] = table.model_dump(
            include={"table_number", "is_active", "seats", "zone_id", "position_x", "position_y"}
        )
        data = await self._request("PUT", f"/restaurants/{restaurant_id}/tables/{table.id}", json=body)
        return self._parse(TableRead, data)

    async def generate_order_token(self, restaurant_id: int, table_id: int) -> OrderTokenResponse:
        data = await self._request("POST", f"/restaurants/{restaurant_id}/tables/{table_id}/order-token")
        return self._parse(OrderTokenResponse, data)
