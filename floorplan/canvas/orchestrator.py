"""
Floor plan orchestrator

Owns the interactive state of one restaurant's floor plan: the table, zone
and order snapshots, the zone filter, table selection, local positions of
dragged tables and the viewport. Every write goes through the REST client;
backend failures are logged and reported through ``notify``, never raised
out of a UI callback.

Selection is a two-state machine, none or selected(id). Clicking the
selected table toggles back to none.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional, Set, Tuple
import asyncio

from pydantic import BaseModel, ConfigDict
import structlog

from floorplan.api.schemas import FloorPlanTablePosition, OrderRead, TableRead, ZoneRead
from floorplan.canvas.renderer import Scene, TableNodeProps, render_scene
from floorplan.canvas.status import TableStatus, derive_status, occupied_table_ids
from floorplan.canvas.viewport import StageSize, Viewport
from floorplan.core.config import get_settings
from floorplan.models.zone import DEFAULT_ZONE_COLOR
from floorplan.services.client import FloorPlanAPIError, FloorPlanClient
from floorplan.services.qr import guest_order_url, render_qr_png

logger = structlog.get_logger(__name__)

Notifier = Callable[[str, str], None]

ORDER_CREATE_PATH = "/dashboard/orders/create?tableId={table_id}"


class FloorPlanStats(BaseModel):
    """Counts for the tables visible under the current zone filter"""
    model_config = ConfigDict(frozen=True)

    tables: int = 0
    seats: int = 0
    available: int = 0
    occupied: int = 0
    inactive: int = 0


class GlobalStats(BaseModel):
    """Totals across every table, whatever the zone filter"""
    model_config = ConfigDict(frozen=True)

    total_tables: int = 0
    total_seats: int = 0


class ZoneLegendEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str
    is_active: bool


class QRCodeResult(BaseModel):
    table_id: int
    token: str
    expires_at: datetime
    url: str
    png: bytes


def _log_notifier(level: str, message: str) -> None:
    logger.info("Floor plan notification", level=level, message=message)


class FloorPlanOrchestrator:
    """Interactive floor plan for one restaurant"""

    def __init__(
        self,
        client: FloorPlanClient,
        restaurant_id: int,
        notify: Optional[Notifier] = None,
        navigate: Optional[Callable[[str], None]] = None,
        open_booking: Optional[Callable[[TableRead], None]] = None,
        capture_payment: Optional[Callable[[TableRead, List[OrderRead]], None]] = None,
        stage: Optional[StageSize] = None,
        guest_base_url: Optional[str] = None,
    ):
        self.client = client
        self.restaurant_id = restaurant_id
        self.notify = notify or _log_notifier
        self.navigate = navigate
        self.open_booking = open_booking
        self.capture_payment_handler = capture_payment
        self.guest_base_url = guest_base_url or get_settings().GUEST_BASE_URL

        self.tables: List[TableRead] = []
        self.zones: List[ZoneRead] = []
        self.orders: List[OrderRead] = []

        self.active_zone_id: Optional[int] = None
        self.selected_table_id: Optional[int] = None
        self.viewport = Viewport()
        self.stage = stage or StageSize()

        self._overrides: Dict[int, Tuple[float, float]] = {}
        # Position saves still awaiting a response, per table id
        self._saving: Dict[int, int] = {}
        self._pending: Set[asyncio.Task] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    async def refresh(self) -> None:
        """Re-fetch tables, zones and orders; on failure keep the current snapshots"""
        try:
            tables = await self.client.list_tables(self.restaurant_id)
            zones = await self.client.list_zones(self.restaurant_id)
            orders = await self.client.list_orders(self.restaurant_id)
        except FloorPlanAPIError as e:
            logger.error("Failed to load floor plan", restaurant_id=self.restaurant_id, error=str(e))
            if not self._closed:
                self.notify("error", f"Failed to load floor plan: {e.detail}")
            return

        if self._closed:
            return
        self.load(tables, zones, orders)

    def load(
        self,
        tables: List[TableRead],
        zones: List[ZoneRead],
        orders: Optional[List[OrderRead]] = None,
    ) -> None:
        """
        Replace the snapshots and drop state they no longer support

        Local positions survive only while their save is still in flight;
        after a failed save the server position is shown again.
        """
        self.tables = list(tables)
        self.zones = list(zones)
        self.orders = list(orders or [])

        by_id = {table.id: table for table in self.tables}
        for table_id, (x, y) in list(self._overrides.items()):
            table = by_id.get(table_id)
            stale = table is None or table_id not in self._saving
            if stale or (table.position_x, table.position_y) == (x, y):
                del self._overrides[table_id]

        if self.active_zone_id is not None and self.active_zone_id not in {z.id for z in self.zones}:
            self.active_zone_id = None
        self._drop_hidden_selection()

    def get_table(self, table_id: int) -> Optional[TableRead]:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def _replace_table(self, updated: TableRead) -> None:
        self.tables = [updated if t.id == updated.id else t for t in self.tables]

    # ------------------------------------------------------------------
    # Zone filter
    # ------------------------------------------------------------------

    @property
    def visible_tables(self) -> List[TableRead]:
        if self.active_zone_id is None:
            return list(self.tables)
        return [t for t in self.tables if t.zone_id == self.active_zone_id]

    @property
    def active_zone(self) -> Optional[ZoneRead]:
        for zone in self.zones:
            if zone.id == self.active_zone_id:
                return zone
        return None

    def set_zone_filter(self, zone_id: Optional[int]) -> None:
        """Show one zone, or every table when zone_id is None"""
        if zone_id is not None and zone_id not in {z.id for z in self.zones}:
            raise ValueError(f"Unknown zone {zone_id}")
        self.active_zone_id = zone_id
        self._drop_hidden_selection()

    def zone_legend(self) -> List[ZoneLegendEntry]:
        return [
            ZoneLegendEntry(
                id=zone.id,
                name=zone.name,
                color=zone.color or DEFAULT_ZONE_COLOR,
                is_active=zone.id == self.active_zone_id,
            )
            for zone in self.zones
        ]

    def empty_message(self) -> Optional[str]:
        if not self.tables:
            return "No tables yet. Create tables first to use the floor plan."
        if not self.visible_tables:
            name = self.active_zone.name if self.active_zone else "this"
            return f'No tables in "{name}" zone.'
        return None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_table(self) -> Optional[TableRead]:
        if self.selected_table_id is None:
            return None
        return self.get_table(self.selected_table_id)

    def click_table(self, table_id: int) -> Optional[int]:
        """Select a table, or deselect it when it is already selected"""
        if self.selected_table_id == table_id:
            self.selected_table_id = None
        elif any(t.id == table_id for t in self.visible_tables):
            self.selected_table_id = table_id
        else:
            logger.warning("Click on a table that is not shown", table_id=table_id)
        return self.selected_table_id

    def select(self, table_id: int) -> None:
        """Select a shown table directly, without toggling"""
        if not any(t.id == table_id for t in self.visible_tables):
            raise ValueError(f"Table {table_id} is not shown")
        self.selected_table_id = table_id

    def clear_selection(self) -> None:
        self.selected_table_id = None

    def _drop_hidden_selection(self) -> None:
        if self.selected_table_id is None:
            return
        if not any(t.id == self.selected_table_id for t in self.visible_tables):
            logger.debug("Selected table hidden, deselecting", table_id=self.selected_table_id)
            self.selected_table_id = None

    def _require_selection(self) -> TableRead:
        table = self.selected_table
        if table is None:
            raise ValueError("No table selected")
        return table

    # ------------------------------------------------------------------
    # Status and statistics
    # ------------------------------------------------------------------

    def statuses(self) -> Dict[int, TableStatus]:
        occupied = occupied_table_ids(self.orders)
        return {table.id: derive_status(table, occupied) for table in self.tables}

    def status_of(self, table_id: int) -> TableStatus:
        table = self.get_table(table_id)
        if table is None:
            raise KeyError(table_id)
        return derive_status(table, occupied_table_ids(self.orders))

    def stats(self) -> FloorPlanStats:
        statuses = self.statuses()
        counts = {status: 0 for status in TableStatus}
        seats = 0
        visible = self.visible_tables
        for table in visible:
            counts[statuses[table.id]] += 1
            seats += table.seats
        return FloorPlanStats(
            tables=len(visible),
            seats=seats,
            available=counts[TableStatus.AVAILABLE],
            occupied=counts[TableStatus.OCCUPIED],
            inactive=counts[TableStatus.INACTIVE],
        )

    def global_stats(self) -> GlobalStats:
        return GlobalStats(
            total_tables=len(self.tables),
            total_seats=sum(table.seats for table in self.tables),
        )

    # ------------------------------------------------------------------
    # Positions and drag-to-persist
    # ------------------------------------------------------------------

    def position_of(self, table: TableRead) -> Tuple[float, float]:
        return self._overrides.get(table.id, (table.position_x, table.position_y))

    def positions(self) -> Dict[int, Tuple[float, float]]:
        return {table.id: self.position_of(table) for table in self.tables}

    @property
    def has_changes(self) -> bool:
        return bool(self._overrides)

    def floor_plan_data(self) -> List[FloorPlanTablePosition]:
        """Current position of every table, local drags included"""
        data = []
        for table in self.tables:
            x, y = self.position_of(table)
            data.append(FloorPlanTablePosition(id=table.id, x=x, y=y))
        return data

    def on_drag_end(self, table_id: int, x: float, y: float) -> Optional[asyncio.Task]:
        """Move the node locally and save only this table in the background"""
        if self._closed:
            return None
        if self.get_table(table_id) is None:
            logger.warning("Drag end for unknown table", table_id=table_id)
            return None

        self._overrides[table_id] = (x, y)
        self._saving[table_id] = self._saving.get(table_id, 0) + 1
        task = asyncio.get_running_loop().create_task(self._save_position(table_id, x, y))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _save_position(self, table_id: int, x: float, y: float) -> None:
        try:
            saved = await self.client.save_floor_plan(
                self.restaurant_id,
                [FloorPlanTablePosition(id=table_id, x=x, y=y)],
            )
        except FloorPlanAPIError as e:
            logger.error("Failed to save table position", table_id=table_id, x=x, y=y, error=str(e))
            if not self._closed:
                # The node stays where it was dropped until the next refresh
                self.notify("error", f"Failed to save table position: {e.detail}")
            return
        finally:
            self._release_save(table_id)

        if self._closed:
            return
        for table in saved:
            self._replace_table(table)
            if self._overrides.get(table.id) == (table.position_x, table.position_y):
                del self._overrides[table.id]
        logger.info("Table position saved", table_id=table_id, x=x, y=y)

    def _release_save(self, table_id: int) -> None:
        remaining = self._saving.get(table_id, 0) - 1
        if remaining > 0:
            self._saving[table_id] = remaining
        else:
            self._saving.pop(table_id, None)

    async def save_all_positions(self) -> bool:
        """Persist every table position in one batch"""
        data = self.floor_plan_data()
        if not data:
            return True
        try:
            saved = await self.client.save_floor_plan(self.restaurant_id, data)
        except FloorPlanAPIError as e:
            logger.error("Failed to save floor plan", restaurant_id=self.restaurant_id, error=str(e))
            if not self._closed:
                self.notify("error", f"Failed to save floor plan: {e.detail}")
            return False

        if not self._closed:
            for table in saved:
                self._replace_table(table)
            self._overrides.clear()
            self.notify("info", "Floor plan saved")
        return True

    async def wait_idle(self) -> None:
        """Wait for in-flight position saves"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self) -> None:
        """Detach from the view; in-flight saves finish without touching it"""
        self._closed = True
        logger.debug("Floor plan closed", pending_saves=len(self._pending))

    # ------------------------------------------------------------------
    # Side panel actions
    # ------------------------------------------------------------------

    async def _update_table(self, table: TableRead, **changes) -> Optional[TableRead]:
        x, y = self.position_of(table)
        record = table.model_copy(update={"position_x": x, "position_y": y, **changes})
        try:
            updated = await self.client.update_table(self.restaurant_id, record)
        except FloorPlanAPIError as e:
            logger.error("Failed to update table", table_id=table.id, changes=changes, error=str(e))
            if not self._closed:
                self.notify("error", f"Failed to update table: {e.detail}")
            return None

        if self._closed:
            return updated
        self._replace_table(updated)
        self._drop_hidden_selection()
        return updated

    async def update_seats(self, seats: int) -> Optional[TableRead]:
        table = self._require_selection()
        if seats < 1:
            self.notify("error", "A table needs at least one seat")
            return None
        return await self._update_table(table, seats=seats)

    async def change_zone(self, zone_id: Optional[int]) -> Optional[TableRead]:
        """Reassign the selected table; None means no zone"""
        table = self._require_selection()
        return await self._update_table(table, zone_id=zone_id)

    async def generate_qr(self) -> Optional[QRCodeResult]:
        """Issue a guest ordering token for the selected table and render it"""
        table = self._require_selection()
        try:
            result = await self.client.generate_order_token(self.restaurant_id, table.id)
        except FloorPlanAPIError as e:
            logger.error("Failed to generate order token", table_id=table.id, error=str(e))
            if not self._closed:
                self.notify("error", f"Failed to generate QR code: {e.detail}")
            return None

        url = guest_order_url(self.guest_base_url, self.restaurant_id, result.token)
        return QRCodeResult(
            table_id=table.id,
            token=result.token,
            expires_at=result.expires_at,
            url=url,
            png=render_qr_png(url),
        )

    def create_order(self) -> str:
        """Go to order creation pre-filled with the selected table"""
        table = self._require_selection()
        path = ORDER_CREATE_PATH.format(table_id=table.id)
        if self.navigate:
            self.navigate(path)
        return path

    def create_booking(self) -> TableRead:
        table = self._require_selection()
        if self.open_booking:
            self.open_booking(table)
        return table

    def capture_payment(self) -> List[OrderRead]:
        """Hand the selected table and its open orders to the payment flow"""
        table = self._require_selection()
        open_orders = [
            order for order in self.orders
            if order.table_id == table.id and order.status.is_active
        ]
        if self.capture_payment_handler:
            self.capture_payment_handler(table, open_orders)
        return open_orders

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def resize(self, container_width: float, viewport_height: float) -> StageSize:
        self.stage = StageSize.fit(container_width, viewport_height)
        return self.stage

    def zoom_in(self) -> Viewport:
        self.viewport = self.viewport.zoom_in(self.stage)
        return self.viewport

    def zoom_out(self) -> Viewport:
        self.viewport = self.viewport.zoom_out(self.stage)
        return self.viewport

    def reset_view(self) -> Viewport:
        self.viewport = self.viewport.reset()
        return self.viewport

    def pan(self, dx: float, dy: float) -> Viewport:
        self.viewport = self.viewport.pan(dx, dy)
        return self.viewport

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def node_props(self) -> List[TableNodeProps]:
        statuses = self.statuses()
        props = []
        for table in self.visible_tables:
            x, y = self.position_of(table)
            props.append(TableNodeProps(
                id=table.id,
                table_number=table.table_number,
                x=x,
                y=y,
                seats=max(1, table.seats),
                status=statuses[table.id],
                is_selected=table.id == self.selected_table_id,
            ))
        return props

    def render(self, viewport: Optional[Viewport] = None, stage: Optional[StageSize] = None) -> Scene:
        """Compute geometry for every visible table and compose the frame"""
        return render_scene(self.node_props(), viewport or self.viewport, stage or self.stage)
