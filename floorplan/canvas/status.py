"""
Table status derived from live order data

A table is occupied while any active order references it, otherwise
available when active and inactive when not.
"""

from enum import Enum
from typing import Iterable, Set

from floorplan.models.order import ACTIVE_ORDER_STATUSES


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    INACTIVE = "inactive"


def occupied_table_ids(orders: Iterable) -> Set[int]:
    """Ids of tables referenced by at least one active order"""
    return {
        order.table_id
        for order in orders
        if order.table_id is not None and order.status in ACTIVE_ORDER_STATUSES
    }


def derive_status(table, occupied_ids: Set[int]) -> TableStatus:
    if table.id in occupied_ids:
        return TableStatus.OCCUPIED
    return TableStatus.AVAILABLE if table.is_active else TableStatus.INACTIVE
