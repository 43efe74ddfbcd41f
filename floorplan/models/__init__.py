from floorplan.models.restaurant import Restaurant
from floorplan.models.zone import Zone, DEFAULT_ZONE_COLOR
from floorplan.models.table import Table
from floorplan.models.order import Order, OrderStatus, ACTIVE_ORDER_STATUSES
from floorplan.models.order_token import OrderToken
