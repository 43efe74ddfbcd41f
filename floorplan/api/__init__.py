"""
API routers
"""

from floorplan.api import tables, zones, orders, guest

__all__ = ["tables", "zones", "orders", "guest"]
