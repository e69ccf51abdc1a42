"""DB models"""
from app.models.user import User, Role
from app.models.customer import Customer
from app.models.product import Product
from app.models.order import Order, OrderLine, OrderStatus
from app.models.truck import Truck, CargoSlot
from app.models.route_calendar import RouteCalendar
from app.models.activity_log import ActivityLog

__all__ = [
    "User",
    "Role",
    "Customer",
    "Product",
    "Order",
    "OrderLine",
    "OrderStatus",
    "Truck",
    "CargoSlot",
    "RouteCalendar",
    "ActivityLog",
]
