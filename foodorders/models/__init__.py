# foodorders/models/__init__.py
from .order import Order, OrderItem, OrderStatus, Restaurant, MenuItem, new_object_id
from .user import Customer
from .personnel import DeliveryPersonnel, PersonnelRole

# Export all models
__all__ = [
    "Customer",
    "DeliveryPersonnel",
    "MenuItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PersonnelRole",
    "Restaurant",
    "new_object_id",
]
