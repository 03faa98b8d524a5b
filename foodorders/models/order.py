from enum import Enum
from tortoise import fields, models
import uuid


def new_object_id() -> str:
    """24 hex chars, the id encoding clients already send for every entity."""
    return uuid.uuid4().hex[:24]


class OrderStatus(str, Enum):
    PENDING = "Pending"  # Initial state, waiting for a delivery partner
    ACCEPTED = "Accepted"  # Claimed by exactly one delivery partner
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "OutForDelivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"


class Restaurant(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    owner = fields.ForeignKeyField("models.Customer", related_name="restaurants", null=True)
    restaurant_name = fields.CharField(max_length=255)
    address = fields.CharField(max_length=512)
    cuisine_type = fields.CharField(max_length=128, null=True)
    opening_hours = fields.CharField(max_length=128, null=True)
    delivery_zone = fields.CharField(max_length=128, null=True)

    class Meta:
        table = "restaurants"


class MenuItem(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="menu_items")
    item_name = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    price = fields.DecimalField(max_digits=12, decimal_places=2)
    availability = fields.BooleanField(default=True)

    class Meta:
        table = "menu_items"
        indexes = [
            ("restaurant_id",),  # Fast restaurant menu queries
        ]


class Order(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    customer = fields.ForeignKeyField("models.Customer", related_name="orders")
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="orders")
    order_status = fields.CharEnumField(OrderStatus, default=OrderStatus.PENDING)
    total_amount = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    delivery_time = fields.DatetimeField(null=True)
    # Set once, by the conditional update that accepts the order
    delivery_personnel = fields.ForeignKeyField(
        "models.DeliveryPersonnel", related_name="orders", null=True
    )
    order_date = fields.DatetimeField(auto_now_add=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    items: fields.ReverseRelation["OrderItem"]

    class Meta:
        table = "orders"
        indexes = [
            ("order_status",),           # Available-orders listing
            ("restaurant_id",),          # Restaurant order queries
            ("customer_id",),            # Customer order history
            ("delivery_personnel_id",),  # Deliveries per partner
        ]


class OrderItem(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    order = fields.ForeignKeyField("models.Order", related_name="items")
    menu_item = fields.ForeignKeyField("models.MenuItem", related_name="order_items")
    quantity = fields.IntField()
    unit_price = fields.DecimalField(max_digits=12, decimal_places=2)
    line_total = fields.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        table = "order_items"
        indexes = [
            ("order_id",),              # Order line items
            ("menu_item_id",),          # Menu item popularity
        ]
