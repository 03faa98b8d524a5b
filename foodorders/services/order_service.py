import logging
import re
from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError
from tortoise import timezone
from tortoise.transactions import in_transaction

from foodorders.core.config import MAX_ITEM_QUANTITY, OBJECT_ID_PATTERN, ORDER_TRANSITIONS
from foodorders.core.errors import InvalidRequest, NotFound, Forbidden, Conflict
from foodorders.models.order import Order, OrderItem, MenuItem, Restaurant, OrderStatus
from foodorders.models.user import Customer
from foodorders.models.personnel import DeliveryPersonnel
from foodorders.services.transitions import TransitionTable

log = logging.getLogger("foodorders.orders")

_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)
_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)

# Upper bound of Order.total_amount / OrderItem.line_total (max_digits=14, decimal_places=2)
MAX_AMOUNT = Decimal("999999999999.99")

DEFAULT_TRANSITIONS = TransitionTable.from_name(ORDER_TRANSITIONS)


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID_RE.fullmatch(value))


def validate_object_id(value: Any, label: str) -> str:
    if not is_object_id(value):
        raise InvalidRequest(f"Invalid {label} ID format")
    return value.lower()


def parse_delivery_time(value: Optional[str]) -> Optional[datetime]:
    """Absent or empty means no delivery time was scheduled."""
    if not value:
        return None
    try:
        parsed = _DATETIME.validate_python(value)
    except ValidationError:
        # A bare calendar date means midnight of that day
        try:
            parsed = datetime.combine(_DATE.validate_python(value), time.min)
        except ValidationError:
            raise InvalidRequest("Invalid deliveryTime format") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt_timezone.utc)
    return parsed


# ----------- Order Composer -----------

async def compose_order(
    customer_id: Optional[str],
    restaurant_id: Optional[str],
    items: Optional[List[Dict[str, Any]]],
    delivery_time: Optional[str] = None,
) -> Order:
    """
    Builds a Pending order from a cart of {"menu_item_id", "quantity"} pairs.

    Prices are resolved from the menu at call time. Every check runs before the
    first write; the order row and its line items are written in one
    transaction, so a failure leaves nothing behind.
    """
    if not customer_id or not restaurant_id or not items:
        raise InvalidRequest("Missing required fields")

    customer_id = validate_object_id(customer_id, "customer")
    restaurant_id = validate_object_id(restaurant_id, "restaurant")

    if not await Customer.filter(id=customer_id).exists():
        raise NotFound("Customer not found")
    if not await Restaurant.filter(id=restaurant_id).exists():
        raise NotFound("Restaurant not found")

    requested = []
    for it in items:
        mid = it.get("menu_item_id")
        qty = it.get("quantity")
        if not mid or not qty:
            raise InvalidRequest("Invalid item details")
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise InvalidRequest(f"Quantity for menu item {mid} must be a positive integer")
        if qty > MAX_ITEM_QUANTITY:
            raise InvalidRequest(f"Quantity for menu item {mid} cannot exceed {MAX_ITEM_QUANTITY}")
        requested.append((validate_object_id(mid, "menu item"), qty))

    menu_items = await MenuItem.filter(id__in=[mid for mid, _ in requested])
    menu_map = {m.id: m for m in menu_items}

    total = Decimal("0")
    lines = []
    for mid, qty in requested:
        menu = menu_map.get(mid)
        if not menu:
            raise NotFound(f"Menu item with ID {mid} not found")
        line_total = menu.price * qty
        total += line_total
        lines.append((menu, qty, line_total))
    if total > MAX_AMOUNT:
        raise InvalidRequest("Order total exceeds the maximum allowed amount")

    delivery_date = parse_delivery_time(delivery_time)

    async with in_transaction() as conn:
        # 1. Order header, with the total already known
        order = await Order.create(
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            order_status=OrderStatus.PENDING,
            total_amount=total,
            delivery_time=delivery_date,
            using_db=conn,
        )

        # 2. Line items bound to the new order id
        for menu, qty, line_total in lines:
            await OrderItem.create(
                order=order,
                menu_item=menu,
                quantity=qty,
                unit_price=menu.price,
                line_total=line_total,
                using_db=conn,
            )

        # 3. Load the item references back onto the order
        await order.fetch_related("items", using_db=conn)

    log.info(f"Order {order.id} placed for customer {customer_id}: {len(lines)} item(s), total {total}.")
    return order


async def get_order_by_id(order_id: str) -> Order:
    """Fetches order details with items, including the menu item name/price."""
    order_id = validate_object_id(order_id, "order")
    # Pre-fetch related entities to minimize DB queries (N+1 avoidance)
    order = await Order.get_or_none(id=order_id).prefetch_related("items", "items__menu_item")
    if not order:
        raise NotFound("Order not found")
    return order


# ----------- Order Status State Machine -----------

async def list_available_orders() -> List[Order]:
    """Orders still waiting for a delivery partner, in storage order."""
    return await Order.filter(order_status=OrderStatus.PENDING).prefetch_related("items")


async def accept_order(order_id: str, personnel: DeliveryPersonnel) -> Order:
    """
    Claims a Pending order for `personnel`.

    The status check and the assignment are one conditional UPDATE, so of two
    concurrent accepts exactly one matches the row; the other gets Conflict.
    """
    if not personnel.is_available:
        raise Forbidden("You are currently unavailable to accept deliveries")
    order_id = validate_object_id(order_id, "order")

    updated = await Order.filter(id=order_id, order_status=OrderStatus.PENDING).update(
        order_status=OrderStatus.ACCEPTED,
        delivery_personnel=personnel,
        updated_at=timezone.now(),
    )
    if not updated:
        if not await Order.filter(id=order_id).exists():
            raise NotFound("Order not found")
        log.warning(f"Personnel {personnel.id} lost the race for order {order_id}.")
        raise Conflict("Order is no longer available")

    log.info(f"Order {order_id} accepted by personnel {personnel.id}.")
    return await Order.get(id=order_id).prefetch_related("items")


async def set_order_status(
    order_id: str,
    new_status: Optional[str],
    transitions: Optional[TransitionTable] = None,
) -> Tuple[Order, bool]:
    """
    Moves an order to `new_status`. Returns the order and whether anything changed.

    Setting the status the order already has is a successful no-op.
    """
    try:
        status = OrderStatus(new_status)
    except ValueError:
        raise InvalidRequest("Invalid or missing status") from None
    order_id = validate_object_id(order_id, "order")
    transitions = transitions or DEFAULT_TRANSITIONS

    order = await Order.get_or_none(id=order_id).prefetch_related("items")
    if not order:
        raise NotFound("Order not found")

    current = order.order_status
    if current == status:
        return order, False

    if not transitions.allows(current, status):
        raise Conflict(f"Order cannot move from {current.value} to {status.value}")

    # Only write if nobody changed the status since we read it
    updated = await Order.filter(id=order_id, order_status=current).update(
        order_status=status,
        updated_at=timezone.now(),
    )
    if not updated:
        raise Conflict("Order status was changed by another request")

    await order.refresh_from_db()
    log.info(f"Order {order_id} status {current.value} -> {status.value}.")
    return order, True
