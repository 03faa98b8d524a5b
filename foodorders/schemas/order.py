from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from foodorders.models.order import Order, OrderStatus


class OrderItemRequest(BaseModel):
    """Schema for a single item in the order request."""
    model_config = ConfigDict(populate_by_name=True)

    # Optional so that missing values reach the composer and come back as 400
    menu_item: Optional[str] = Field(None, alias="menuItem")
    quantity: Optional[int] = None


class OrderRequest(BaseModel):
    """Schema for the full order placement request body."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: Optional[str] = Field(None, alias="customerId")
    restaurant_id: Optional[str] = Field(None, alias="restaurantId")
    items: Optional[List[OrderItemRequest]] = None
    delivery_time: Optional[str] = Field(None, alias="deliveryTime")


class OrderStatusUpdate(BaseModel):
    """Schema for updating an order status. Checked against OrderStatus by the service."""
    status: Optional[str] = None


class OrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    customer: str
    restaurant: str
    order_status: OrderStatus = Field(alias="orderStatus")
    total_amount: Decimal = Field(alias="totalAmount")
    delivery_time: Optional[datetime] = Field(None, alias="deliveryTime")
    delivery_personnel: Optional[str] = Field(None, alias="deliveryPersonnel")
    items: List[str]
    order_date: Optional[datetime] = Field(None, alias="orderDate")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class LineItemResponse(BaseModel):
    """Schema for an item inside the detailed order response."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    menu_item: str = Field(alias="menuItem")
    name: Optional[str] = None
    quantity: int
    unit_price: Decimal = Field(alias="unitPrice")
    line_total: Decimal = Field(alias="lineTotal")


class OrderDetailResponse(OrderResponse):
    """Schema for fetching detailed order information."""
    line_items: List[LineItemResponse] = Field(default_factory=list, alias="lineItems")


def _order_fields(order: Order) -> dict:
    return dict(
        id=order.id,
        customer=order.customer_id,
        restaurant=order.restaurant_id,
        order_status=order.order_status,
        total_amount=order.total_amount,
        delivery_time=order.delivery_time,
        delivery_personnel=order.delivery_personnel_id,
        items=[item.id for item in order.items],
        order_date=order.order_date,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def serialize_order(order: Order) -> dict:
    """JSON-ready representation; `order.items` must already be fetched."""
    return OrderResponse(**_order_fields(order)).model_dump(by_alias=True, mode="json")


def serialize_order_detail(order: Order) -> dict:
    """Like serialize_order, plus line items; needs `items__menu_item` prefetched."""
    line_items = [
        LineItemResponse(
            id=item.id,
            menu_item=item.menu_item_id,
            name=item.menu_item.item_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=item.line_total,
        )
        for item in order.items
    ]
    detail = OrderDetailResponse(**_order_fields(order), line_items=line_items)
    return detail.model_dump(by_alias=True, mode="json")
