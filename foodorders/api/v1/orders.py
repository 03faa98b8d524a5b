import logging
from fastapi import APIRouter, HTTPException, status
from foodorders.core.errors import OrderServiceError
from foodorders.schemas.response import SuccessResponse
from foodorders.schemas.order import OrderRequest, serialize_order, serialize_order_detail
from foodorders.services.order_service import compose_order, get_order_by_id

router = APIRouter()
log = logging.getLogger("foodorders.api.orders")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_order_endpoint(request_data: OrderRequest):
    """
    Places a new order. Prices come from the menu at the time of the call;
    the order starts out Pending until a delivery partner accepts it.
    """
    try:
        items_data = None
        if request_data.items is not None:
            items_data = [
                {"menu_item_id": item.menu_item, "quantity": item.quantity}
                for item in request_data.items
            ]

        order = await compose_order(
            customer_id=request_data.customer_id,
            restaurant_id=request_data.restaurant_id,
            items=items_data,
            delivery_time=request_data.delivery_time,
        )
        return SuccessResponse(message="Order placed successfully", data=serialize_order(order))
    except OrderServiceError:
        # Mapped to 400/404 by the registered handlers
        raise
    except Exception as e:
        log.error(f"Error placing order: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create order")


@router.get("/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(order_id: str):
    """Fetches details for a specific order, line items included."""
    try:
        order = await get_order_by_id(order_id)
        return SuccessResponse(data=serialize_order_detail(order))
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error fetching order {order_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server failed to fetch order details.")
