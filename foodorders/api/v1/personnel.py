import logging
from fastapi import APIRouter, Depends, HTTPException, status
from foodorders.api.deps import require_personnel
from foodorders.core.errors import OrderServiceError
from foodorders.models.personnel import DeliveryPersonnel
from foodorders.schemas.response import SuccessResponse
from foodorders.schemas.order import OrderStatusUpdate, serialize_order
from foodorders.schemas.personnel import (
    PersonnelRegisterRequest,
    LoginRequest,
    AvailabilityRequest,
    serialize_personnel,
)
from foodorders.services import personnel_service
from foodorders.services.order_service import accept_order, set_order_status, list_available_orders

router = APIRouter()
log = logging.getLogger("foodorders.api.personnel")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def register_endpoint(payload: PersonnelRegisterRequest):
    try:
        personnel = await personnel_service.register_personnel(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            contact_details=payload.contact_details,
            vehicle_type=payload.vehicle_type,
            role=payload.role,
        )
        return SuccessResponse(
            message="Welcome! Delivery Partner registered successfully",
            data={"id": personnel.id},
        )
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error registering personnel: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/login", response_model=SuccessResponse)
async def login_endpoint(payload: LoginRequest):
    """Issues a fresh bearer token; tokens from earlier logins stop working."""
    try:
        personnel, token = await personnel_service.login_personnel(payload.email, payload.password)
        return SuccessResponse(message="Login successful", data={"id": personnel.id, "token": token})
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Login error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("", response_model=SuccessResponse)
async def list_personnel_endpoint():
    try:
        personnel = await personnel_service.list_delivery_personnel()
        return SuccessResponse(
            message="Delivery personnel fetched successfully",
            data=[serialize_personnel(p) for p in personnel],
        )
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error fetching delivery personnel: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch delivery personnel")


@router.put("/availability", response_model=SuccessResponse)
async def availability_endpoint(
    payload: AvailabilityRequest,
    personnel: DeliveryPersonnel = Depends(require_personnel),
):
    try:
        personnel = await personnel_service.set_availability(personnel, payload.is_available)
        return SuccessResponse(data=serialize_personnel(personnel))
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error setting availability: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error setting availability")


@router.get("/orders", response_model=SuccessResponse)
async def available_orders_endpoint(personnel: DeliveryPersonnel = Depends(require_personnel)):
    """Orders still waiting for a delivery partner."""
    try:
        orders = await list_available_orders()
        return SuccessResponse(data=[serialize_order(o) for o in orders])
    except Exception as e:
        log.error(f"Error retrieving available orders: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error retrieving available orders")


@router.put("/orders/{order_id}/accept", response_model=SuccessResponse)
async def accept_order_endpoint(order_id: str, personnel: DeliveryPersonnel = Depends(require_personnel)):
    try:
        order = await accept_order(order_id, personnel)
        return SuccessResponse(message="Order accepted successfully", data=serialize_order(order))
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error accepting order {order_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error accepting order")


@router.put("/orders/{order_id}/status", response_model=SuccessResponse)
async def update_status_endpoint(
    order_id: str,
    payload: OrderStatusUpdate,
    personnel: DeliveryPersonnel = Depends(require_personnel),
):
    """
    Updates status (e.g. 'Preparing', 'OutForDelivery', 'Delivered').
    """
    try:
        order, changed = await set_order_status(order_id, payload.status)
        message = (
            "Order status updated successfully"
            if changed
            else "Order status is already set to the requested status"
        )
        return SuccessResponse(message=message, data=serialize_order(order))
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error updating order status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error updating order status")
