import logging
from fastapi import APIRouter, HTTPException, status
from tortoise.exceptions import IntegrityError
from foodorders.core.errors import OrderServiceError, InvalidRequest, NotFound
from foodorders.core.security import hash_pw
from foodorders.models.order import MenuItem, Restaurant
from foodorders.models.user import Customer
from foodorders.schemas.catalog import CustomerRequest, RestaurantRequest, MenuItemRequest
from foodorders.schemas.response import SuccessResponse
from foodorders.services.order_service import validate_object_id

log = logging.getLogger("foodorders.api.catalog")

router = APIRouter()


@router.post("/customers", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_customer(customer_data: CustomerRequest):
    """Creates a customer account that orders can be placed for."""
    try:
        email = customer_data.email_id.strip().lower()
        if await Customer.filter(email_id=email).exists():
            raise InvalidRequest(f"Email {email} is already registered")

        customer = await Customer.create(
            first_name=customer_data.first_name,
            last_name=customer_data.last_name,
            email_id=email,
            password_hash=hash_pw(customer_data.password),
            phone_number=customer_data.phone_number,
        )
        return SuccessResponse(
            message=f"Customer '{customer.first_name}' created successfully.",
            data={"customer_id": customer.id},
        )
    except OrderServiceError:
        raise
    except IntegrityError:
        raise InvalidRequest("Email is already registered")
    except Exception as e:
        log.error(f"Error creating customer: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error processing request.",
        )


@router.post("/restaurants", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_restaurant(restaurant_data: RestaurantRequest):
    """
    Creates a new restaurant record.
    """
    try:
        owner_id = None
        if restaurant_data.owner:
            owner_id = validate_object_id(restaurant_data.owner, "owner")
            if not await Customer.filter(id=owner_id).exists():
                raise NotFound(f"Customer with ID {owner_id} not found.")

        restaurant = await Restaurant.create(
            restaurant_name=restaurant_data.restaurant_name,
            address=restaurant_data.address,
            owner_id=owner_id,
            cuisine_type=restaurant_data.cuisine_type,
            opening_hours=restaurant_data.opening_hours,
            delivery_zone=restaurant_data.delivery_zone,
        )
        return SuccessResponse(
            message=f"Restaurant '{restaurant.restaurant_name}' created successfully.",
            data={"restaurant_id": restaurant.id},
        )
    except OrderServiceError:
        raise
    except Exception as e:
        log.error(f"Error creating restaurant: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error processing request.",
        )


@router.post("/restaurants/{restaurant_id}/menu", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_menu_item(restaurant_id: str, item_data: MenuItemRequest):
    """
    Adds a menu item to a restaurant. Its price is what orders are charged.
    """
    try:
        # 1. Validate Restaurant Exists
        restaurant_id = validate_object_id(restaurant_id, "restaurant")
        restaurant = await Restaurant.get_or_none(id=restaurant_id)
        if not restaurant:
            raise NotFound(f"Restaurant with ID {restaurant_id} not found.")

        # 2. Create the Menu Item
        menu_item = await MenuItem.create(
            restaurant=restaurant,
            item_name=item_data.item_name,
            description=item_data.description,
            price=item_data.price,
            availability=item_data.availability,
        )

        return SuccessResponse(
            message=f"Successfully added '{item_data.item_name}' to {restaurant.restaurant_name}.",
            data={"menu_item_id": menu_item.id, "price": str(menu_item.price)},
        )
    except OrderServiceError:
        # Re-raise explicit domain errors (like 404)
        raise
    except Exception as e:
        log.error(f"Error adding menu item: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error processing request.",
        )
