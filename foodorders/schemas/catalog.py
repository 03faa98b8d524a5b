from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CustomerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName", max_length=45, description="Customer first name.")
    last_name: Optional[str] = Field(None, alias="lastName")
    email_id: str = Field(..., alias="emailId", description="Login email; stored lowercased.")
    password: str = Field(..., min_length=1)
    phone_number: Optional[str] = Field(None, alias="phoneNumber")


class RestaurantRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    restaurant_name: str = Field(..., alias="restaurantName", description="Name of the restaurant.")
    address: str = Field(..., description="Street address of the restaurant.")
    owner: Optional[str] = Field(None, description="Customer id of the owner, if any.")
    cuisine_type: Optional[str] = Field(None, alias="cuisineType")
    opening_hours: Optional[str] = Field(None, alias="openingHours")
    delivery_zone: Optional[str] = Field(None, alias="deliveryZone")


class MenuItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_name: str = Field(..., alias="itemName", description="Name of the menu item (e.g., Cheeseburger).")
    description: Optional[str] = None
    price: Decimal = Field(..., gt=0, decimal_places=2, description="Selling price of the item.")
    availability: bool = Field(True, description="Whether the menu item can currently be ordered.")
