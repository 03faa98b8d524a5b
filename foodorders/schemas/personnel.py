from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from foodorders.models.personnel import DeliveryPersonnel, PersonnelRole


class PersonnelRegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    contact_details: Optional[str] = Field(None, alias="contactDetails")
    vehicle_type: Optional[str] = Field(None, alias="vehicleType")
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AvailabilityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_available: Optional[bool] = Field(None, alias="isAvailable")


class PersonnelResponse(BaseModel):
    """Public view of a delivery partner; the password hash never leaves the service."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    contact_details: Optional[str] = Field(None, alias="contactDetails")
    vehicle_type: Optional[str] = Field(None, alias="vehicleType")
    is_available: bool = Field(alias="isAvailable")
    role: PersonnelRole
    token_version: int = Field(alias="tokenVersion")


def serialize_personnel(personnel: DeliveryPersonnel) -> dict:
    return PersonnelResponse(
        id=personnel.id,
        name=personnel.name,
        email=personnel.email,
        contact_details=personnel.contact_details,
        vehicle_type=personnel.vehicle_type,
        is_available=personnel.is_available,
        role=personnel.role,
        token_version=personnel.token_version,
    ).model_dump(by_alias=True, mode="json")
