from enum import Enum
from tortoise import fields, models
from foodorders.models.order import new_object_id


class PersonnelRole(str, Enum):
    DELIVERY = "Delivery"
    ADMIN = "Admin"


class DeliveryPersonnel(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    name = fields.CharField(max_length=255)
    email = fields.CharField(max_length=255, unique=True)
    password_hash = fields.CharField(max_length=255)
    contact_details = fields.CharField(max_length=255, null=True)
    vehicle_type = fields.CharField(max_length=64, null=True)
    is_available = fields.BooleanField(default=True)
    # Bumped on every login; tokens minted under an older value are rejected
    token_version = fields.IntField(default=0)
    role = fields.CharEnumField(PersonnelRole, default=PersonnelRole.DELIVERY)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "delivery_personnel"
        indexes = [
            ("role",),
        ]
