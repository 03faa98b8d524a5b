from tortoise import fields, models
from foodorders.models.order import new_object_id


class Customer(models.Model):
    id = fields.CharField(max_length=24, primary_key=True, default=new_object_id)
    first_name = fields.CharField(max_length=45)
    last_name = fields.CharField(max_length=255, null=True)
    email_id = fields.CharField(max_length=255, unique=True)
    password_hash = fields.CharField(max_length=255)
    phone_number = fields.CharField(max_length=32, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "customers"
