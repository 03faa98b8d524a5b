from decimal import Decimal

import pytest_asyncio

from foodorders.core.db import init_db, close_db
from foodorders.core.security import hash_pw
from foodorders.models.order import Restaurant, MenuItem
from foodorders.models.user import Customer
from foodorders.models.personnel import DeliveryPersonnel


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory SQLite database per test."""
    await init_db("sqlite://:memory:")
    yield
    await close_db()


@pytest_asyncio.fixture
async def catalog(db):
    """A customer and a restaurant with two menu items: A at 9.99 and B at 5.00."""
    customer = await Customer.create(first_name="Ada", email_id="ada@example.com", password_hash="x")
    restaurant = await Restaurant.create(restaurant_name="Awesome Pizza Place", address="123 Pizza St")
    item_a = await MenuItem.create(restaurant=restaurant, item_name="Cheeseburger", price=Decimal("9.99"))
    item_b = await MenuItem.create(restaurant=restaurant, item_name="Fries", price=Decimal("5.00"))
    return {"customer": customer, "restaurant": restaurant, "a": item_a, "b": item_b}


async def make_personnel(email: str, password: str = "secret", **kwargs) -> DeliveryPersonnel:
    return await DeliveryPersonnel.create(
        name=email.split("@")[0],
        email=email,
        password_hash=hash_pw(password),
        contact_details="123-456-7890",
        vehicle_type="Motorcycle",
        **kwargs,
    )


@pytest_asyncio.fixture
async def rider(db):
    return await make_personnel("rider@example.com")


@pytest_asyncio.fixture
async def second_rider(db):
    return await make_personnel("rider2@example.com")


@pytest_asyncio.fixture
async def personnel_factory(db):
    return make_personnel
