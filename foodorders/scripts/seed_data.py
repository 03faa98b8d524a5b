# foodorders/scripts/seed_data.py
import asyncio
import logging
from decimal import Decimal
from foodorders.core.db import init_db, close_db
from foodorders.core.security import hash_pw
from foodorders.models.order import Restaurant, MenuItem
from foodorders.models.user import Customer

log = logging.getLogger("foodorders.seed")

async def seed():
    # One customer to order for
    customer, _ = await Customer.get_or_create(
        email_id="demo.customer@example.com",
        defaults={"first_name": "Demo", "last_name": "Customer", "password_hash": hash_pw("demo")},
    )
    log.info(f"Customer: {customer.id}")

    # One restaurant
    rest, _ = await Restaurant.get_or_create(
        restaurant_name="Demo Restaurant",
        defaults={"address": "123 Pizza St, New York", "cuisine_type": "Italian"},
    )
    log.info(f"Restaurant: {rest.id}")

    # Menu items; re-running resets prices (idempotent)
    menu = [("Cheeseburger", "9.99"), ("Fries", "5.00"), ("Cold Drink", "2.50")]
    ids = []
    for name, price in menu:
        item, _ = await MenuItem.get_or_create(restaurant=rest, item_name=name, defaults={"price": Decimal(price)})
        item.price = Decimal(price)
        item.availability = True
        await item.save()
        ids.append(item.id)

    log.info(f"Menu items: {', '.join(ids)}")

async def main():
    logging.basicConfig(level=logging.INFO)
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
