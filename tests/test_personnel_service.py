import asyncio
import pytest

from foodorders.core.errors import Forbidden, InvalidRequest, NotFound, Unauthorized
from foodorders.core.security import create_token, decode_token, verify_pw
from foodorders.models.order import Order, OrderStatus
from foodorders.models.personnel import DeliveryPersonnel, PersonnelRole
from foodorders.services import personnel_service
from foodorders.services.order_service import accept_order, compose_order


@pytest.mark.asyncio
async def test_register_hashes_password(db):
    personnel = await personnel_service.register_personnel(
        "John Doe", "John.Doe@Example.com", "password123", "123-456-7890", "Motorcycle"
    )

    assert personnel.email == "john.doe@example.com"
    assert personnel.role == PersonnelRole.DELIVERY
    assert personnel.is_available is True
    assert personnel.token_version == 0
    assert personnel.password_hash != "password123"
    assert verify_pw(personnel.password_hash, "password123")


@pytest.mark.asyncio
async def test_register_rejects_missing_fields_and_duplicates(db):
    with pytest.raises(InvalidRequest, match="All fields are required"):
        await personnel_service.register_personnel("John", "j@example.com", "pw", None, "Bike")

    await personnel_service.register_personnel("John", "j@example.com", "pw", "555", "Bike")
    with pytest.raises(InvalidRequest, match="already exists"):
        await personnel_service.register_personnel("Jon", "J@example.com", "pw2", "556", "Car")

    with pytest.raises(InvalidRequest, match="invalid role"):
        await personnel_service.register_personnel("Kim", "k@example.com", "pw", "557", "Car", role="Chef")


@pytest.mark.asyncio
async def test_login_bumps_token_version_and_invalidates_old_tokens(personnel_factory):
    rider = await personnel_factory("rider@example.com", "secret")

    _, first_token = await personnel_service.login_personnel("rider@example.com", "secret")
    assert (await personnel_service.authenticate(first_token)).id == rider.id

    personnel, second_token = await personnel_service.login_personnel("RIDER@example.com", "secret")
    assert personnel.token_version == 2

    assert (await personnel_service.authenticate(second_token)).id == rider.id
    with pytest.raises(Unauthorized, match="superseded"):
        await personnel_service.authenticate(first_token)


@pytest.mark.asyncio
async def test_overlapping_logins_get_distinct_versions(personnel_factory):
    rider = await personnel_factory("rider@example.com", "secret")

    results = await asyncio.gather(
        personnel_service.login_personnel("rider@example.com", "secret"),
        personnel_service.login_personnel("rider@example.com", "secret"),
    )
    tokens = [token for _, token in results]
    versions = sorted(decode_token(token)["ver"] for token in tokens)

    assert versions == [1, 2]
    assert (await DeliveryPersonnel.get(id=rider.id)).token_version == 2

    # Only the token minted under the latest version still authenticates
    newest = next(t for t in tokens if decode_token(t)["ver"] == 2)
    oldest = next(t for t in tokens if decode_token(t)["ver"] == 1)
    assert (await personnel_service.authenticate(newest)).id == rider.id
    with pytest.raises(Unauthorized, match="superseded"):
        await personnel_service.authenticate(oldest)


@pytest.mark.asyncio
async def test_login_failures(personnel_factory):
    await personnel_factory("rider@example.com", "secret")
    await personnel_factory("boss@example.com", "secret", role=PersonnelRole.ADMIN)

    with pytest.raises(Unauthorized):
        await personnel_service.login_personnel("nobody@example.com", "secret")
    with pytest.raises(Unauthorized, match="Password does not match"):
        await personnel_service.login_personnel("rider@example.com", "wrong")
    with pytest.raises(Forbidden):
        await personnel_service.login_personnel("boss@example.com", "secret")
    with pytest.raises(InvalidRequest):
        await personnel_service.login_personnel("rider@example.com", None)

    # Failed logins do not advance the epoch
    rider = await DeliveryPersonnel.get(email="rider@example.com")
    assert rider.token_version == 0


@pytest.mark.asyncio
async def test_authenticate_rejects_bad_tokens(personnel_factory):
    rider = await personnel_factory("rider@example.com")

    with pytest.raises(Unauthorized, match="no token"):
        await personnel_service.authenticate(None)
    with pytest.raises(Unauthorized, match="token failed"):
        await personnel_service.authenticate("not.a.jwt")
    with pytest.raises(Unauthorized, match="not found"):
        await personnel_service.authenticate(create_token("d" * 24, 0))

    # Version 0 token is valid until the first login
    assert (await personnel_service.authenticate(create_token(rider.id, 0))).id == rider.id


@pytest.mark.asyncio
async def test_list_delivery_personnel(personnel_factory):
    with pytest.raises(NotFound):
        await personnel_service.list_delivery_personnel()

    await personnel_factory("rider@example.com")
    await personnel_factory("boss@example.com", role=PersonnelRole.ADMIN)

    listed = await personnel_service.list_delivery_personnel()
    assert [p.email for p in listed] == ["rider@example.com"]


@pytest.mark.asyncio
async def test_set_availability(rider):
    updated = await personnel_service.set_availability(rider, False)
    assert updated.is_available is False
    assert (await DeliveryPersonnel.get(id=rider.id)).is_available is False

    with pytest.raises(InvalidRequest):
        await personnel_service.set_availability(rider, None)


@pytest.mark.asyncio
async def test_going_unavailable_keeps_accepted_orders(catalog, rider):
    order = await compose_order(
        catalog["customer"].id,
        catalog["restaurant"].id,
        [{"menu_item_id": catalog["a"].id, "quantity": 1}],
    )
    await accept_order(order.id, rider)

    await personnel_service.set_availability(rider, False)

    stored = await Order.get(id=order.id)
    assert stored.order_status == OrderStatus.ACCEPTED
    assert stored.delivery_personnel_id == rider.id

    fresh = await compose_order(
        catalog["customer"].id,
        catalog["restaurant"].id,
        [{"menu_item_id": catalog["b"].id, "quantity": 1}],
    )
    with pytest.raises(Forbidden):
        await accept_order(fresh.id, rider)
    assert (await Order.get(id=fresh.id)).order_status == OrderStatus.PENDING
