import logging
from typing import List, Optional, Tuple

import jwt
from tortoise.exceptions import IntegrityError

from foodorders.core.errors import Conflict, InvalidRequest, NotFound, Forbidden, Unauthorized
from foodorders.core.security import hash_pw, verify_pw, create_token, decode_token
from foodorders.models.personnel import DeliveryPersonnel, PersonnelRole

log = logging.getLogger("foodorders.personnel")

TOKEN_VERSION_ATTEMPTS = 5


async def register_personnel(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    contact_details: Optional[str],
    vehicle_type: Optional[str],
    role: Optional[str] = None,
) -> DeliveryPersonnel:
    if not name or not email or not password or not contact_details or not vehicle_type:
        raise InvalidRequest("All fields are required")
    try:
        role = PersonnelRole(role) if role else PersonnelRole.DELIVERY
    except ValueError:
        raise InvalidRequest(f"{role} is an invalid role") from None

    email = email.strip().lower()
    if await DeliveryPersonnel.filter(email=email).exists():
        raise InvalidRequest("User already exists")

    try:
        personnel = await DeliveryPersonnel.create(
            name=name,
            email=email,
            password_hash=hash_pw(password),
            contact_details=contact_details,
            vehicle_type=vehicle_type,
            role=role,
        )
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email
        raise InvalidRequest(f"Email {email} is already registered") from None

    log.info(f"Delivery personnel {personnel.id} registered ({role.value}).")
    return personnel


async def _advance_token_version(personnel: DeliveryPersonnel) -> int:
    """
    Moves token_version from the value we last saw to the next one.

    The write is conditional on that value, so two overlapping logins can
    never both claim the same version; the loser re-reads and tries again.
    """
    for _ in range(TOKEN_VERSION_ATTEMPTS):
        seen = personnel.token_version
        updated = await DeliveryPersonnel.filter(id=personnel.id, token_version=seen).update(
            token_version=seen + 1
        )
        if updated:
            personnel.token_version = seen + 1
            return personnel.token_version
        await personnel.refresh_from_db(fields=["token_version"])
    log.warning(f"Personnel {personnel.id} could not claim a token version after {TOKEN_VERSION_ATTEMPTS} attempts.")
    raise Conflict("Too many simultaneous logins, please try again")


async def login_personnel(email: Optional[str], password: Optional[str]) -> Tuple[DeliveryPersonnel, str]:
    """
    Verifies credentials, bumps tokenVersion and issues a token for the new version.

    Every token minted before this login stops authenticating.
    """
    if not email or not password:
        raise InvalidRequest("Email and password are required")

    personnel = await DeliveryPersonnel.get_or_none(email=email.strip().lower())
    if not personnel:
        raise Unauthorized("Invalid email! Please SignUp via Register")
    if personnel.role != PersonnelRole.DELIVERY:
        raise Forbidden("Access denied. Not a delivery personnel.")
    if not verify_pw(personnel.password_hash, password):
        raise Unauthorized("Password does not match Username")

    version = await _advance_token_version(personnel)
    token = create_token(personnel.id, version)
    log.info(f"Personnel {personnel.id} logged in (token version {version}).")
    return personnel, token


async def authenticate(token: Optional[str]) -> DeliveryPersonnel:
    """Resolves a bearer token to the personnel it was issued to."""
    if not token:
        raise Unauthorized("Not authorized, no token")
    try:
        claims = decode_token(token)
    except jwt.InvalidTokenError as e:
        log.warning(f"Authorization error: {e}")
        raise Unauthorized("Not authorized, token failed") from None

    personnel = await DeliveryPersonnel.get_or_none(id=claims["sub"])
    if not personnel:
        raise Unauthorized("Not authorized, personnel not found")
    if claims["ver"] != personnel.token_version:
        raise Unauthorized("Not authorized, token has been superseded")
    return personnel


async def list_delivery_personnel() -> List[DeliveryPersonnel]:
    personnel = await DeliveryPersonnel.filter(role=PersonnelRole.DELIVERY)
    if not personnel:
        raise NotFound("No delivery personnel found")
    return personnel


async def set_availability(personnel: DeliveryPersonnel, is_available: Optional[bool]) -> DeliveryPersonnel:
    """Toggles the caller's own flag; orders already accepted keep their assignee."""
    if not isinstance(is_available, bool):
        raise InvalidRequest("isAvailable must be a boolean")
    personnel.is_available = is_available
    await personnel.save(update_fields=["is_available", "updated_at"])
    log.info(f"Personnel {personnel.id} availability set to {is_available}.")
    return personnel
