from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from foodorders.models.personnel import DeliveryPersonnel
from foodorders.services.personnel_service import authenticate

auth_scheme = HTTPBearer(auto_error=False)


async def require_personnel(
    creds: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> DeliveryPersonnel:
    """Resolves the bearer token to a delivery partner; raises Unauthorized otherwise."""
    return await authenticate(creds.credentials if creds else None)
