"""
Tenant auth dependencies.

Every tenant route carries {tenant_id} in its path; the bearer token's
tenant_id claim must match it.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from posapp.core.exceptions import AccessDeniedError, AuthenticationError
from posapp.core.security import decode_access_token
from posapp.schemas.auth import TenantClaims
from posapp.services.clock import Clock, utc_now

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TenantClaims:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")
    return decode_access_token(credentials.credentials)


def require_tenant(tenant_id: str, claims: TenantClaims = Depends(get_token_claims)) -> str:
    """Resolve the path's tenant_id, rejecting tokens issued for another tenant."""
    if claims.tenant_id != tenant_id:
        logger.warning(
            "Tenant mismatch",
            extra={"token_tenant_id": claims.tenant_id, "path_tenant_id": tenant_id},
        )
        raise AccessDeniedError("Unauthorized: Tenant ID mismatch")
    return tenant_id


def get_clock() -> Clock:
    """Time source for attendance; overridden in tests."""
    return utc_now
