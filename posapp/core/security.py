import logging
from typing import Any, Dict

import jwt
from pydantic import ValidationError as PydanticValidationError

from posapp.core.config import settings
from posapp.core.exceptions import AuthenticationError
from posapp.schemas.auth import TenantClaims

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> TenantClaims:
    """
    Verify a bearer token and validate its payload into TenantClaims.
    Any failure surfaces as AuthenticationError (401).
    """
    try:
        payload: Dict[str, Any] = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Authentication failed: Token expired")
        raise AuthenticationError("TOKEN_EXPIRED")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Authentication failed: Invalid token ({e.__class__.__name__})")
        raise AuthenticationError("Invalid token")

    try:
        return TenantClaims.model_validate(payload)
    except PydanticValidationError:
        logger.warning("Authentication failed: Token payload has no tenant context")
        raise AuthenticationError("Invalid token")
