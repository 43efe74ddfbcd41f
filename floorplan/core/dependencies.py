"""
Authentication dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Dict
import structlog

from floorplan.core.auth import decode_access_token

logger = structlog.get_logger(__name__)
security = HTTPBearer()


def _decode(credentials: HTTPAuthorizationCredentials) -> Dict:
    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> int:
    """Get current user ID from JWT token"""
    payload = _decode(credentials)
    user_id = int(payload["sub"])
    logger.debug("User authenticated", user_id=user_id)
    return user_id


async def get_restaurant_id(
    restaurant_id: int,
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> int:
    """Resolve the path restaurant and check the token was issued for it"""
    payload = _decode(credentials)
    if payload.get("restaurant_id") != restaurant_id:
        logger.warning(
            "Cross-restaurant access denied",
            user_id=payload.get("sub"),
            restaurant_id=restaurant_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this restaurant"
        )
    return restaurant_id
