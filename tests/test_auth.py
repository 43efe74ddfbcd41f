"""
Unit test for JWT authentication
"""

import pytest
from datetime import timedelta
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from floorplan.core.auth import create_access_token, decode_access_token
from floorplan.core.config import get_settings
from floorplan.core.dependencies import get_current_user_id, get_restaurant_id

settings = get_settings()


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_create_access_token():
    """Test JWT token creation"""
    token = create_access_token(
        user_id=7,
        restaurant_id=3,
        role="manager",
        expires_delta=timedelta(hours=24)
    )

    assert isinstance(token, str)

    payload = decode_access_token(token)
    assert payload is not None
    assert payload["sub"] == "7"
    assert payload["restaurant_id"] == 3
    assert payload["role"] == "manager"
    assert "exp" in payload


def test_default_role_is_staff():
    payload = decode_access_token(create_access_token(user_id=1, restaurant_id=1))

    assert payload["role"] == "staff"


def test_decode_invalid_token():
    """Test decoding with invalid token"""
    assert decode_access_token("invalid.token.string.here") is None


def test_decode_wrong_secret():
    token = jwt.encode({"sub": "1", "restaurant_id": 1}, "other-secret", algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None


def test_expired_token():
    """Test that expired tokens are rejected"""
    token = create_access_token(user_id=1, restaurant_id=1, expires_delta=timedelta(hours=-1))

    assert decode_access_token(token) is None


async def test_get_current_user_id():
    token = create_access_token(user_id=42, restaurant_id=1)

    assert await get_current_user_id(bearer(token)) == 42


async def test_get_current_user_id_rejects_token_without_subject():
    token = jwt.encode({"restaurant_id": 1}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user_id(bearer(token))

    assert exc_info.value.status_code == 401


async def test_get_restaurant_id_matches_claim():
    token = create_access_token(user_id=1, restaurant_id=5)

    assert await get_restaurant_id(5, bearer(token)) == 5


async def test_get_restaurant_id_denies_other_restaurant():
    token = create_access_token(user_id=1, restaurant_id=5)

    with pytest.raises(HTTPException) as exc_info:
        await get_restaurant_id(6, bearer(token))

    assert exc_info.value.status_code == 403
