"""Token and Password Security: JWT issue/decode for both namespaces, bcrypt hashing.

Invariants:
    - Every token carries a "type" claim; decode_token rejects a token of the other type
    - User tokens: sub, email, username, type="user", iat, exp
    - Admin tokens: adminId, email, role, type="admin", iat, exp
    - Expired tokens raise AuthenticationError("Token has expired"); anything
      else unreadable raises AuthenticationError("Invalid token")
    - Password hashing uses bcrypt cost 12, run off the event loop

Design Decisions:
    - One signing secret for both namespaces, separated by the type claim
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from einfo.config import get_settings
from einfo.core.domain_types import TokenType
from einfo.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def _encode(claims: dict[str, Any], lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_user_token(user) -> str:
    """Issue a user-namespace JWT for a User row."""
    settings = get_settings()
    return _encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "username": user.username,
            "type": TokenType.USER.value,
        },
        timedelta(minutes=settings.jwt_access_token_expire_minutes),
    )


def create_admin_token(admin) -> str:
    """Issue an admin-namespace JWT for an Admin row."""
    settings = get_settings()
    return _encode(
        {
            "adminId": str(admin.id),
            "email": admin.email,
            "role": admin.role,
            "type": TokenType.ADMIN.value,
        },
        timedelta(hours=settings.admin_token_expire_hours),
    )


def decode_token(token: str, expected_type: TokenType) -> dict[str, Any]:
    """Verify signature, expiry and namespace; return the claims."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.PyJWTError as e:
        logger.info(f"Rejected token: {e}")
        raise AuthenticationError("Invalid token")

    if claims.get("type") != expected_type.value:
        raise AuthenticationError("Invalid token")
    subject_key = "sub" if expected_type is TokenType.USER else "adminId"
    if not claims.get(subject_key):
        raise AuthenticationError("Invalid token")
    return claims


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its bcrypt hash. Malformed hashes never match."""
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except ValueError as e:
        logger.error(f"Error verifying password: {e}")
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)
