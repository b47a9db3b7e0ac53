"""Auth Routes: Google sign-in, username availability, token verification.

Invariants:
    - Only Google ID tokens are accepted; there is no password login for users
    - Tokens are stateless; logout is a client-side concern and always succeeds
    - Username availability is checked case-insensitively after format validation
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from einfo.api.dependencies import get_current_user, get_identity_verifier
from einfo.api.responses import ok
from einfo.core.errors import RequestRejectedError
from einfo.core.profile_shape import shape_user
from einfo.core.usernames import check_username, normalize_username
from einfo.infrastructure.database import get_db
from einfo.infrastructure.google_identity import GoogleIdentityVerifier
from einfo.infrastructure.security import create_user_token
from einfo.models.user import User
from einfo.schemas.auth import GoogleLogin
from einfo.services import accounts

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/google")
async def google_login(
    body: GoogleLogin,
    db: AsyncSession = Depends(get_db),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier),
):
    identity = await verifier.verify(body.google_token)
    user, created = await accounts.sign_in_with_google(db, identity, body.username)
    logger.info(
        "User signed up" if created else "User signed in",
        extra={"user_id": user.id, "username": user.username},
    )
    return ok(
        {"token": create_user_token(user), "user": shape_user(user)},
        "Login successful",
    )


@router.get("/check-username/{username}")
async def check_username_availability(
    username: str, db: AsyncSession = Depends(get_db),
):
    error = check_username(username)
    if error:
        raise RequestRejectedError(error)
    taken = await accounts.username_taken(db, normalize_username(username))
    return ok({"available": not taken})


@router.post("/logout")
async def logout(user: User = Depends(get_current_user)):
    logger.info("User logged out", extra={"user_id": user.id})
    return ok(message="Logout successful")


@router.get("/verify")
async def verify_token(user: User = Depends(get_current_user)):
    return ok({"user": shape_user(user)})
