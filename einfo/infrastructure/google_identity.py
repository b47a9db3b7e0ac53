"""Google Identity: verifies Google Sign-In ID tokens.

Invariants:
    - Tokens are checked against google_client_id as audience
    - A token that fails verification raises AuthenticationError("Invalid Google token")
    - Network failures reaching Google's certificate endpoint raise ExternalServiceError

Design Decisions:
    - google-auth is synchronous; verification runs in a worker thread
    - GoogleIdentity is a plain dataclass so routes and tests never touch google-auth types
"""

import asyncio
import logging
from dataclasses import dataclass

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from einfo.core.errors import AuthenticationError, ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class GoogleIdentity:
    google_id: str
    email: str
    name: str
    avatar_url: str | None
    email_verified: bool


class GoogleIdentityVerifier:
    """Verify ID tokens issued to one OAuth client."""

    def __init__(self, client_id: str):
        self._client_id = client_id
        self._request = google_requests.Request()

    async def verify(self, token: str) -> GoogleIdentity:
        try:
            payload = await asyncio.to_thread(
                id_token.verify_oauth2_token, token, self._request, self._client_id,
            )
        except google_exceptions.TransportError as e:
            logger.error(f"Google certificate fetch failed: {e}")
            raise ExternalServiceError("google", "Google sign-in is unavailable")
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.info(f"Google token rejected: {e}")
            raise AuthenticationError("Invalid Google token")

        return GoogleIdentity(
            google_id=payload["sub"],
            email=payload.get("email", ""),
            name=payload.get("name") or payload.get("email", "").split("@")[0],
            avatar_url=payload.get("picture"),
            email_verified=bool(payload.get("email_verified", False)),
        )
