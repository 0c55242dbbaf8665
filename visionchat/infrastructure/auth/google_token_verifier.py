"""
Adapter: Google ID token verifier.

Implements GoogleTokenVerifier port with google-auth. Google's public
certificates are fetched through the requests transport.
"""

import logging
from typing import Optional

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from visionchat.domain.auth.entities import GoogleIdentity
from visionchat.domain.auth.errors import GoogleAuthError
from visionchat.domain.auth.ports import GoogleTokenVerifier

logger = logging.getLogger(__name__)


class GoogleIdTokenVerifier(GoogleTokenVerifier):
    """Checks signature, issuer and audience of Google ID tokens."""

    def __init__(self, client_id: Optional[str]) -> None:
        self._client_id = client_id
        self._request = google_requests.Request()

    def verify(self, credential: str) -> GoogleIdentity:
        if not self._client_id:
            logger.error("Google sign-in attempted without GOOGLE_CLIENT_ID")
            raise GoogleAuthError("Google sign-in is not configured")

        try:
            claims = id_token.verify_oauth2_token(
                credential, self._request, self._client_id
            )
        except ValueError as exc:
            logger.warning("Google token verification failed: %s", exc)
            raise GoogleAuthError() from exc

        if not claims or "sub" not in claims:
            raise GoogleAuthError()

        return GoogleIdentity(
            google_id=claims["sub"],
            email=claims.get("email"),
            email_verified=bool(claims.get("email_verified", False)),
            name=claims.get("name"),
            picture=claims.get("picture"),
            locale=claims.get("locale"),
        )
