"""
Adapter: JWT session tokens.

Implements TokenService port with PyJWT. Claims: userId, email, type, iat, exp.
"""

import logging
from datetime import timedelta
from typing import Optional

import jwt

from visionchat.domain.auth.entities import AccountType, TokenPayload, utcnow
from visionchat.domain.auth.ports import TokenService

logger = logging.getLogger(__name__)


class JwtTokenService(TokenService):
    """Signs and verifies HMAC JWTs that expire after a fixed lifetime."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(days=7)
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    def sign(self, payload: TokenPayload) -> str:
        now = utcnow()
        claims = {
            "userId": payload.user_id,
            "email": payload.email,
            "type": payload.type.value,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[TokenPayload]:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
            return TokenPayload(
                user_id=str(claims["userId"]),
                email=str(claims["email"]),
                type=AccountType(claims["type"]),
            )
        except jwt.PyJWTError as exc:
            logger.debug("Rejected session token: %s", type(exc).__name__)
            return None
        except (KeyError, ValueError):
            logger.debug("Rejected session token with malformed claims")
            return None
