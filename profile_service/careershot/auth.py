"""
Bearer-token gate for the lookup endpoint.

Tokens are HS256 JWTs signed with AUTH_SECRET. When AUTH_AUTHORITY or
AUTH_AUDIENCE are configured, the `iss` / `aud` claims must match them.
AUTH_MODE=bypass admits every caller and is meant for local development.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import jwt
from fastapi import HTTPException, Request, status
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from .config import Settings

logger = logging.getLogger(__name__)

ALGORITHMS = ["HS256"]


def extract_bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    """Extract bearer token from Authorization header."""
    if not authorization_header:
        return None

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


class TokenValidator:
    """Validates HS256 bearer tokens against the configured issuer and audience."""

    def __init__(self, secret: str, issuer: str = "", audience: str = "") -> None:
        self._secret = secret
        self._issuer = issuer or None
        self._audience = audience or None

    def validate_token(self, token: str) -> Optional[dict[str, Any]]:
        """Return the token claims if valid, None otherwise."""
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=ALGORITHMS,
                issuer=self._issuer,
                audience=self._audience,
                options={
                    "verify_exp": True,
                    "verify_iss": self._issuer is not None,
                    "verify_aud": self._audience is not None,
                },
            )
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            return None
        except InvalidTokenError as e:
            logger.warning("Invalid token: %s", e)
            return None


class BearerAuth:
    """
    FastAPI dependency admitting or rejecting a caller.

    Returns the validated claims (an empty dict in bypass mode) or raises
    401 before the handler runs.
    """

    def __init__(self, settings: Settings) -> None:
        self.bypass = settings.auth_mode == "bypass"
        self.validator: Optional[TokenValidator] = None
        if not self.bypass:
            self.validator = TokenValidator(
                settings.auth_secret,
                issuer=settings.auth_authority,
                audience=settings.auth_audience,
            )
        logger.info("Authentication initialized in %s mode", settings.auth_mode)

    def __call__(self, request: Request) -> dict[str, Any]:
        if self.bypass:
            return {}

        token = extract_bearer_token(request.headers.get("Authorization"))
        claims = self.validator.validate_token(token) if token and self.validator else None
        if claims is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        logger.debug("Caller authenticated, sub: %s", claims.get("sub"))
        return claims
