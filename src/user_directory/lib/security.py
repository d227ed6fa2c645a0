"""
Security utilities for the user directory service.

Handles bearer-token validation and issuance of development tokens.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from user_directory.lib.config import AuthConfig


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class TokenValidator:
    """Validates and issues JWT bearer tokens against a shared secret."""

    def __init__(self, auth_config: AuthConfig):
        self.issuer = auth_config.issuer
        self.audience = auth_config.audience
        self.secret_key = auth_config.secret_key
        self.algorithm = auth_config.algorithm
        self.clock_skew_seconds = auth_config.clock_skew_seconds
        self.token_lifetime_minutes = auth_config.token_lifetime_minutes

    def validate(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a bearer token.

        Issuer, audience, expiry and signature are all checked. Expiry
        honours the configured clock skew.

        Returns:
            The token claims, or None when the token is not acceptable
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.clock_skew_seconds,
                options={"require": ["exp", "iss", "aud"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            return None

    def issue_token(
        self,
        subject: str,
        lifetime_minutes: Optional[int] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """Generate a signed token accepted by this validator."""
        now = datetime.now(timezone.utc)
        minutes = self.token_lifetime_minutes if lifetime_minutes is None else lifetime_minutes

        payload = {
            "sub": subject,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=minutes),
            "jti": secrets.token_urlsafe(16),
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)


def get_token_validator(request: Request) -> TokenValidator:
    return request.app.state.token_validator


async def require_authentication(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    validator: TokenValidator = Depends(get_token_validator),
) -> Dict[str, Any]:
    """
    FastAPI dependency rejecting requests without a valid bearer token.

    Raises HTTPException(401) before the route handler runs.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = validator.validate(credentials.credentials)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": 'Bearer error="invalid_token"'},
        )

    return claims
