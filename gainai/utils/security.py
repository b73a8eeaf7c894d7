"""Verification of access tokens issued by the hosted auth provider."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from gainai.config import settings

# Lifetime of tokens minted locally when no expiry is given
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def create_access_token(
    user_id: uuid.UUID,
    role: str = "",
    email: str = "",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token in the auth provider's format.

    Production tokens are minted by the auth provider; this is used by scripts
    and tests that share the signing secret.

    Args:
        user_id: User's UUID
        role: Team role (ADMIN, MANAGER, EDITOR or VIEWER)
        email: User's email address
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = DEFAULT_TOKEN_LIFETIME

    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "email": email,
        "app_metadata": {"team_role": role},
        "exp": now + expires_delta,
        "iat": now,
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience

    return jwt.encode(
        payload,
        settings.effective_jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate an access token.

    Args:
        token: JWT token string to decode

    Returns:
        Token payload dictionary if valid, None if invalid/expired
    """
    options = {"require": ["exp", "sub"]}
    try:
        if settings.jwt_audience:
            return jwt.decode(
                token,
                settings.effective_jwt_secret,
                algorithms=[settings.jwt_algorithm],
                audience=settings.jwt_audience,
                options=options,
            )
        return jwt.decode(
            token,
            settings.effective_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={**options, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_team_role(payload: dict[str, Any]) -> str | None:
    """Extract the team role claim from a decoded token."""
    app_metadata = payload.get("app_metadata") or {}
    role = app_metadata.get("team_role")
    return role.upper() if isinstance(role, str) and role else None
