"""Authentication middleware for auth-provider JWT validation."""

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from gainai.utils.request_context import (
    clear_all_context,
    set_current_user_id,
    set_current_user_role,
)
from gainai.utils.security import decode_access_token, get_team_role

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that extracts and validates bearer tokens from requests.

    Endpoints decide whether an anonymous request is acceptable; this only
    populates the request context when a valid token is present.
    """

    # Paths that don't require authentication
    EXEMPT_PATHS = {
        "/health",
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and extract authentication context."""
        clear_all_context()

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        token = self._extract_token(request)

        if token:
            payload = decode_access_token(token)
            if payload:
                try:
                    set_current_user_id(uuid.UUID(payload["sub"]))
                    set_current_user_role(get_team_role(payload))
                except (ValueError, TypeError):
                    # Invalid UUID format - context will remain unset
                    logger.debug("Ignoring token with malformed subject")
            else:
                logger.debug(f"Rejected bearer token on {request.method} {request.url.path}")

        response = await call_next(request)

        clear_all_context()

        return response

    def _extract_token(self, request: Request) -> str | None:
        """Extract the bearer token from the Authorization header."""
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header.removeprefix("Bearer ").strip()
        return None
