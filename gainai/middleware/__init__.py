"""Middleware exports."""

from gainai.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
