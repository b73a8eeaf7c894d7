"""Role-based permission decorators for agency team members."""

from enum import Enum
from functools import wraps
from typing import Callable

from gainai.exceptions import ForbiddenException, UnauthorizedException
from gainai.utils.request_context import get_current_user_id_or_none, get_current_user_role


class TeamRole(str, Enum):
    """Roles of agency team members (the dashboard's operators)."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


def require_role(*allowed_roles: TeamRole | str) -> Callable:
    """Decorator that enforces role-based access control.

    Usage:
        @router.post("/upload")
        @require_role(TeamRole.ADMIN, TeamRole.MANAGER)
        async def upload_csv(...):
            ...

    Args:
        *allowed_roles: Roles that are allowed to access the endpoint

    Returns:
        Decorator function
    """
    role_values = set()
    for role in allowed_roles:
        if isinstance(role, TeamRole):
            role_values.add(role.value)
        else:
            role_values.add(role)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if get_current_user_id_or_none() is None:
                raise UnauthorizedException()

            if get_current_user_role() not in role_values:
                raise ForbiddenException()

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_operator() -> Callable:
    """Decorator that requires a team role allowed to change data."""
    return require_role(TeamRole.ADMIN, TeamRole.MANAGER, TeamRole.EDITOR)


def require_team_member() -> Callable:
    """Decorator that requires any team role, including read-only viewers."""
    return require_role(*TeamRole)
