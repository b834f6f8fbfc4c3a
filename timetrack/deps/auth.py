from __future__ import annotations

from fastapi import Request

from ..core.errors import AuthenticationError
from ..models.user import User


def current_user(request: Request) -> User | None:
    """Whatever the session resolver attached; ``None`` for anonymous requests."""
    return getattr(request.state, "user", None)


def require_user(request: Request) -> User:
    """Capability check for protected routes.

    Both the raw session token and the resolved user must be present. Routers
    that hold only protected routes declare this as a router-level dependency.
    """

    session_id = getattr(request.state, "session_id", None)
    user = current_user(request)
    if not session_id or user is None:
        raise AuthenticationError("Authentication required")
    return user
