from __future__ import annotations

from .auth import current_user, require_user

__all__ = ["current_user", "require_user"]
