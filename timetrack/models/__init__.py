from __future__ import annotations

# Importing the models registers them with ``Base.metadata``.
from .login_session import LoginSession
from .timer import Timer
from .user import User

__all__ = ["LoginSession", "Timer", "User"]
