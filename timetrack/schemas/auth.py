from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

AUTH_ERROR_MESSAGE = "Wrong username or password"
SIGN_ERROR_MESSAGE = "User with this name already exists"


class IndexState(BaseModel):
    """What the landing page needs to know about the visitor."""

    user: Optional[str] = None
    authError: Optional[str] = None
    signError: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {"user": "alice", "authError": None, "signError": None}
        },
    }
