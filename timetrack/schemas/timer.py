"""Pydantic schemas that describe timer payloads for the API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TimerCreate(BaseModel):
    description: Optional[str] = Field(default=None, max_length=255)

    model_config = {
        "json_schema_extra": {
            "example": {"description": "write spec"}
        },
    }


class TimerCreated(BaseModel):
    id: str


class TimerOut(BaseModel):
    id: int
    timer_id: Optional[str] = None
    user_id: int
    description: Optional[str] = None
    is_active: bool
    start: int
    end: int
    progress: int
    duration: int
