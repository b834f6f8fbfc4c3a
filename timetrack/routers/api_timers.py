from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, StorageError
from ..crud.timers import create_timer, list_timers, stop_timer
from ..db.session import get_db
from ..deps.auth import require_user
from ..models.user import User
from ..schemas.timer import TimerCreate, TimerCreated, TimerOut
from ..services.timecalc import now_ms, timer_view

router = APIRouter(prefix="/api/timers", tags=["timers"], dependencies=[Depends(require_user)])
logger = logging.getLogger("timetrack.timers")

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _timer_payload(request: Request) -> TimerCreate:
    """Accept the description as JSON or as a classic form post."""
    content_type = (request.headers.get("content-type") or "").lower()
    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        data = {key: value for key, value in form.items() if isinstance(value, str)}
    elif content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
            ) from exc
    else:
        data = {}
    if not isinstance(data, dict):
        raise RequestValidationError(
            [{"type": "model_type", "loc": ("body",), "msg": "Body must be a JSON object", "input": None}]
        )
    try:
        return TimerCreate.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.post("", response_model=TimerCreated, status_code=201)
def api_create_timer(
    payload: TimerCreate = Depends(_timer_payload),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    timer = create_timer(db, user.id, payload.description)
    logger.info("timer.created", extra={"extra_data": {"timer_id": timer.timer_id}})
    return TimerCreated(id=timer.timer_id)


@router.get("", response_model=list[TimerOut])
def api_list_timers(
    is_active: bool | None = Query(default=None, alias="isActive"),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    now = now_ms()
    return [timer_view(timer, now) for timer in list_timers(db, user.id, is_active=is_active)]


@router.post("/{timer_id}/stop", status_code=204)
def api_stop_timer(
    timer_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    is_active = stop_timer(db, timer_id, user_id=user.id)
    if is_active is None:
        raise NotFoundError("Timer not found")
    if is_active:
        raise StorageError("Timer is still active after stop", details={"timer_id": timer_id})
    logger.info("timer.stopped", extra={"extra_data": {"timer_id": timer_id}})
    return Response(status_code=204)
