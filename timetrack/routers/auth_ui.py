"""Browser-facing login, signup and logout.

These routes answer with redirects. Failures are reported through the
``authError``/``signError`` query flags on ``/`` rather than HTTP error codes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, ValidationError
from ..core.security import hash_password
from ..crud.sessions import create_session, delete_session
from ..crud.users import authenticate, create_user
from ..db.session import get_db
from ..deps.auth import current_user
from ..models.user import User
from ..schemas.auth import AUTH_ERROR_MESSAGE, SIGN_ERROR_MESSAGE, IndexState

router = APIRouter(tags=["auth"])
logger = logging.getLogger("timetrack.auth")


def _flag_message(value: str | None, message: str) -> str | None:
    if value == "true":
        return message
    return value or None


@router.get("/", response_model=IndexState)
def index(
    authError: str | None = None,
    signError: str | None = None,
    user: User | None = Depends(current_user),
):
    return IndexState(
        user=user.username if user else None,
        authError=_flag_message(authError, AUTH_ERROR_MESSAGE),
        signError=_flag_message(signError, SIGN_ERROR_MESSAGE),
    )


@router.post("/login")
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        user = authenticate(db, username, password)
    except ValidationError:
        logger.info("auth.login.failed", extra={"extra_data": {"username": username}})
        return RedirectResponse(url="/?authError=true", status_code=302)

    settings = request.app.state.settings
    session_id = create_session(db, user.id)
    logger.info("auth.login.succeeded", extra={"extra_data": {"username": user.username}})
    response = RedirectResponse(url="/", status_code=302)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session_id,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/signup")
def signup(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    if not username or not password:
        return RedirectResponse(url="/?signError=true", status_code=302)

    rounds = request.app.state.settings.BCRYPT_ROUNDS
    try:
        create_user(db, username, hash_password(password, rounds=rounds))
    except ConflictError:
        logger.info("auth.signup.conflict", extra={"extra_data": {"username": username}})
        return RedirectResponse(url="/?signError=true", status_code=302)
    logger.info("auth.signup.succeeded", extra={"extra_data": {"username": username}})
    return RedirectResponse(url="/", status_code=302)


@router.get("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    response = RedirectResponse(url="/", status_code=302)
    session_id = getattr(request.state, "session_id", None)
    if not session_id:
        return response
    delete_session(db, session_id)
    response.delete_cookie(request.app.state.settings.SESSION_COOKIE_NAME, httponly=True)
    return response
