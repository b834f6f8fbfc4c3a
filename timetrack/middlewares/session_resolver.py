"""Per-request identity resolution from the session cookie.

The resolver only *attaches* identity. It never turns a request away: an
anonymous request, an unknown token and a token whose user has disappeared all
continue with ``request.state.user = None``. Rejecting is the job of
``timetrack.deps.auth.require_user``, which protected routers declare.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..core.errors import StorageError, envelope_for
from ..crud.sessions import find_user_by_session
from ..models.user import User
from .request_id import principal_ctx_var

logger = logging.getLogger("timetrack.auth")


class SessionResolverMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, cookie_name: str = "sessionId") -> None:  # type: ignore[override]
        super().__init__(app)
        self.cookie_name = cookie_name

    @staticmethod
    def _resolve(session_factory, session_id: str) -> User | None:
        db = session_factory()
        try:
            return find_user_by_session(db, session_id)
        finally:
            db.close()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session_id = request.cookies.get(self.cookie_name) or None
        request.state.session_id = session_id
        request.state.user = None
        request.state.principal = None

        if session_id:
            try:
                user = await run_in_threadpool(self._resolve, request.app.state.session_factory, session_id)
            except StorageError as exc:
                logger.error("session.resolve.failed", exc_info=exc)
                return envelope_for(exc)
            if user is not None:
                request.state.user = user
                request.state.principal = user.username
                principal_ctx_var.set(user.username)

        return await call_next(request)
