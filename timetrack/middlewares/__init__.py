from __future__ import annotations

from .request_id import RequestIdMiddleware, principal_ctx_var, request_id_ctx_var
from .session_resolver import SessionResolverMiddleware

__all__ = [
    "RequestIdMiddleware",
    "SessionResolverMiddleware",
    "request_id_ctx_var",
    "principal_ctx_var",
]
