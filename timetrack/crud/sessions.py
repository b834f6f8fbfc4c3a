"""Session store: opaque login tokens mapped to users."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..core.security import new_session_token
from ..db.session import storage_errors
from ..models.login_session import LoginSession
from ..models.user import User


def create_session(db: Session, user_id: int) -> str:
    session_id = new_session_token()
    with storage_errors(db, "session insert"):
        db.add(LoginSession(session_id=session_id, user_id=user_id))
        db.commit()
    return session_id


def find_user_by_session(db: Session, session_id: str | None) -> User | None:
    # Unknown tokens and sessions whose user is gone both come back as None.
    if not session_id:
        return None
    with storage_errors(db, "session lookup"):
        user_id = db.execute(
            select(LoginSession.user_id).where(LoginSession.session_id == session_id).limit(1)
        ).scalar_one_or_none()
        if user_id is None:
            return None
        return db.execute(select(User).where(User.id == user_id).limit(1)).scalars().first()


def delete_session(db: Session, session_id: str | None) -> None:
    if not session_id:
        return
    with storage_errors(db, "session delete"):
        db.execute(delete(LoginSession).where(LoginSession.session_id == session_id))
        db.commit()
