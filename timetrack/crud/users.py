"""Credential store: user lookup, creation and password checks."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, ValidationError
from ..core.security import verify_password
from ..db.session import storage_errors
from ..models.user import User


def find_by_username(db: Session, username: str) -> User | None:
    stmt = select(User).where(User.username == username).limit(1)
    with storage_errors(db, "user lookup"):
        return db.execute(stmt).scalars().first()


def create_user(db: Session, username: str, password_hash: str) -> User:
    """Insert a user, relying on the unique index to reject duplicates.

    No prior existence read is done: two concurrent signups for the same name
    race on the insert and the loser gets ``ConflictError``.
    """

    user = User(username=username, password=password_hash)
    try:
        with storage_errors(db, "user insert"):
            db.add(user)
            db.commit()
    except IntegrityError as exc:
        raise ConflictError(f"username {username!r} is taken") from exc
    db.refresh(user)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user whose stored hash matches ``password``.

    Unknown users and wrong passwords raise the same ``ValidationError`` so
    callers cannot tell them apart.
    """

    user = find_by_username(db, username) if username and password else None
    if user is None or not verify_password(password, user.password):
        raise ValidationError("Wrong username or password")
    return user
