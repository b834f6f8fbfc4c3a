"""Tests for the session store."""

from sqlalchemy import delete, func, select

from timetrack.core.security import hash_password
from timetrack.crud.sessions import create_session, delete_session, find_user_by_session
from timetrack.crud.users import create_user
from timetrack.models.login_session import LoginSession
from timetrack.models.user import User


def _user(db_session, name="alice"):
    return create_user(db_session, name, hash_password("pw1", rounds=4))


def test_session_resolves_to_its_user(db_session):
    user = _user(db_session)
    session_id = create_session(db_session, user.id)

    resolved = find_user_by_session(db_session, session_id)
    assert resolved is not None
    assert resolved.id == user.id


def test_user_may_hold_several_sessions(db_session):
    user = _user(db_session)
    first = create_session(db_session, user.id)
    second = create_session(db_session, user.id)

    assert first != second
    assert find_user_by_session(db_session, first).id == user.id
    assert find_user_by_session(db_session, second).id == user.id


def test_unknown_or_empty_session_is_absent(db_session):
    _user(db_session)

    assert find_user_by_session(db_session, "not-a-session") is None
    assert find_user_by_session(db_session, "") is None
    assert find_user_by_session(db_session, None) is None


def test_orphaned_session_is_absent(db_session):
    user = _user(db_session)
    session_id = create_session(db_session, user.id)

    db_session.execute(delete(User).where(User.id == user.id))
    db_session.commit()

    assert find_user_by_session(db_session, session_id) is None


def test_delete_session_is_idempotent(db_session):
    user = _user(db_session)
    session_id = create_session(db_session, user.id)

    delete_session(db_session, session_id)
    delete_session(db_session, session_id)
    delete_session(db_session, "never-existed")

    assert find_user_by_session(db_session, session_id) is None
    remaining = db_session.execute(select(func.count()).select_from(LoginSession)).scalar_one()
    assert remaining == 0
