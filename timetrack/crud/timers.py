"""Timer store: create, list and stop timers."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..core.security import new_timer_id
from ..db.session import storage_errors
from ..models.timer import Timer
from ..services.timecalc import now_ms


def create_timer(db: Session, user_id: int, description: str | None) -> Timer:
    timer = Timer(
        user_id=user_id,
        start=str(now_ms()),
        description=description,
        is_active=True,
        timer_id=new_timer_id(),
    )
    with storage_errors(db, "timer insert"):
        db.add(timer)
        db.commit()
        db.refresh(timer)
    return timer


def list_timers(db: Session, user_id: int, is_active: bool | None = None) -> list[Timer]:
    stmt = select(Timer).where(Timer.user_id == user_id)
    if is_active is not None:
        stmt = stmt.where(Timer.is_active == is_active)
    with storage_errors(db, "timer list"):
        return list(db.execute(stmt.order_by(Timer.id)).scalars().all())



def stop_timer(db: Session, timer_id: str, user_id: int | None = None) -> bool | None:
    """Flip ``is_active`` off and return the stored value in one statement.

    Returns ``None`` when no timer matched. The stop time is only written the
    first time, so stopping twice keeps the first end.
    """

    stmt = (
        update(Timer)
        .where(Timer.timer_id == timer_id)
        .values(is_active=False, end=func.coalesce(Timer.end, str(now_ms())))
        .returning(Timer.is_active)
        .execution_options(synchronize_session=False)
    )
    if user_id is not None:
        stmt = stmt.where(Timer.user_id == user_id)
    with storage_errors(db, "timer stop"):
        result = db.execute(stmt).scalars().first()
        db.commit()
    return None if result is None else bool(result)
