"""Small additive schema upgrades run at startup after ``create_all``."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

# Databases created by earlier releases may lack the timer bookkeeping columns
# and the unique indexes that signup and timer lookup depend on. Everything
# here is idempotent and never drops data.


def _column_names(engine: Engine, table: str) -> set[str]:
    inspector = inspect(engine)
    if not inspector.has_table(table):
        return set()
    return {column["name"] for column in inspector.get_columns(table)}


def _add_column(engine: Engine, table: str, name: str, col_type: str) -> None:
    """ALTER TABLE ADD COLUMN helper."""
    quoted = engine.dialect.identifier_preparer.quote(name)
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {quoted} {col_type}"))


def _create_index_if_not_exists(engine: Engine, table: str, name: str, cols: Iterable[str], unique: bool = False) -> None:
    cols_sql = ", ".join(cols)
    unique_sql = "UNIQUE " if unique else ""
    with engine.begin() as conn:
        conn.execute(text(f"CREATE {unique_sql}INDEX IF NOT EXISTS {name} ON {table} ({cols_sql})"))


def run_migrations(engine: Engine) -> None:
    timer_needed: dict[str, str] = {
        "duration": "TEXT",
        "end": "TEXT",
    }
    tcols = _column_names(engine, "timers")
    if tcols:
        for name, dtype in timer_needed.items():
            if name not in tcols:
                _add_column(engine, "timers", name, dtype)
        _create_index_if_not_exists(engine, "timers", "ix_timers_timer_id_unique", ["timer_id"], unique=True)
        _create_index_if_not_exists(engine, "timers", "ix_timers_user_id", ["user_id"])

    if _column_names(engine, "users"):
        _create_index_if_not_exists(engine, "users", "ix_users_username_unique", ["username"], unique=True)

    if _column_names(engine, "sessions"):
        _create_index_if_not_exists(engine, "sessions", "ix_sessions_session_id_unique", ["session_id"], unique=True)
