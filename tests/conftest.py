import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from timetrack import create_app
from timetrack.core.config import AppSettings
from timetrack.db.session import Base

# Ensure models are registered so metadata tables are created
from timetrack import models as _models  # noqa: F401


@pytest.fixture()
def engine():
    # One shared in-memory connection so the app's threadpool sees the same data.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def settings():
    return AppSettings(DB_URL="sqlite://", BCRYPT_ROUNDS=4, METRICS_ENABLED=False)


@pytest.fixture()
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
