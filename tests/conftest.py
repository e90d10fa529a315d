import os

os.environ.setdefault("PYTEST_RUNNING", "1")

import pytest
from fastapi.testclient import TestClient

import contact_manager.db.database as db_module
from contact_manager.api.main import app
from contact_manager.db import models
from contact_manager.utils.settings import refresh_settings_cache

# The engine is an in-memory SQLite database shared through StaticPool; the
# schema is created at import time of contact_manager.db.database.
models.Base.metadata.create_all(bind=db_module.engine)

_GLOBAL_SESSION = None


def _truncate_tables():
    with db_module.engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(autouse=True)
def _settings_cache():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


# Per-test session shared with the app through the get_db override
@pytest.fixture(autouse=True)
def db_session():
    global _GLOBAL_SESSION
    session = db_module.SessionLocal()
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _GLOBAL_SESSION = None
        session.rollback()
        session.close()
        _truncate_tables()


def _override_get_db():
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


# Some tests read better with the shorter name
@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)
