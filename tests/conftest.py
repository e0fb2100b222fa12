from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

import order_service.persistence.db as db
from order_service.core.config import get_settings
from order_service.persistence.models import Base
from order_service.persistence.store import SqlStore


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite"


@pytest.fixture(scope="session", autouse=True)
def configure_test_engine(test_db_path: Path):
    settings = get_settings()
    settings.env = "test"

    engine = db.configure_engine(f"sqlite+pysqlite:///{test_db_path}")

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables(configure_test_engine):
    with db.engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(delete(table))
    yield


@pytest.fixture()
def bill_policy():
    settings = get_settings()
    original = settings.bill_policy

    def _set(policy: str) -> None:
        settings.bill_policy = policy

    yield _set
    settings.bill_policy = original


@pytest.fixture()
def client(configure_test_engine):
    from order_service.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(configure_test_engine):
    with db.session_scope() as s:
        yield s


@pytest.fixture()
def store(session) -> SqlStore:
    return SqlStore(session)
