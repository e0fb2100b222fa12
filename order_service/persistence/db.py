from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from order_service.core.config import get_settings
from order_service.persistence.models import Base


def create_engine_from_url(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Request handlers run in a worker thread pool.
        connect_args["check_same_thread"] = False
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


def _session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False)


settings = get_settings()
engine = create_engine_from_url(settings.database_url)
SessionLocal = _session_factory(engine)


def configure_engine(url: str) -> Engine:
    """Point the module at another database; later sessions use it."""
    global engine, SessionLocal

    engine.dispose()
    engine = create_engine_from_url(url)
    SessionLocal = _session_factory(engine)
    return engine


def init_db() -> None:
    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_session() -> Generator[Session, None, None]:
    with session_scope() as session:
        yield session
