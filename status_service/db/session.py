"""SQLModel session management."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from status_service.core.config import settings


def make_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # sync endpoints run in FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


engine = make_engine(settings.database_url, echo=settings.database_echo)


def init_db(bind: Engine | None = None) -> None:
    import status_service.models  # noqa: F401  registers tables on the metadata

    SQLModel.metadata.create_all(bind or engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session as a context manager (for use with 'with' statement).

    For FastAPI dependency injection, use ``status_service.api.deps.get_db``.
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
