"""API dependencies."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlmodel import Session

from status_service.db.session import get_session
from status_service.services.status import StatusService


def get_db() -> Generator[Session, None, None]:
    with get_session() as session:
        yield session


def get_status_service(session: Session = Depends(get_db)) -> StatusService:
    return StatusService(session)
