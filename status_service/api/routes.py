"""Root API routers."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from status_service.api.deps import get_db

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service health probe")
def healthcheck(session: Session = Depends(get_db)) -> JSONResponse:
    """Heartbeat for orchestration layers; 503 when the database is unreachable."""

    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError:
        return JSONResponse({"status": "degraded", "database": "unreachable"}, status_code=503)
    return JSONResponse({"status": "ok", "database": "ok"})
