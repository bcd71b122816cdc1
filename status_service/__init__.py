"""Status Record Service FastAPI application package."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api import api_router
from .core.config import settings
from .core.logging_config import setup_logging
from .db.session import init_db
from .services.status import StatusServiceError


def create_app() -> FastAPI:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Initializing status API", extra={"api_prefix": settings.api_prefix})

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(StatusServiceError)
    async def _status_error(request: Request, exc: StatusServiceError) -> PlainTextResponse:
        level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logger.log(
            level,
            "Request failed",
            extra={"path": request.url.path, "status_code": exc.status_code, "error": exc.message},
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.on_event("startup")
    def _bootstrap_db() -> None:
        init_db()

    return app


app = create_app()
