"""Run the API with uvicorn: ``python -m status_service``."""

from status_service.core.config import settings


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("status_service:app", host=settings.host, port=settings.port, reload=False)
