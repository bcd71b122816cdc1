"""API router definitions."""

from fastapi import APIRouter

from .routes import health_router
from .status import router as status_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(status_router)

__all__ = ["api_router"]
