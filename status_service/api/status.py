"""Status submission and query endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from status_service.api.deps import get_status_service
from status_service.models import StatusRecordRead, StatusSubmission
from status_service.services.status import StatusService

router = APIRouter(prefix="/status", tags=["status"])


@router.post("", status_code=201, summary="Record a status change")
def insert_status(
    payload: StatusSubmission,
    service: StatusService = Depends(get_status_service),
) -> str:
    """Store the submitted status and return the new id as a string."""
    return str(service.submit(payload.status, payload.change_date))


@router.get("", response_model=List[StatusRecordRead], summary="Status history")
def get_status(
    date_from: Optional[str] = Query(None, alias="dateFrom", description="RFC3339 lower bound"),
    service: StatusService = Depends(get_status_service),
) -> List[StatusRecordRead]:
    return service.query_all(date_from)


@router.get("/current", response_model=List[StatusRecordRead], summary="Latest status")
def get_current_status(service: StatusService = Depends(get_status_service)) -> List[StatusRecordRead]:
    return service.query_latest()


__all__ = ["router"]
