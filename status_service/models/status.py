"""Status record models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import Column, DateTime, Index
from sqlmodel import Field, SQLModel

from status_service.core.config import settings

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class StatusEntity(SQLModel, table=True):
    """One status observation. Rows are append-only."""

    __tablename__ = settings.status_table
    __table_args__ = (
        Index(f"ix_{settings.status_table}_root_change", "root_key", "change_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    root_key: str = Field(max_length=64, description="Partition shared by all status rows")
    status: int = Field(description="100 = ok, 200 = partial failure, 300 = service down")
    # stored as naive UTC
    change_date: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False, index=True),
        description="UTC, naive",
    )


class StatusSubmission(BaseModel):
    """Body of a status POST.

    Status codes are not checked against the 100/200/300 convention, only
    bounded to what the INTEGER column can hold.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: int = PydanticField(ge=INT64_MIN, le=INT64_MAX)
    change_date: Optional[str] = PydanticField(default=None, alias="changeDate")


class StatusRecordRead(BaseModel):
    """Wire view of a stored record.

    Fields are optional so rows written under an older or newer schema still
    decode; see ``status_service.services.status.decode_record``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    status: Optional[int] = None
    change_date: Optional[str] = PydanticField(default=None, alias="changeDate")


__all__ = ["StatusEntity", "StatusRecordRead", "StatusSubmission"]
