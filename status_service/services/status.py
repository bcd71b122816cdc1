"""Status record storage and queries."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import exc as sa_exc
from sqlalchemy import select
from sqlmodel import Session

from status_service.core.config import settings
from status_service.models import StatusEntity, StatusRecordRead

logger = logging.getLogger(__name__)

OVER_QUOTA_MESSAGE = "503 - Over Quota"
NOT_FOUND_MESSAGE = "no status recorded"

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)
_SQLITE_FULL = "database or disk is full"
# PostgreSQL class 53: insufficient resources
_PG_RESOURCE_CLASS = "53"

_RECORD_FIELDS = ("id", "status", "change_date")


class StatusServiceError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(StatusServiceError):
    status_code = 400


class NotFoundError(StatusServiceError):
    status_code = 404


class OverQuotaError(StatusServiceError):
    status_code = 503


class StorageError(StatusServiceError):
    status_code = 500


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_rfc3339(value: str) -> datetime:
    """Parse a strict RFC3339 timestamp into naive UTC.

    Raises BadRequestError naming the expected format.
    """
    match = _RFC3339.match(value)
    if not match:
        raise BadRequestError(
            f'parsing time "{value}" as RFC3339 failed - Correct format is RFC3339'
        )
    date_part, time_part, fraction, offset = match.groups()
    text = f"{date_part}T{time_part}"
    if fraction:
        text += "." + fraction[:6].ljust(6, "0")
    text += "+00:00" if offset in ("Z", "z") else offset
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise BadRequestError(f"{exc} - Correct format is RFC3339") from exc
    try:
        return _to_naive_utc(parsed)
    except OverflowError:
        # UTC instant outside the datetime range, clamp to the nearest bound
        return datetime.min if parsed.year == datetime.min.year else datetime.max


def format_change_date(value: datetime, layout: str | None = None) -> str:
    if value.tzinfo is None:
        # stored values are UTC; lets %z/%Z layouts render the offset
        value = value.replace(tzinfo=timezone.utc)
    return value.strftime(layout or settings.date_time_layout)


def is_over_quota(exc: BaseException) -> bool:
    """Return True when the storage layer reports resource exhaustion."""
    if isinstance(exc, sa_exc.TimeoutError):
        # connection pool exhausted
        return True
    orig = getattr(exc, "orig", None)
    if orig is not None:
        code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if isinstance(code, str) and code.startswith(_PG_RESOURCE_CLASS):
            return True
    text = str(orig if orig is not None else exc).lower()
    return _SQLITE_FULL in text


def translate_storage_error(exc: sa_exc.SQLAlchemyError) -> StatusServiceError:
    if is_over_quota(exc):
        logger.error("Storage over quota", extra={"error": str(exc)})
        return OverQuotaError(OVER_QUOTA_MESSAGE)
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    logger.error("Storage failure", extra={"error": message})
    return StorageError(message)


def decode_record(row: Mapping[str, Any], layout: str | None = None) -> StatusRecordRead:
    """Build the wire view from a row mapping, tolerating schema drift.

    Unknown columns are ignored and missing ones decode as None.
    """
    unknown = [key for key in row.keys() if key not in _RECORD_FIELDS and key != "root_key"]
    missing = [key for key in _RECORD_FIELDS if row.get(key) is None]
    if unknown or missing:
        logger.debug(
            "Status row field mismatch",
            extra={"unknown_fields": unknown, "missing_fields": missing, "record_id": row.get("id")},
        )

    change_date = row.get("change_date")
    if isinstance(change_date, datetime):
        change_date = format_change_date(change_date, layout)
    elif change_date is not None:
        change_date = str(change_date)

    status = row.get("status")
    return StatusRecordRead(
        id=row.get("id"),
        status=int(status) if status is not None else None,
        change_date=change_date,
    )


class StatusService:
    def __init__(
        self,
        session: Session,
        root_key: str | None = None,
        layout: str | None = None,
        date_policy: str | None = None,
    ) -> None:
        self.session = session
        self.root_key = root_key or settings.status_root_key
        self.layout = layout or settings.date_time_layout
        self.date_policy = date_policy or settings.submit_date_policy

    def submit(self, status: int, change_date: str | None = None) -> int:
        """Store a new status record and return its id."""
        entity = StatusEntity(
            root_key=self.root_key,
            status=status,
            change_date=self._resolve_change_date(change_date),
        )
        try:
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
        except sa_exc.SQLAlchemyError as exc:
            self.session.rollback()
            raise translate_storage_error(exc) from exc

        logger.info(
            "Stored status record",
            extra={"record_id": entity.id, "status_code": status, "change_date": entity.change_date.isoformat()},
        )
        return entity.id

    def query_all(self, date_from: str | None = None) -> list[StatusRecordRead]:
        """Return records changed at or after ``date_from``, newest first."""
        table = StatusEntity.__table__
        stmt = select(table).where(table.c.root_key == self.root_key)
        if date_from:
            stmt = stmt.where(table.c.change_date >= parse_rfc3339(date_from))
        stmt = stmt.order_by(table.c.change_date.desc(), table.c.id.desc())
        return self._fetch(stmt)

    def query_latest(self) -> list[StatusRecordRead]:
        """Return the most recent record as a one-element list."""
        table = StatusEntity.__table__
        stmt = (
            select(table)
            .where(table.c.root_key == self.root_key)
            .order_by(table.c.change_date.desc(), table.c.id.desc())
            .limit(1)
        )
        records = self._fetch(stmt)
        if not records:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return records

    def _fetch(self, stmt) -> list[StatusRecordRead]:
        try:
            rows = self.session.exec(stmt).mappings().all()
        except sa_exc.SQLAlchemyError as exc:
            raise translate_storage_error(exc) from exc
        return [decode_record(row, self.layout) for row in rows]

    def _resolve_change_date(self, value: str | None) -> datetime:
        if not value:
            return utcnow()
        try:
            return _to_naive_utc(datetime.strptime(value, self.layout))
        except (ValueError, OverflowError) as exc:
            if self.date_policy == "now":
                logger.warning(
                    "Unparseable changeDate, using current time",
                    extra={"change_date": value, "layout": self.layout},
                )
                return utcnow()
            raise BadRequestError(f"{exc} - Correct format is {self.layout}") from exc


__all__ = [
    "BadRequestError",
    "NotFoundError",
    "OverQuotaError",
    "StatusService",
    "StatusServiceError",
    "StorageError",
    "decode_record",
    "format_change_date",
    "is_over_quota",
    "parse_rfc3339",
    "translate_storage_error",
]
