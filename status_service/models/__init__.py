"""Database models."""

from .status import StatusEntity, StatusRecordRead, StatusSubmission

__all__ = [
    "StatusEntity",
    "StatusRecordRead",
    "StatusSubmission",
]
