"""Pydantic schema for audit log entries returned by the API."""

from typing import Any, Optional

from pydantic import BaseModel


class AuditLogRead(BaseModel):
    """One recorded mutation of a catalog object."""

    id: int
    action: str
    object_type: str
    object_id: Optional[int]
    timestamp: str
    details: Optional[Any] = None
