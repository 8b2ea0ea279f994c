"""Transient notification model."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class Severity(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A toast shown to the operator until it expires."""
    model_config = {"frozen": False}

    id: str
    message: str
    severity: Severity = Severity.INFO
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    fading: bool = False

    @property
    def title(self) -> str:
        return self.severity.value.capitalize()
