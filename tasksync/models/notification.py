"""Notification model for the one-way user notification channel."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Notification severity."""

    NORMAL = "normal"
    ERROR = "error"


class Notification(BaseModel):
    """A short message raised by the synchronizer for the user."""

    title: str = Field(description="Short headline")
    description: str = Field(default="", description="Longer explanation")
    severity: Severity = Field(default=Severity.NORMAL)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
