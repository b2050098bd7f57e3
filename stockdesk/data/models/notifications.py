from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class BadgeStatus(str, Enum):
    EXPIRED = "expired"
    TODAY = "today"
    URGENT = "urgent"
    UPCOMING = "upcoming"


class ExpiryBadge(BaseModel):
    """Expiry marker attached to a notification in the dropdown."""
    days_left: int = Field(description="Calendar days until expiry")
    status: BadgeStatus = Field(description="Badge colour bucket")
    label: str = Field(description="Badge text, e.g. 'Today' or '3d'")


class NotificationView(BaseModel):
    notification: Any = Field(description="The notification record as received")
    expiry: Optional[ExpiryBadge] = Field(default=None, description="Expiry badge, if the notification carries one")
