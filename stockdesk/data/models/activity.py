from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityKind(str, Enum):
    SALE = "sale"
    PURCHASE = "purchase"


class ActivityEntry(BaseModel):
    """One row of the dashboard's recent activity timeline."""
    kind: ActivityKind = Field(description="Source transaction type")
    id: Any = Field(default=None, description="Sale or purchase identifier")
    title: str = Field(description="Short heading, e.g. 'New Sale'")
    description: str = Field(description="One-line summary")
    amount: Decimal = Field(description="Transaction total")
    timestamp: Optional[datetime] = Field(default=None, description="When the transaction happened")
