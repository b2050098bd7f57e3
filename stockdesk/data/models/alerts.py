from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class StockSeverity(str, Enum):
    """Declaration order is display order: most urgent first."""
    OUT = "out"
    CRITICAL = "critical"
    LOW = "low"

    @property
    def rank(self) -> int:
        return list(StockSeverity).index(self)


class ExpirySeverity(str, Enum):
    """Declaration order is display order: most urgent first."""
    EXPIRED = "expired"
    CRITICAL = "expire_critical"
    SOON = "expire_soon"

    @property
    def rank(self) -> int:
        return list(ExpirySeverity).index(self)


class StockAlert(BaseModel):
    """A product whose quantity is at or below the low-stock threshold."""
    product_id: Any = Field(default=None, description="Product identifier")
    name: Optional[str] = Field(default=None, description="Product name")
    brand: str = Field(default="Unknown", description="Brand name")
    barcode: str = Field(default="N/A", description="Product barcode")
    qty: float = Field(ge=0, description="Quantity on hand")
    expire_date: Optional[datetime] = Field(default=None, description="Expiry date, if known")
    severity: StockSeverity = Field(description="Stock alert tier")


class ExpiryAlert(BaseModel):
    """A product that has expired or expires within the alert window."""
    product_id: Any = Field(default=None, description="Product identifier")
    name: Optional[str] = Field(default=None, description="Product name")
    brand: str = Field(default="Unknown", description="Brand name")
    barcode: str = Field(default="N/A", description="Product barcode")
    qty: float = Field(ge=0, description="Quantity on hand")
    expire_date: datetime = Field(description="Expiry date")
    days_left: int = Field(description="Calendar days until expiry; negative once expired")
    severity: ExpirySeverity = Field(description="Expiry alert tier")
