from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class CustomerStats(BaseModel):
    """Header counters for the customer list."""
    total: int = Field(description="Number of customers")
    with_phone: int = Field(description="Customers with a phone number")
    with_address: int = Field(description="Customers with an address")


class PurchaseStats(BaseModel):
    """Header totals for the purchase (import) list."""
    count: int = Field(description="Number of purchases")
    total_amount: Decimal = Field(description="SUM(total)")
    total_paid: Decimal = Field(description="SUM(paid)")
    total_balance: Decimal = Field(description="SUM(balance)")
    total_qty: float = Field(description="SUM(PurchaseItems[].qty)")
    paid_ratio: float = Field(description="total_paid / total_amount, 0 when nothing was bought")
    balance_ratio: float = Field(description="total_balance / total_amount, 0 when nothing was bought")
