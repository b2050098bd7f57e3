from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Summary counters shown on the dashboard cards."""
    total_products: int = Field(default=0, description="Number of products")
    total_sales: int = Field(default=0, description="Number of sales")
    total_purchases: int = Field(default=0, description="Number of purchases")
    total_customers: int = Field(default=0, description="Number of customers")
    total_revenue: Decimal = Field(default=Decimal(0), description="SUM(sale.total)")
    total_stock: float = Field(default=0.0, description="SUM(product.qty)")
    out_of_stock: int = Field(default=0, description="Products with qty == 0")
    low_stock: int = Field(default=0, description="Products in the critical or low stock tiers")
    expired: int = Field(default=0, description="Products already expired")
    expiring_soon: int = Field(default=0, description="Products in the critical or soon expiry tiers")
