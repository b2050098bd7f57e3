"""Stock and expiry alerts, dashboard counters and the activity feed.

Everything here is a pure function of the collections passed in. Unparsable
quantities count as 0 and unparsable expiry dates mean "no expiry info", so
partially populated products are classified rather than rejected.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Union

from ..exceptions import InvalidQuery, InvalidThresholds
from ..models import (
    ActivityEntry,
    ActivityKind,
    DashboardStats,
    ExpiryAlert,
    ExpirySeverity,
    StockAlert,
    StockSeverity,
)
from ..values import get_field, parse_date, to_decimal, to_quantity, to_text

DEFAULT_LOW_STOCK = 10
DEFAULT_CRITICAL_STOCK = 5
DEFAULT_EXPIRE_SOON_DAYS = 30
DEFAULT_EXPIRE_CRITICAL_DAYS = 7

# Tier for a product that expires today (days_left == 0).
EXPIRES_TODAY_SEVERITY = ExpirySeverity.CRITICAL

DEFAULT_ACTIVITY_LIMIT = 8


def _brand(product: Any) -> str:
    brand = get_field(product, "Brand.name")
    if brand is None:
        brand = get_field(product, "brand")
        if isinstance(brand, Mapping):
            brand = brand.get("name")
    return to_text(brand) or "Unknown"


def _name(product: Any) -> Optional[str]:
    name = get_field(product, "name")
    if isinstance(name, (Mapping, list)):
        return None
    return to_text(name) or None


def _barcode(product: Any) -> str:
    return to_text(get_field(product, "barcode")) or "N/A"


def _check_pair(wide: int, narrow: int, what: str) -> None:
    if narrow < 0 or wide < 0 or narrow > wide:
        raise InvalidThresholds(f"Invalid {what}: expected 0 <= {narrow} <= {wide}")


# ---------- stock ----------

def stock_severity(
    qty: float,
    low_threshold: int = DEFAULT_LOW_STOCK,
    critical_threshold: int = DEFAULT_CRITICAL_STOCK,
) -> Optional[StockSeverity]:
    if qty == 0:
        return StockSeverity.OUT
    if qty <= critical_threshold:
        return StockSeverity.CRITICAL
    if qty <= low_threshold:
        return StockSeverity.LOW
    return None


def classify_stock(
    products: Iterable[Any],
    low_threshold: int = DEFAULT_LOW_STOCK,
    critical_threshold: int = DEFAULT_CRITICAL_STOCK,
) -> List[StockAlert]:
    """Stock alerts ordered OUT, CRITICAL, LOW; product order kept within a tier."""
    _check_pair(low_threshold, critical_threshold, "stock thresholds")
    alerts: List[StockAlert] = []
    for product in products:
        qty = to_quantity(get_field(product, "qty"))
        severity = stock_severity(qty, low_threshold, critical_threshold)
        if severity is None:
            continue
        alerts.append(
            StockAlert(
                product_id=get_field(product, "id"),
                name=_name(product),
                brand=_brand(product),
                barcode=_barcode(product),
                qty=qty,
                expire_date=parse_date(get_field(product, "expire_date")),
                severity=severity,
            )
        )
    return sorted(alerts, key=lambda a: a.severity.rank)


# ---------- expiry ----------

def expiry_severity(
    days: int,
    soon_window_days: int = DEFAULT_EXPIRE_SOON_DAYS,
    critical_window_days: int = DEFAULT_EXPIRE_CRITICAL_DAYS,
    today_severity: ExpirySeverity = EXPIRES_TODAY_SEVERITY,
) -> Optional[ExpirySeverity]:
    if days == 0:
        return today_severity
    if days < 0:
        return ExpirySeverity.EXPIRED
    if days <= critical_window_days:
        return ExpirySeverity.CRITICAL
    if days <= soon_window_days:
        return ExpirySeverity.SOON
    return None


def classify_expiry(
    products: Iterable[Any],
    soon_window_days: int = DEFAULT_EXPIRE_SOON_DAYS,
    critical_window_days: int = DEFAULT_EXPIRE_CRITICAL_DAYS,
    today: Optional[date] = None,
    today_severity: Union[ExpirySeverity, str] = EXPIRES_TODAY_SEVERITY,
) -> List[ExpiryAlert]:
    """Expiry alerts ordered EXPIRED, CRITICAL, SOON, then by days left.

    ``days_left`` counts calendar days from ``today`` (default: the current
    local date). Products without a parsable ``expire_date`` are skipped.
    """
    _check_pair(soon_window_days, critical_window_days, "expiry windows")
    try:
        today_severity = ExpirySeverity(today_severity)
    except ValueError:
        raise InvalidThresholds(f"Unknown expiry severity: {today_severity!r}") from None
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()

    alerts: List[ExpiryAlert] = []
    for product in products:
        expire_date = parse_date(get_field(product, "expire_date"))
        if expire_date is None:
            continue
        days = (expire_date.date() - today).days
        severity = expiry_severity(days, soon_window_days, critical_window_days, today_severity)
        if severity is None:
            continue
        alerts.append(
            ExpiryAlert(
                product_id=get_field(product, "id"),
                name=_name(product),
                brand=_brand(product),
                barcode=_barcode(product),
                qty=to_quantity(get_field(product, "qty")),
                expire_date=expire_date,
                days_left=days,
                severity=severity,
            )
        )
    return sorted(alerts, key=lambda a: (a.severity.rank, a.days_left))


# ---------- dashboard ----------

def summarize(
    products: Iterable[Any],
    sales: Iterable[Any],
    purchases: Iterable[Any],
    customers: Iterable[Any],
    low_threshold: int = DEFAULT_LOW_STOCK,
    critical_threshold: int = DEFAULT_CRITICAL_STOCK,
    soon_window_days: int = DEFAULT_EXPIRE_SOON_DAYS,
    critical_window_days: int = DEFAULT_EXPIRE_CRITICAL_DAYS,
    today: Optional[date] = None,
    today_severity: Union[ExpirySeverity, str] = EXPIRES_TODAY_SEVERITY,
) -> DashboardStats:
    products, sales = list(products), list(sales)

    stock = Counter(a.severity for a in classify_stock(products, low_threshold, critical_threshold))
    expiry = Counter(
        a.severity
        for a in classify_expiry(products, soon_window_days, critical_window_days, today, today_severity)
    )

    return DashboardStats(
        total_products=len(products),
        total_sales=len(sales),
        total_purchases=len(list(purchases)),
        total_customers=len(list(customers)),
        total_revenue=sum((to_decimal(get_field(s, "total")) for s in sales), Decimal(0)),
        total_stock=sum(to_quantity(get_field(p, "qty")) for p in products),
        out_of_stock=stock[StockSeverity.OUT],
        low_stock=stock[StockSeverity.CRITICAL] + stock[StockSeverity.LOW],
        expired=expiry[ExpirySeverity.EXPIRED],
        expiring_soon=expiry[ExpirySeverity.CRITICAL] + expiry[ExpirySeverity.SOON],
    )


# ---------- activity feed ----------

def _first_item_name(sale: Any) -> str:
    items = get_field(sale, "SaleItems")
    first = items[0] if isinstance(items, list) and items else None
    return to_text(get_field(first, "Product.name")) or "Other Product"


def merge_activity(
    sales: Iterable[Any],
    purchases: Iterable[Any],
    limit: Optional[int] = DEFAULT_ACTIVITY_LIMIT,
    sales_window: Optional[int] = None,
    purchases_window: Optional[int] = None,
) -> List[ActivityEntry]:
    """Sales and purchases merged into one timeline, newest first.

    The windows take only the first N records of each source before merging.
    Entries with equal timestamps keep their source order (sales before
    purchases); entries without a timestamp sort last.
    """
    for value, what in ((limit, "limit"), (sales_window, "sales_window"), (purchases_window, "purchases_window")):
        if value is not None and value < 0:
            raise InvalidQuery(f"{what} must not be negative, got {value}")

    entries: List[ActivityEntry] = []
    for sale in list(sales)[:sales_window]:
        sale_id = get_field(sale, "id")
        entries.append(
            ActivityEntry(
                kind=ActivityKind.SALE,
                id=sale_id,
                title="New Sale",
                description=f"Sale #{to_text(sale_id)} - {_first_item_name(sale)}",
                amount=to_decimal(get_field(sale, "total")),
                timestamp=parse_date(get_field(sale, "sale_date") or get_field(sale, "created_at")),
            )
        )
    for purchase in list(purchases)[:purchases_window]:
        purchase_id = get_field(purchase, "id")
        entries.append(
            ActivityEntry(
                kind=ActivityKind.PURCHASE,
                id=purchase_id,
                title="New Purchase",
                description=f"Purchase #{to_text(purchase_id)}",
                amount=to_decimal(get_field(purchase, "total")),
                timestamp=parse_date(get_field(purchase, "created_at")),
            )
        )

    entries.sort(key=lambda e: e.timestamp or datetime.min, reverse=True)
    return entries[:limit]
