from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import Any, Dict, Iterable

import pandas as pd

from ..models import CustomerStats, PurchaseStats
from ..values import get_field, to_decimal, to_number, to_text


def _present(record: Any, path: str) -> bool:
    return bool(to_text(get_field(record, path)).strip())


def customer_stats(customers: Iterable[Any]) -> CustomerStats:
    customers = list(customers)
    return CustomerStats(
        total=len(customers),
        with_phone=sum(1 for c in customers if _present(c, "phone")),
        with_address=sum(1 for c in customers if _present(c, "address")),
    )


def status_counts(records: Iterable[Any], field: str = "status", default: str = "active") -> Dict[str, int]:
    """Count records per status, plus ``"all"``; a missing status counts as ``default``."""
    records = list(records)
    counts: Dict[str, int] = dict(Counter(to_text(get_field(r, field)) or default for r in records))
    # The total always wins over a record whose status is literally "all".
    counts["all"] = len(records)
    return counts


def _purchase_qty(purchase: Any) -> float:
    items = get_field(purchase, "PurchaseItems")
    if not isinstance(items, list):
        return 0.0
    return sum(to_number(get_field(item, "qty")) for item in items)


def purchase_stats(purchases: Iterable[Any]) -> PurchaseStats:
    """Totals for the purchase list header."""
    purchases = list(purchases)
    frame = pd.DataFrame(
        {
            "total": [to_decimal(get_field(p, "total")) for p in purchases],
            "paid": [to_decimal(get_field(p, "paid")) for p in purchases],
            "balance": [to_decimal(get_field(p, "balance")) for p in purchases],
            "qty": [_purchase_qty(p) for p in purchases],
        },
        columns=["total", "paid", "balance", "qty"],
    )

    total_amount = Decimal(frame["total"].sum())
    total_paid = Decimal(frame["paid"].sum())
    total_balance = Decimal(frame["balance"].sum())
    return PurchaseStats(
        count=len(frame),
        total_amount=total_amount,
        total_paid=total_paid,
        total_balance=total_balance,
        total_qty=float(frame["qty"].sum()),
        paid_ratio=float(total_paid / total_amount) if total_amount else 0.0,
        balance_ratio=float(total_balance / total_amount) if total_amount else 0.0,
    )
