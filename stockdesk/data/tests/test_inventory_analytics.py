from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from stockdesk.data.analytics.inventory import (
    classify_expiry,
    classify_stock,
    merge_activity,
    summarize,
)
from stockdesk.data.exceptions import InvalidQuery, InvalidThresholds
from stockdesk.data.models import ActivityKind, ExpirySeverity, StockSeverity

TODAY = date(2026, 10, 19)


def in_days(n):
    return (TODAY + timedelta(days=n)).isoformat()


# ---------- stock ----------

def test_stock_partition_by_quantity():
    """Each product lands in exactly one tier, decided by qty alone."""
    products = [{"id": i, "qty": q} for i, q in enumerate([0, 5, 10, 11, 1, 6])]
    alerts = {a.product_id: a.severity for a in classify_stock(products, 10, 5)}
    assert alerts == {
        0: StockSeverity.OUT,
        1: StockSeverity.CRITICAL,
        2: StockSeverity.LOW,
        4: StockSeverity.CRITICAL,
        5: StockSeverity.LOW,
    }


def test_stock_scenario():
    products = [{"id": 1, "qty": 0}, {"id": 2, "qty": 5}, {"id": 3, "qty": 50}]
    alerts = classify_stock(products, low_threshold=10, critical_threshold=5)
    assert [(a.product_id, a.severity) for a in alerts] == [
        (1, StockSeverity.OUT),
        (2, StockSeverity.CRITICAL),
    ]


def test_stock_alerts_ordered_by_severity_then_input_order():
    products = [
        {"id": "low-a", "qty": 9},
        {"id": "out", "qty": 0},
        {"id": "crit", "qty": 2},
        {"id": "low-b", "qty": 7},
    ]
    assert [a.product_id for a in classify_stock(products)] == ["out", "crit", "low-a", "low-b"]


def test_stock_quantities_are_coerced():
    products = [
        {"id": 1, "qty": "abc"},
        {"id": 2, "qty": -4},
        {"id": 3, "qty": "7"},
        {"id": 4},
    ]
    alerts = classify_stock(products)
    assert [(a.product_id, a.severity, a.qty) for a in alerts] == [
        (1, StockSeverity.OUT, 0),
        (2, StockSeverity.OUT, 0),
        (4, StockSeverity.OUT, 0),
        (3, StockSeverity.LOW, 7),
    ]


def test_stock_alert_display_fields():
    products = [
        {"id": 1, "name": "Coke", "qty": 0, "Brand": {"name": "Coca-Cola"}, "barcode": "885", "expire_date": "2027-01-01"},
        {"id": 2, "name": "Water", "qty": 1},
    ]
    first, second = classify_stock(products)
    assert first.brand == "Coca-Cola"
    assert first.barcode == "885"
    assert first.expire_date == datetime(2027, 1, 1)
    assert second.brand == "Unknown"
    assert second.barcode == "N/A"
    assert second.expire_date is None


def test_non_text_names_do_not_break_alerts():
    products = [
        {"id": 1, "name": 12345, "qty": 0, "expire_date": in_days(-1)},
        {"id": 2, "name": {"en": "Coke"}, "qty": 2, "expire_date": in_days(3)},
        {"id": 3, "name": 4.0, "qty": 8},
    ]
    stock = classify_stock(products)
    assert [a.name for a in stock] == ["12345", None, "4"]
    expiry = classify_expiry(products, today=TODAY)
    assert [a.name for a in expiry] == ["12345", None]
    assert summarize(products, [], [], [], today=TODAY).out_of_stock == 1


def test_inconsistent_stock_thresholds():
    with pytest.raises(InvalidThresholds):
        classify_stock([], low_threshold=5, critical_threshold=10)


# ---------- expiry ----------

def test_expiry_boundaries():
    products = [
        {"id": "today", "expire_date": in_days(0)},
        {"id": "yesterday", "expire_date": in_days(-1)},
        {"id": "plus30", "expire_date": in_days(30)},
        {"id": "plus31", "expire_date": in_days(31)},
        {"id": "plus7", "expire_date": in_days(7)},
        {"id": "plus8", "expire_date": in_days(8)},
    ]
    alerts = {a.product_id: (a.severity, a.days_left) for a in classify_expiry(products, today=TODAY)}
    assert alerts == {
        "today": (ExpirySeverity.CRITICAL, 0),
        "yesterday": (ExpirySeverity.EXPIRED, -1),
        "plus30": (ExpirySeverity.SOON, 30),
        "plus7": (ExpirySeverity.CRITICAL, 7),
        "plus8": (ExpirySeverity.SOON, 8),
    }


def test_expiry_later_today_is_still_today():
    products = [{"id": 1, "expire_date": "2026-10-19T23:30:00"}]
    (alert,) = classify_expiry(products, today=TODAY)
    assert alert.days_left == 0
    assert alert.severity == ExpirySeverity.CRITICAL


@pytest.mark.usefixtures("phnom_penh_time")
def test_utc_stamped_expiry_uses_the_local_calendar():
    # 2026-10-19 00:00 and 2026-10-18 23:59 at UTC+7
    products = [
        {"id": "midnight", "expire_date": "2026-10-18T17:00:00Z"},
        {"id": "before", "expire_date": "2026-10-18T16:59:00Z"},
    ]
    alerts = {a.product_id: (a.severity, a.days_left) for a in classify_expiry(products, today=TODAY)}
    assert alerts == {
        "midnight": (ExpirySeverity.CRITICAL, 0),
        "before": (ExpirySeverity.EXPIRED, -1),
    }


def test_missing_or_unparsable_expiry_is_not_an_alert():
    products = [{"id": 1}, {"id": 2, "expire_date": "not a date"}, {"id": 3, "expire_date": None}]
    assert classify_expiry(products, today=TODAY) == []


def test_expiry_ordering():
    products = [
        {"id": "soon-20", "expire_date": in_days(20)},
        {"id": "crit-3", "expire_date": in_days(3)},
        {"id": "exp-1", "expire_date": in_days(-1)},
        {"id": "soon-10", "expire_date": in_days(10)},
        {"id": "exp-9", "expire_date": in_days(-9)},
        {"id": "crit-0", "expire_date": in_days(0)},
    ]
    assert [a.product_id for a in classify_expiry(products, today=TODAY)] == [
        "exp-9", "exp-1", "crit-0", "crit-3", "soon-10", "soon-20",
    ]


def test_expires_today_policy_is_overridable():
    products = [{"id": 1, "expire_date": in_days(0)}]
    (alert,) = classify_expiry(products, today=TODAY, today_severity=ExpirySeverity.EXPIRED)
    assert alert.severity == ExpirySeverity.EXPIRED
    with pytest.raises(InvalidThresholds):
        classify_expiry(products, today=TODAY, today_severity="tomorrow")


def test_inconsistent_expiry_windows():
    with pytest.raises(InvalidThresholds):
        classify_expiry([], soon_window_days=3, critical_window_days=7)


# ---------- dashboard ----------

def test_summarize():
    products = [
        {"id": 1, "qty": 0, "expire_date": in_days(-1)},
        {"id": 2, "qty": 3, "expire_date": in_days(5)},
        {"id": 3, "qty": 8},
        {"id": 4, "qty": "20", "expire_date": in_days(20)},
        {"id": 5, "qty": None},
    ]
    sales = [{"total": "10.50"}, {"total": 4}, {"total": None}]
    stats = summarize(products, sales, [{"id": 1}], [{"id": 1}, {"id": 2}], today=TODAY)

    assert stats.total_products == 5
    assert stats.total_sales == 3
    assert stats.total_purchases == 1
    assert stats.total_customers == 2
    assert stats.total_revenue == Decimal("14.50")
    assert stats.total_stock == 31
    assert stats.out_of_stock == 2
    assert stats.low_stock == 2
    assert stats.expired == 1
    assert stats.expiring_soon == 2


def test_summarize_empty():
    stats = summarize([], [], [], [], today=TODAY)
    assert stats.total_revenue == 0
    assert stats.out_of_stock == 0


# ---------- activity ----------

@pytest.fixture
def sales():
    return [
        {"id": 1, "total": "12.00", "sale_date": "2026-10-19T10:00:00", "SaleItems": [{"Product": {"name": "Coke"}}]},
        {"id": 2, "total": 5, "sale_date": None, "created_at": "2026-10-18T09:00:00", "SaleItems": []},
        {"id": 3, "total": 1},
    ]


@pytest.fixture
def purchases():
    return [
        {"id": 7, "total": "300", "created_at": "2026-10-19T10:00:00"},
        {"id": 8, "total": "40", "created_at": "2026-10-19T12:00:00"},
    ]


def test_merge_activity_newest_first(sales, purchases):
    feed = merge_activity(sales, purchases, limit=None)
    assert [(e.kind, e.id) for e in feed] == [
        (ActivityKind.PURCHASE, 8),
        (ActivityKind.SALE, 1),       # ties with purchase 7; sales come first
        (ActivityKind.PURCHASE, 7),
        (ActivityKind.SALE, 2),
        (ActivityKind.SALE, 3),       # no timestamp
    ]


def test_merge_activity_entries(sales, purchases):
    feed = {(e.kind, e.id): e for e in merge_activity(sales, purchases, limit=None)}
    coke = feed[(ActivityKind.SALE, 1)]
    assert coke.title == "New Sale"
    assert coke.description == "Sale #1 - Coke"
    assert coke.amount == Decimal("12.00")
    assert feed[(ActivityKind.SALE, 2)].description == "Sale #2 - Other Product"
    assert feed[(ActivityKind.SALE, 2)].timestamp == datetime(2026, 10, 18, 9, 0)
    assert feed[(ActivityKind.PURCHASE, 7)].description == "Purchase #7"


def test_merge_activity_limit_and_windows(sales, purchases):
    assert len(merge_activity(sales, purchases, limit=3)) == 3
    feed = merge_activity(sales, purchases, limit=None, sales_window=1, purchases_window=0)
    assert [e.id for e in feed] == [1]
    with pytest.raises(InvalidQuery):
        merge_activity(sales, purchases, limit=-1)
