from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stockdesk.data.values import (
    collation_key,
    days_left,
    format_date,
    format_money,
    format_time_ago,
    get_field,
    parse_date,
    to_decimal,
    to_number,
    to_quantity,
    to_text,
)


def test_to_number_degrades_to_zero():
    """Missing or invalid numbers never raise."""
    assert to_number(None) == 0
    assert to_number("") == 0
    assert to_number("abc") == 0
    assert to_number(float("nan")) == 0
    assert to_number(object()) == 0
    assert to_number(" 12.5 ") == 12.5
    assert to_number(7) == 7
    assert to_number(True) == 1


def test_to_quantity_is_never_negative():
    assert to_quantity(-3) == 0
    assert to_quantity("4") == 4


def test_to_decimal():
    assert to_decimal("19.99") == Decimal("19.99")
    assert to_decimal(4) == Decimal(4)
    assert to_decimal(None) == 0
    assert to_decimal("n/a") == 0
    assert to_decimal(float("inf")) == 0


def test_to_text():
    assert to_text(None) == ""
    assert to_text(10.0) == "10"
    assert to_text(10.5) == "10.5"
    assert to_text(42) == "42"


def test_parse_date():
    assert parse_date("2026-10-19") == datetime(2026, 10, 19)
    assert parse_date(date(2026, 1, 2)) == datetime(2026, 1, 2)
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date(None) is None


@pytest.mark.usefixtures("phnom_penh_time")
def test_aware_values_use_the_local_calendar():
    assert parse_date("2026-10-19T10:00:00Z") == datetime(2026, 10, 19, 17, 0)
    assert parse_date("2026-10-19T10:00:00+07:00") == datetime(2026, 10, 19, 10, 0)
    assert parse_date(0) == datetime(1970, 1, 1, 7, 0)
    # Local midnight today, sent as UTC
    assert days_left("2026-10-18T17:00:00Z", date(2026, 10, 19)) == 0
    assert days_left("2026-10-18T16:59:00Z", date(2026, 10, 19)) == -1


def test_days_left_ignores_time_of_day():
    today = date(2026, 10, 19)
    assert days_left("2026-10-19T23:59:00", today) == 0
    assert days_left("2026-10-19T00:01:00", today) == 0
    assert days_left("2026-10-20T00:00:00", today) == 1
    assert days_left("2026-10-18T23:59:00", today) == -1
    assert days_left("garbage", today) is None


def test_get_field_follows_dotted_paths():
    record = {"id": 1, "Supplier": {"name": "Acme"}, "Brand": None}
    assert get_field(record, "Supplier.name") == "Acme"
    assert get_field(record, "Brand.name") is None
    assert get_field(record, "missing") is None


def test_collation_key_is_case_insensitive():
    assert collation_key("Alpha") < collation_key("beta")
    assert collation_key("ALPHA") == collation_key("alpha")


def test_formatting():
    assert format_money(1234.5) == "$1,234.50"
    assert format_money(None) == "$0.00"
    assert format_date("2026-03-05") == "05/03/2026"
    assert format_date(None) == "N/A"


def test_format_time_ago():
    now = datetime(2026, 10, 19, 12, 0, 0)
    assert format_time_ago(now - timedelta(seconds=30), now) == "30s ago"
    assert format_time_ago(now - timedelta(minutes=5), now) == "5m ago"
    assert format_time_ago(now - timedelta(hours=3), now) == "3h ago"
    assert format_time_ago(now - timedelta(days=2), now) == "2d ago"
    assert format_time_ago(None, now) == "Recently"


@pytest.mark.usefixtures("phnom_penh_time")
def test_format_time_ago_with_aware_now():
    now = datetime(2026, 10, 19, 5, 0, tzinfo=timezone.utc)
    assert format_time_ago("2026-10-19T11:00:00", now) == "1h ago"
