"""Permissive coercion, date and formatting helpers shared by the engine.

Every function here degrades to a documented default instead of raising:
upstream collections come from a REST API and are frequently partial, and a
single dirty record must never break a list page or the dashboard.
"""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import pandas as pd


def to_number(value: Any) -> float:
    """Coerce ``value`` to a finite float; missing or invalid input is 0."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_quantity(value: Any) -> float:
    """Coerce a stock quantity; never negative."""
    return max(0.0, to_number(value))


def to_decimal(value: Any) -> Decimal:
    """Exact counterpart of :func:`to_number` for money amounts."""
    if value is None or isinstance(value, bool):
        return Decimal(int(bool(value)))
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if isinstance(value, float) and not math.isfinite(value):
        return Decimal(0)
    if isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return Decimal(0)
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return Decimal(0)
        return amount if amount.is_finite() else Decimal(0)
    return Decimal(0)


def to_text(value: Any) -> str:
    """Render a scalar the way it is shown and searched in list pages."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse ``value`` into a naive datetime, or None when it is not a date.

    Timezone-aware inputs are converted to local time before the zone is
    dropped, so calendar comparisons line up with ``date.today()``. Numbers
    are read as epoch milliseconds, which is what the REST payloads carry.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            stamp = pd.to_datetime(value.strip(), errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
        if stamp is None or pd.isna(stamp):
            return None
        parsed = stamp.to_pydatetime()
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def days_left(value: Any, today: Optional[date] = None) -> Optional[int]:
    """Whole calendar days from ``today`` to ``value``; negative means past.

    Both ends are truncated to midnight, so an expiry later today is 0 and
    one earlier today is still 0, never -1.
    """
    parsed = parse_date(value)
    if parsed is None:
        return None
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()
    return (parsed.date() - today).days


def get_field(record: Any, path: str) -> Any:
    """Look up a dotted ``path`` (``Supplier.name``) in a record."""
    current = record
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def collation_key(value: str) -> str:
    # Case-insensitive, normalisation-stable ordering for Latin and Khmer names.
    return unicodedata.normalize("NFKC", value).casefold()


def format_money(amount: Any) -> str:
    return f"${to_decimal(amount):,.2f}"


def format_date(value: Any) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return "N/A"
    return parsed.strftime("%d/%m/%Y")


def format_time_ago(value: Any, now: Optional[datetime] = None) -> str:
    """Coarse relative age used by the activity feed."""
    parsed = parse_date(value)
    if parsed is None:
        return "Recently"
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    seconds = max(0, math.floor((now - parsed).total_seconds()))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"
