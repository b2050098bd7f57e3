from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Optional

from ..models import BadgeStatus, ExpiryBadge, NotificationView
from ..values import days_left, get_field

EXPIRY_NOTIFICATION_TYPES = ("expiring_soon", "expiring_today", "expired")
DEFAULT_NOTIFICATION_WINDOW_DAYS = 7
DEFAULT_NOTIFICATION_LIMIT = 10
URGENT_DAYS = 3


def _expire_date(notification: Any) -> Any:
    return get_field(notification, "data.expire_date") or get_field(notification, "Product.expire_date")


def expiry_badge(
    notification: Any,
    window_days: int = DEFAULT_NOTIFICATION_WINDOW_DAYS,
    today: Optional[date] = None,
) -> Optional[ExpiryBadge]:
    """Badge for a notification's product expiry, or None outside the window."""
    days = days_left(_expire_date(notification), today)
    if days is None or days > window_days:
        return None
    if days < 0:
        return ExpiryBadge(days_left=days, status=BadgeStatus.EXPIRED, label="Expired")
    if days == 0:
        return ExpiryBadge(days_left=days, status=BadgeStatus.TODAY, label="Today")
    status = BadgeStatus.URGENT if days <= URGENT_DAYS else BadgeStatus.UPCOMING
    return ExpiryBadge(days_left=days, status=status, label=f"{days}d")


def filter_notifications(
    notifications: Iterable[Any],
    window_days: int = DEFAULT_NOTIFICATION_WINDOW_DAYS,
    limit: Optional[int] = DEFAULT_NOTIFICATION_LIMIT,
    today: Optional[date] = None,
) -> List[NotificationView]:
    """Notifications for the dropdown.

    Expiry notifications whose product is outside ``window_days`` (or has no
    expiry date) are dropped; every other notification is kept as is.
    """
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()

    views: List[NotificationView] = []
    for notification in notifications:
        if limit is not None and len(views) >= limit:
            break
        badge = expiry_badge(notification, window_days, today)
        if get_field(notification, "type") in EXPIRY_NOTIFICATION_TYPES and badge is None:
            continue
        views.append(NotificationView(notification=notification, expiry=badge))
    return views


def unread_count(notifications: Iterable[Any]) -> int:
    return sum(1 for n in notifications if not get_field(n, "is_read"))
