from .query import (
    Query,
    ResultPage,
    SearchScope,
    SortDirection,
    build_query,
)
from .schema import FieldKind, TableSchema

from .alerts import ExpiryAlert, ExpirySeverity, StockAlert, StockSeverity
from .activity import ActivityEntry, ActivityKind
from .dashboard import DashboardStats
from .notifications import BadgeStatus, ExpiryBadge, NotificationView
from .list_stats import CustomerStats, PurchaseStats

__all__ = [
    # Query models
    "Query",
    "ResultPage",
    "SearchScope",
    "SortDirection",
    "build_query",
    "FieldKind",
    "TableSchema",
    # Alerts
    "ExpiryAlert",
    "ExpirySeverity",
    "StockAlert",
    "StockSeverity",
    # Dashboard
    "ActivityEntry",
    "ActivityKind",
    "DashboardStats",
    # Notifications
    "BadgeStatus",
    "ExpiryBadge",
    "NotificationView",
    # List page statistics
    "CustomerStats",
    "PurchaseStats",
]
