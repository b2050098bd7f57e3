from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

from stockdesk.config import AppConfig, get_config
from stockdesk.logging import get_logger

from .analytics.inventory import classify_expiry, classify_stock, merge_activity, summarize
from .analytics.list_stats import customer_stats, purchase_stats, status_counts
from .analytics.notifications import filter_notifications, unread_count
from .engine.schemas import get_table_schema
from .engine.table import run
from .interface import RecordSource
from .models import (
    ActivityEntry,
    CustomerStats,
    DashboardStats,
    ExpiryAlert,
    NotificationView,
    PurchaseStats,
    Query,
    ResultPage,
    StockAlert,
    build_query,
)


class InventoryConsole:
    """
    Host-facing facade over a RecordSource.
    - Every call re-reads the collections from the source and recomputes;
      nothing is cached here, so a refreshed source is picked up immediately.
    - Thresholds, windows and limits come from AppConfig.
    """

    def __init__(self, source: RecordSource, config: Optional[AppConfig] = None) -> None:
        self.source = source
        self.config = config or get_config()
        self.logger = get_logger(__name__)

    def _collection(self, table: str) -> List[Any]:
        getters = {
            "products": self.source.get_products,
            "purchases": self.source.get_purchases,
            "customers": self.source.get_customers,
            "suppliers": self.source.get_suppliers,
            "staff": self.source.get_staff,
            "users": self.source.get_users,
        }
        return getters[table]()

    # ---------- list pages ----------

    def default_query(self, **kwargs: Any) -> Query:
        return build_query(**{"page_size": self.config.page_size, **kwargs})

    def list_page(self, table: str, query: Union[Query, Mapping[str, Any], None] = None) -> ResultPage:
        schema = get_table_schema(table)
        if query is None:
            query = self.default_query()
        elif isinstance(query, Mapping):
            query = self.default_query(**query)
        result = run(self._collection(table), query, schema)
        self.logger.debug(
            f"{table}: page {result.page}/{result.total_pages}, {result.total_count} matching rows"
        )
        return result

    # ---------- dashboard ----------

    def stock_alerts(self, limit: Optional[int] = None) -> List[StockAlert]:
        alerts = classify_stock(
            self.source.get_products(),
            self.config.low_stock_threshold,
            self.config.critical_stock_threshold,
        )
        return alerts[: limit if limit is not None else self.config.stock_alert_limit]

    def expiry_alerts(self, today: Optional[date] = None) -> List[ExpiryAlert]:
        return classify_expiry(
            self.source.get_products(),
            self.config.expire_soon_window_days,
            self.config.expire_critical_window_days,
            today=today,
        )

    def dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        stats = summarize(
            self.source.get_products(),
            self.source.get_sales(),
            self.source.get_purchases(),
            self.source.get_customers(),
            low_threshold=self.config.low_stock_threshold,
            critical_threshold=self.config.critical_stock_threshold,
            soon_window_days=self.config.expire_soon_window_days,
            critical_window_days=self.config.expire_critical_window_days,
            today=today,
        )
        self.logger.info(
            f"Dashboard: {stats.total_products} products, {stats.out_of_stock} out of stock, "
            f"{stats.expired} expired"
        )
        return stats

    def recent_activity(self) -> List[ActivityEntry]:
        return merge_activity(
            self.source.get_sales(),
            self.source.get_purchases(),
            limit=self.config.activity_limit,
            sales_window=self.config.activity_sales_window,
            purchases_window=self.config.activity_purchases_window,
        )

    # ---------- notifications ----------

    def notifications(self, today: Optional[date] = None) -> List[NotificationView]:
        return filter_notifications(
            self.source.get_notifications(),
            window_days=self.config.notification_window_days,
            limit=self.config.notification_limit,
            today=today,
        )

    def unread_notifications(self) -> int:
        return unread_count(self.source.get_notifications())

    # ---------- list page headers ----------

    def customer_stats(self) -> CustomerStats:
        return customer_stats(self.source.get_customers())

    def supplier_status_counts(self) -> Dict[str, int]:
        return status_counts(self.source.get_suppliers(), "status", default="active")

    def purchase_stats(self) -> PurchaseStats:
        return purchase_stats(self.source.get_purchases())
