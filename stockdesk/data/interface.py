from __future__ import annotations

from typing import Any, Dict, List, Protocol

Record = Dict[str, Any]


class RecordSource(Protocol):
    """
    Host-side contract that hands normalized collections to the console.

    Each method returns a plain list of records, already unwrapped from
    whatever envelope the REST endpoint used. Implementations must not filter
    or sort: that is the engine's job and it always works on the full
    collection.
    """

    def get_products(self) -> List[Record]:
        """All products."""
        ...

    def get_sales(self) -> List[Record]:
        """All sales, newest first as the API returns them."""
        ...

    def get_purchases(self) -> List[Record]:
        """All purchases."""
        ...

    def get_customers(self) -> List[Record]:
        """All customers."""
        ...

    def get_suppliers(self) -> List[Record]:
        """All suppliers."""
        ...

    def get_staff(self) -> List[Record]:
        """All staff members."""
        ...

    def get_users(self) -> List[Record]:
        """All user accounts."""
        ...

    def get_notifications(self) -> List[Record]:
        """Notifications for the current user."""
        ...
