from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from ..interface import Record, RecordSource

# Envelope keys each endpoint has been seen to use, most specific first.
ENVELOPE_KEYS: Dict[str, Sequence[str]] = {
    "products": ("product", "products", "data"),
    "sales": ("sale", "sales", "data"),
    "purchases": ("purchase", "purchases", "data"),
    "customers": ("customer", "customers", "data"),
    "suppliers": ("supplier", "suppliers", "data"),
    "staff": ("staff", "data"),
    "users": ("users", "data"),
    "notifications": ("notifications", "data"),
}

COLLECTIONS = tuple(ENVELOPE_KEYS)


def unwrap_collection(payload: Any, *keys: str) -> List[Record]:
    """Return the record list inside a REST payload.

    A bare list is returned as is; a mapping yields the first of ``keys``
    that holds a list; anything else (None, an error body) yields ``[]``.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


class PayloadRecordSource(RecordSource):
    """
    Wraps REST payloads the host has already fetched.

    Payloads are unwrapped once at construction; every getter returns a fresh
    list so callers cannot disturb each other.
    """

    def __init__(self, **payloads: Any) -> None:
        unknown = set(payloads) - set(COLLECTIONS)
        if unknown:
            raise ValueError(f"Unknown collections: {', '.join(sorted(unknown))}")
        self._collections: Dict[str, List[Record]] = {
            name: unwrap_collection(payloads.get(name), *ENVELOPE_KEYS[name])
            for name in COLLECTIONS
        }

    def _get(self, name: str) -> List[Record]:
        return list(self._collections[name])

    def get_products(self) -> List[Record]:
        return self._get("products")

    def get_sales(self) -> List[Record]:
        return self._get("sales")

    def get_purchases(self) -> List[Record]:
        return self._get("purchases")

    def get_customers(self) -> List[Record]:
        return self._get("customers")

    def get_suppliers(self) -> List[Record]:
        return self._get("suppliers")

    def get_staff(self) -> List[Record]:
        return self._get("staff")

    def get_users(self) -> List[Record]:
        return self._get("users")

    def get_notifications(self) -> List[Record]:
        return self._get("notifications")

    def replace(self, name: str, payload: Optional[Any]) -> None:
        """Swap in a freshly fetched payload for one collection."""
        if name not in self._collections:
            raise ValueError(f"Unknown collection: {name}")
        self._collections[name] = unwrap_collection(payload, *ENVELOPE_KEYS[name])
