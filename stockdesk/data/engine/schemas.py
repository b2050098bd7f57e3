from __future__ import annotations

from typing import Dict

from ..exceptions import InvalidQuery
from ..models import FieldKind, SortDirection, TableSchema

TEXT, NUMBER, DATE = FieldKind.TEXT, FieldKind.NUMBER, FieldKind.DATE


CUSTOMERS = TableSchema(
    name="customers",
    field_kinds={"id": NUMBER, "name": TEXT, "phone": TEXT, "address": TEXT, "created_at": DATE},
    search_fields={"name": ["name"], "phone": ["phone"], "address": ["address"]},
    default_sort="created_at",
    default_direction=SortDirection.DESC,
)

SUPPLIERS = TableSchema(
    name="suppliers",
    field_kinds={
        "id": NUMBER,
        "name": TEXT,
        "phone_first": TEXT,
        "address": TEXT,
        "status": TEXT,
        "created_at": DATE,
    },
    search_fields={
        "id": ["id"],
        "name": ["name"],
        "phone": ["phone_first", "phone_second"],
        "address": ["address"],
    },
    filter_fields={"status": "status"},
    filter_defaults={"status": "active"},
    default_sort="id",
    default_direction=SortDirection.DESC,
)

PURCHASES = TableSchema(
    name="purchases",
    field_kinds={
        "id": NUMBER,
        "Supplier.name": TEXT,
        "total": NUMBER,
        "paid": NUMBER,
        "balance": NUMBER,
        "created_at": DATE,
    },
    search_fields={
        "id": ["id"],
        "supplier": ["Supplier.name"],
        "date": ["created_at"],
    },
    # The date group is only searched on request; ALL covers ids, supplier and amounts.
    all_fields=["id", "Supplier.name", "total", "paid", "balance"],
    filter_fields={"supplier": "Supplier.name"},
    default_sort="id",
    default_direction=SortDirection.DESC,
)

STAFF = TableSchema(
    name="staff",
    field_kinds={
        "id": NUMBER,
        "staff_id": TEXT,
        "name": TEXT,
        "gender": TEXT,
        "phone": TEXT,
        "dob": DATE,
        "status": NUMBER,
    },
    search_fields={"name": ["name"], "staff_id": ["staff_id"], "phone": ["phone"]},
    filter_fields={"status": "status", "role": "Role.name"},
    default_sort="id",
)

USERS = TableSchema(
    name="users",
    field_kinds={
        "id": NUMBER,
        "username": TEXT,
        "name": TEXT,
        "email": TEXT,
        "status": TEXT,
        "createdAt": DATE,
    },
    search_fields={
        "username": ["username"],
        "name": ["name"],
        "email": ["email"],
        "phone": ["phone"],
    },
    filter_fields={"role": "Role.name", "status": "status"},
    default_sort="id",
)

PRODUCTS = TableSchema(
    name="products",
    field_kinds={
        "id": NUMBER,
        "name": TEXT,
        "barcode": TEXT,
        "Brand.name": TEXT,
        "qty": NUMBER,
        "price": NUMBER,
        "expire_date": DATE,
        "created_at": DATE,
    },
    search_fields={"name": ["name"], "barcode": ["barcode"], "brand": ["Brand.name"]},
    filter_fields={"brand": "Brand.name", "category": "Category.name"},
    default_sort="id",
    default_direction=SortDirection.DESC,
)

TABLE_SCHEMAS: Dict[str, TableSchema] = {
    schema.name: schema
    for schema in (CUSTOMERS, SUPPLIERS, PURCHASES, STAFF, USERS, PRODUCTS)
}


def get_table_schema(name: str) -> TableSchema:
    if name not in TABLE_SCHEMAS:
        raise InvalidQuery(f"Unknown table: {name!r}")
    return TABLE_SCHEMAS[name]
