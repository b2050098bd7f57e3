"""In-memory filter -> sort -> paginate pipeline shared by every list page.

Functions here never raise for dirty record data: missing fields search as
empty text, sort as zero, the empty string or the oldest possible date.
They raise :class:`InvalidQuery` only when the query itself is malformed.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar, Union

import pandas as pd

from ..exceptions import InvalidQuery
from ..models import (
    FieldKind,
    Query,
    ResultPage,
    SearchScope,
    SortDirection,
    TableSchema,
    build_query,
)
from ..models.schema import looks_like_date_key
from ..values import collation_key, get_field, parse_date, to_number, to_text

Record = Any
SearchFields = Union[Sequence[str], Mapping[str, Sequence[str]]]

_E = TypeVar("_E", bound=Enum)
_EPOCH = datetime(1970, 1, 1)


def _coerce_enum(enum_cls: Type[_E], value: Any, what: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidQuery(f"Unknown {what}: {value!r}") from None


# ---------- search ----------

def _search_text(value: Any, kind: Optional[FieldKind]) -> str:
    if kind == FieldKind.DATE:
        parsed = parse_date(value)
        # Same M/D/YYYY rendering the purchase list displays and searches.
        return f"{parsed.month}/{parsed.day}/{parsed.year}" if parsed else ""
    return to_text(value)


def _resolve_search_paths(fields: SearchFields, scope: SearchScope, field: Optional[str]) -> List[str]:
    if isinstance(fields, Mapping):
        if scope == SearchScope.FIELD:
            if field not in fields:
                raise InvalidQuery(f"Unknown search field: {field!r}")
            return list(fields[field])
        paths: List[str] = []
        for group in fields.values():
            paths.extend(p for p in group if p not in paths)
        return paths

    paths = list(fields)
    if scope == SearchScope.FIELD:
        if field not in paths:
            raise InvalidQuery(f"Unknown search field: {field!r}")
        return [field]
    return paths


def search(
    records: Iterable[Record],
    term: Optional[str],
    scope: Union[SearchScope, str] = SearchScope.ALL,
    fields: SearchFields = (),
    field: Optional[str] = None,
    kinds: Optional[Mapping[str, FieldKind]] = None,
) -> List[Record]:
    """Return the records whose selected fields contain ``term``.

    The selected field values are joined with a single space, lower-cased and
    substring-matched against the lower-cased, trimmed term. An empty term
    returns every record. ``fields`` is either a flat list of field paths or a
    mapping of search-group name to paths; with ``SearchScope.FIELD`` the
    ``field`` argument names the path (or group) to use.
    """
    records = list(records)
    needle = (term or "").strip().lower()
    if not needle:
        return records

    scope = _coerce_enum(SearchScope, scope, "search scope")
    paths = _resolve_search_paths(fields, scope, field)
    if not records:
        return []

    kinds = kinds or {}
    haystack = pd.Series(
        [" ".join(_search_text(get_field(r, p), kinds.get(p)) for p in paths) for r in records],
        dtype=object,
    )
    mask = haystack.str.lower().str.contains(needle, regex=False)
    return [record for record, keep in zip(records, mask.tolist()) if keep]


# ---------- attribute filters ----------

def _is_wildcard(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", "all"))


def _matches(actual: Any, expected: Any) -> bool:
    return actual == expected or to_text(actual) == to_text(expected)


def apply_filters(
    records: Iterable[Record],
    filters: Optional[Mapping[str, Any]],
    schema: TableSchema,
) -> List[Record]:
    """Keep records whose filtered fields equal the requested values.

    ``None``, ``""`` and ``"all"`` disable a filter. A record missing the
    field is compared using the schema's default for it (suppliers without a
    status count as ``"active"``).
    """
    records = list(records)
    for param, expected in (filters or {}).items():
        path = schema.filter_path(param)
        if _is_wildcard(expected):
            continue
        default = schema.filter_defaults.get(param)

        def _value(record: Record) -> Any:
            actual = get_field(record, path)
            return default if actual is None or actual == "" else actual

        records = [r for r in records if _matches(_value(r), expected)]
    return records


# ---------- sort ----------

def infer_kind(records: Sequence[Record], key: str) -> FieldKind:
    """Guess the comparison kind for ``key`` when no schema declares it."""
    if looks_like_date_key(key):
        return FieldKind.DATE
    present = [v for v in (get_field(r, key) for r in records) if v is not None]
    if present and all(isinstance(v, (date, datetime)) for v in present):
        return FieldKind.DATE
    if present and all(isinstance(v, str) for v in present):
        return FieldKind.TEXT
    return FieldKind.NUMBER


def _instant(value: Any) -> float:
    parsed = parse_date(value)
    if parsed is None:
        return -math.inf
    return (parsed - _EPOCH).total_seconds()


def _sort_keys(records: Sequence[Record], key: str, kind: FieldKind) -> pd.Series:
    values = [get_field(r, key) for r in records]
    if kind == FieldKind.DATE:
        return pd.Series([_instant(v) for v in values], dtype="float64")
    if kind == FieldKind.TEXT:
        return pd.Series([collation_key(to_text(v)) for v in values], dtype=object)
    return pd.Series([to_number(v) for v in values], dtype="float64")


def sort(
    records: Iterable[Record],
    key: str,
    direction: Union[SortDirection, str] = SortDirection.ASC,
    kind: Union[FieldKind, str, None] = None,
) -> List[Record]:
    """Stable, type-directed sort of ``records`` by ``key``.

    Descending order is the exact reverse of ascending order, so records that
    tie on ``key`` also appear reversed.
    """
    direction = _coerce_enum(SortDirection, direction, "sort direction")
    records = list(records)
    if kind is None:
        kind = infer_kind(records, key)
    else:
        kind = _coerce_enum(FieldKind, kind, "field kind")
    if not records:
        return records

    order = _sort_keys(records, key, kind).sort_values(kind="mergesort").index
    ordered = [records[i] for i in order]
    if direction == SortDirection.DESC:
        ordered.reverse()
    return ordered


# ---------- paginate ----------

def paginate(records: Iterable[Record], page: int = 1, page_size: int = 10) -> ResultPage:
    """Slice one page out of ``records``, clamping ``page`` into range."""
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise InvalidQuery(f"page_size must be a positive integer, got {page_size!r}")
    records = list(records)
    total_count = len(records)
    total_pages = math.ceil(total_count / page_size)
    page = min(max(1, int(page)), max(1, total_pages))
    start = (page - 1) * page_size
    return ResultPage(
        items=records[start:start + page_size],
        total_count=total_count,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )


# ---------- pipeline ----------

def run(
    records: Iterable[Record],
    query: Union[Query, Mapping[str, Any], None],
    schema: TableSchema,
) -> ResultPage:
    """Filter, search, sort and paginate ``records`` for one list page."""
    if query is None:
        query = Query()
    elif isinstance(query, Mapping):
        query = build_query(**query)

    if query.sort_key:
        sort_key, direction = query.sort_key, query.sort_direction
    else:
        sort_key, direction = schema.default_sort, schema.default_direction
    kind = schema.kind_of(sort_key)
    paths = schema.search_paths(query.search_scope, query.search_field)

    rows = apply_filters(records, query.filters, schema)
    rows = search(rows, query.search_term, SearchScope.ALL, paths, kinds=schema.field_kinds)
    rows = sort(rows, sort_key, direction, kind)
    return paginate(rows, query.page, query.page_size)
