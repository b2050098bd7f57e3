from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..exceptions import InvalidQuery
from .query import SearchScope, SortDirection

# Key names that carry timestamps in the REST payloads.
_DATE_KEY = re.compile(r"(_at|_date|At|^date|^dob|_time)$")


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


def looks_like_date_key(key: str) -> bool:
    return bool(_DATE_KEY.search(key.rsplit(".", 1)[-1]))


class TableSchema(BaseModel):
    """Per-page description of which fields can be searched, sorted and filtered."""
    name: str = Field(description="Table name, e.g. 'customers'")
    field_kinds: Dict[str, FieldKind] = Field(description="Sortable fields and their scalar kind")
    search_fields: Dict[str, List[str]] = Field(description="Named search groups -> field paths")
    all_fields: Optional[List[str]] = Field(default=None, description="Paths searched by the ALL scope")
    filter_fields: Dict[str, str] = Field(default_factory=dict, description="Filter param -> field path")
    filter_defaults: Dict[str, Any] = Field(default_factory=dict, description="Value assumed when the field is missing")
    default_sort: str = Field(default="id", description="Sort key used when the query names none")
    default_direction: SortDirection = Field(default=SortDirection.ASC, description="Direction for the default sort")

    def all_search_paths(self) -> List[str]:
        if self.all_fields is not None:
            return list(self.all_fields)
        paths: List[str] = []
        for group in self.search_fields.values():
            for path in group:
                if path not in paths:
                    paths.append(path)
        return paths

    def search_paths(self, scope: SearchScope, field: Optional[str] = None) -> List[str]:
        if scope == SearchScope.ALL:
            return self.all_search_paths()
        if field not in self.search_fields:
            raise InvalidQuery(f"Unknown search field {field!r} for table {self.name!r}")
        return list(self.search_fields[field])

    def kind_of(self, key: str) -> FieldKind:
        if key not in self.field_kinds:
            raise InvalidQuery(f"Unknown sort key {key!r} for table {self.name!r}")
        return self.field_kinds[key]

    def filter_path(self, param: str) -> str:
        if param not in self.filter_fields:
            raise InvalidQuery(f"Unknown filter {param!r} for table {self.name!r}")
        return self.filter_fields[param]
