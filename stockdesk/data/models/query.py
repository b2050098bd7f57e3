from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import InvalidQuery


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SearchScope(str, Enum):
    """ALL concatenates every searchable field; FIELD uses one search group."""
    ALL = "all"
    FIELD = "field"


# Changing any of these means the current page number no longer applies.
_PAGE_RESETTING_FIELDS = frozenset(
    {"search_term", "search_scope", "search_field", "sort_key", "sort_direction", "filters"}
)


class Query(BaseModel):
    """Filter, sort and page parameters for one list page request."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    search_term: str = Field(default="", description="Case-insensitive substring to search for")
    search_scope: SearchScope = Field(default=SearchScope.ALL, description="Search every field or one search group")
    search_field: Optional[str] = Field(default=None, description="Search group used when scope is FIELD")
    sort_key: Optional[str] = Field(default=None, description="Field to sort by (None uses the table default)")
    sort_direction: SortDirection = Field(default=SortDirection.ASC, description="Sort direction")
    page: int = Field(default=1, description="Requested page, clamped into the valid range")
    page_size: int = Field(default=10, gt=0, description="Rows per page")
    filters: Dict[str, Any] = Field(default_factory=dict, description="Exact-match attribute filters")

    @field_validator("search_term", mode="before")
    @classmethod
    def _strip_term(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    def refine(self, **changes: Any) -> "Query":
        """Return a copy with ``changes`` applied.

        Any change to search, sort or filters sends the caller back to page 1
        unless a page is given explicitly.
        """
        if "page" not in changes and _PAGE_RESETTING_FIELDS.intersection(changes):
            changes["page"] = 1
        return build_query(**{**self.model_dump(), **changes})

    def toggle_sort(self, key: str) -> "Query":
        """Column-header click: flip direction on the active key, else sort ascending."""
        if self.sort_key == key and self.sort_direction == SortDirection.ASC:
            direction = SortDirection.DESC
        else:
            direction = SortDirection.ASC
        return self.refine(sort_key=key, sort_direction=direction)


def build_query(**kwargs: Any) -> Query:
    """Build a :class:`Query`, reporting bad parameters as :class:`InvalidQuery`."""
    try:
        return Query(**kwargs)
    except ValidationError as e:
        raise InvalidQuery(f"Invalid list query: {e}") from e


class ResultPage(BaseModel):
    """One page of filtered and sorted records plus paging metadata."""
    items: List[Any] = Field(description="Records on this page, in display order")
    total_count: int = Field(description="Number of records after filtering")
    total_pages: int = Field(description="ceil(total_count / page_size)")
    page: int = Field(description="Page actually returned, after clamping")
    page_size: int = Field(description="Rows per page")

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def start_index(self) -> int:
        """1-based position of the first item, or 0 for an empty page."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1
