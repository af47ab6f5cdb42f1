"""Query request shapes understood by the remote record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class MatchOperator(StrEnum):
    """Predicate match operators."""

    CONTAINS = "Contains"
    EXACT_MATCH = "ExactMatch"


class GroupOperator(StrEnum):
    """Boolean operator joining the conditions of a where group."""

    OR = "OR"
    AND = "AND"


class SortDirection(StrEnum):
    """Sort direction for an orderBy entry."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass
class Predicate:
    """A single field-match condition."""

    field_name: str
    operator: MatchOperator
    values: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "operator": self.operator.value,
            "values": list(self.values),
        }


@dataclass
class WhereGroup:
    """Conditions combined with a single boolean operator."""

    operator: GroupOperator
    conditions: list[Predicate] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operator": self.operator.value,
            "conditions": [c.to_dict() for c in self.conditions],
        }


@dataclass
class OrderBy:
    """Sort key for a query."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "direction": self.direction.value}


@dataclass
class PagingInfo:
    """Offset/limit page window."""

    limit: int
    offset: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"limit": self.limit, "offset": self.offset}


@dataclass
class QueryParams:
    """Full query sent to ``fetch_records``.

    ``where`` and ``where_groups`` are left as None when they should be omitted
    from the request body entirely; an empty list is still sent.
    """

    fields: list[str]
    order_by: list[OrderBy]
    paging_info: PagingInfo
    where: list[Predicate] | None = None
    where_groups: list[WhereGroup] | None = None

    def to_dict(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "fields": [{"field": {"name": name}} for name in self.fields],
            "orderBy": [o.to_dict() for o in self.order_by],
            "pagingInfo": self.paging_info.to_dict(),
        }
        if self.where is not None:
            params["where"] = [p.to_dict() for p in self.where]
        if self.where_groups is not None:
            params["whereGroups"] = [g.to_dict() for g in self.where_groups]
        return params
