"""Translate student list options into a remote store query."""

from __future__ import annotations

from scholartrack.remote.models import (
    GroupOperator,
    MatchOperator,
    OrderBy,
    PagingInfo,
    Predicate,
    QueryParams,
    SortDirection,
    WhereGroup,
)
from scholartrack.students.models import SEARCH_FIELDS, StudentField, StudentQueryOptions

# Every query selects the full record
STUDENT_FIELDS = [f.value for f in StudentField]


def build_search_group(search_term: str) -> list[Predicate]:
    """One Contains predicate per searchable field, to be OR-ed together."""
    return [
        Predicate(field_name=f.value, operator=MatchOperator.CONTAINS, values=[search_term])
        for f in SEARCH_FIELDS
    ]


def build_exact_filters(status: str, year: str) -> list[Predicate]:
    """ExactMatch predicates for the status and year filters that are set."""
    predicates = []
    if status:
        predicates.append(
            Predicate(
                field_name=StudentField.STATUS.value,
                operator=MatchOperator.EXACT_MATCH,
                values=[status],
            )
        )
    if year:
        predicates.append(
            Predicate(
                field_name=StudentField.YEAR.value,
                operator=MatchOperator.EXACT_MATCH,
                values=[year],
            )
        )
    return predicates


def build_student_query(options: StudentQueryOptions) -> QueryParams:
    """Build the query for one page of students.

    With a search term the four Contains predicates form a single OR group and
    the status/year predicates go in ``where`` (AND-ed with the group, possibly
    empty). Without one, ``where`` is only sent when a filter is set.
    """
    params = QueryParams(
        fields=list(STUDENT_FIELDS),
        order_by=[
            OrderBy(field=options.sort_field, direction=SortDirection(options.sort_direction))
        ],
        paging_info=PagingInfo(limit=options.limit, offset=options.offset),
    )

    exact = build_exact_filters(options.status, options.year)

    if options.search_term:
        params.where_groups = [
            WhereGroup(
                operator=GroupOperator.OR,
                conditions=build_search_group(options.search_term),
            )
        ]
        params.where = exact
    elif exact:
        params.where = exact

    return params
