"""StudentListController - filter, sort and pagination state of the student list."""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from scholartrack.notifications import NoticeLevel, Notifier, log_notifier
from scholartrack.remote.models import SortDirection
from scholartrack.students.models import (
    DEFAULT_LIMIT,
    Pagination,
    ServiceResult,
    Student,
    StudentFilters,
    StudentQueryOptions,
)
from scholartrack.students.service import StudentService
from scholartrack.students.validation import StudentFormData

logger = logging.getLogger("scholartrack.students.controller")


class StudentListController:
    """Owns the student list screen state and keeps it in sync with the store.

    Each state change issues a new fetch. Loads are numbered; a response that
    arrives after a newer load was started is discarded, so the list always
    reflects the most recently requested filters.
    """

    def __init__(
        self,
        service: StudentService,
        page_size: int = DEFAULT_LIMIT,
        notify: Notifier = log_notifier,
    ) -> None:
        self.service = service
        self.notify = notify
        self.filters = StudentFilters()
        self.pagination = Pagination(limit=page_size)
        self.students: list[Student] = []
        self.loading = False
        self.loaded = False
        self.error: str | None = None
        self._request_seq = 0

    # --- Derived display values ---

    @property
    def total_pages(self) -> int:
        if self.pagination.limit <= 0:
            return 0
        return math.ceil(self.pagination.total / self.pagination.limit)

    @property
    def showing_from(self) -> int:
        if self.pagination.total == 0:
            return 0
        return (self.pagination.current_page - 1) * self.pagination.limit + 1

    @property
    def showing_to(self) -> int:
        return min(self.showing_from + self.pagination.limit - 1, self.pagination.total)

    def query_options(self) -> StudentQueryOptions:
        """Current filters and page translated to a limit/offset query."""
        return StudentQueryOptions(
            search_term=self.filters.search_term,
            status=self.filters.status,
            year=self.filters.year,
            limit=self.pagination.limit,
            offset=self.pagination.offset,
            sort_field=self.filters.sort_field,
            sort_direction=self.filters.sort_direction,
        )

    # --- Loading ---

    async def load(self) -> bool:
        """Fetch the current page.

        Returns:
            True if this response was applied to the list state
        """
        self._request_seq += 1
        seq = self._request_seq
        self.loading = True

        result = await self.service.fetch_students(self.query_options())

        if seq != self._request_seq:
            logger.debug("Discarding stale student list response #%d", seq)
            return False

        self.loading = False
        self.loaded = True
        if result.success:
            self.students = list(result.data or [])
            self.pagination.total = result.total or 0
            self.error = None
            last_page = max(self.total_pages, 1)
            if self.pagination.current_page > last_page:
                # The matches shrank below the current page
                logger.debug(
                    "Page %d is past the last page %d",
                    self.pagination.current_page,
                    last_page,
                )
                self.pagination.current_page = last_page
                if self.pagination.total:
                    return await self.load()
        else:
            self.error = result.error
            self.notify(NoticeLevel.ERROR, "Failed to load students")
        return True

    # --- Filter and sort ---

    async def set_filters(
        self,
        search_term: str | None = None,
        status: str | None = None,
        year: str | None = None,
    ) -> None:
        """Change any of the filters and reload."""
        changes = {
            name: value
            for name, value in (("search_term", search_term), ("status", status), ("year", year))
            if value is not None
        }
        self.filters = replace(self.filters, **changes)
        await self.load()

    async def set_search_term(self, search_term: str) -> None:
        await self.set_filters(search_term=search_term)

    async def set_status(self, status: str) -> None:
        await self.set_filters(status=status)

    async def set_year(self, year: str) -> None:
        await self.set_filters(year=year)

    async def sort_by(self, field: str) -> None:
        """Sort by a field; sorting by the current field again flips the direction."""
        if self.filters.sort_field == field:
            direction = SortDirection(self.filters.sort_direction).toggled()
        else:
            direction = SortDirection.ASC
        self.filters = replace(self.filters, sort_field=field, sort_direction=direction)
        await self.load()

    async def clear_filters(self) -> None:
        """Reset search, status and year and restore the default sort."""
        self.filters = StudentFilters()
        await self.load()

    # --- Pagination ---

    async def change_page(self, page: int) -> bool:
        """Go to a page.

        Returns:
            False (and changes nothing) when the page is out of range
        """
        if page < 1 or page > self.total_pages:
            return False
        self.pagination.current_page = page
        await self.load()
        return True

    async def set_page_size(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"Page size must be at least 1, got {limit}")
        self.pagination.limit = limit
        await self.load()

    # --- Mutations ---

    async def save(self, data: StudentFormData, is_editing: bool) -> ServiceResult[Student]:
        """Create or update a student from a validated form, then reload.

        Suitable as the submit handler of a StudentForm.

        Returns:
            The service result; on failure the list state is left unchanged
        """
        record = data.to_record()
        if is_editing:
            result = await self.service.update_student(record)
            success_message, failure_message = (
                "Student updated successfully!",
                "Failed to update student",
            )
        else:
            result = await self.service.create_student(record)
            success_message, failure_message = (
                "Student added successfully!",
                "Failed to add student",
            )

        if not result.success:
            self.notify(NoticeLevel.ERROR, result.error or failure_message)
            return result

        self.notify(NoticeLevel.SUCCESS, success_message)
        await self.load()
        return result

    async def delete(self, student_id: int | str) -> ServiceResult[None]:
        """Delete a student and reload the current page."""
        result = await self.service.delete_student(student_id)
        if not result.success:
            self.notify(NoticeLevel.ERROR, result.error or "Failed to delete student")
            return result

        self.notify(NoticeLevel.SUCCESS, "Student deleted successfully!")
        await self.load()
        return result
