"""Pydantic models for the page API."""

from __future__ import annotations

from datetime import date
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from scholartrack.students.formatting import (
    calculate_age,
    format_date,
    initials,
    status_label,
)
from scholartrack.students.models import StudentField, StudentStatus, StudentYear
from scholartrack.students.validation import StudentFormData

T = TypeVar("T")

StatusFilter = Literal["", "active", "inactive"]
YearFilter = Literal["", "Freshman", "Sophomore", "Junior", "Senior"]


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Student request models


class StudentPayload(BaseModel):
    """Request body for creating or editing a student.

    Values are taken as typed; required fields and the email format are
    checked by the form validator so each field gets its own message.
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    dob: str = ""
    program: str = ""
    enrollment_date: str = ""
    status: StudentStatus = StudentStatus.ACTIVE
    year: StudentYear = StudentYear.FRESHMAN

    def to_form_data(self, student_id: int | None = None) -> StudentFormData:
        return StudentFormData(
            id=student_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
            dob=self.dob,
            program=self.program,
            enrollment_date=self.enrollment_date,
            status=self.status.value,
            year=self.year.value,
        )


class FiltersUpdate(BaseModel):
    """Request body for changing list filters. Omitted fields are unchanged."""

    search_term: str | None = None
    status: StatusFilter | None = None
    year: YearFilter | None = None


class SortRequest(BaseModel):
    """Request body for sorting the list by a column."""

    field: StudentField


class PageRequest(BaseModel):
    """Request body for moving to a page and/or changing the page size."""

    page: int | None = None
    limit: int | None = Field(default=None, ge=1, le=100)


# Student views


class StudentRow(BaseModel):
    """A student as shown in lists."""

    id: int | None
    full_name: str
    initials: str
    email: str
    phone: str
    program: str
    year: str
    status: StudentStatus
    status_label: str
    enrollment_date: date | None
    enrollment_date_display: str


class StudentDetail(StudentRow):
    """A student as shown on the detail page."""

    first_name: str
    last_name: str
    enrollment_date_display_long: str
    dob: date | None
    dob_display: str
    age: int | None


def student_to_row(student: Any) -> StudentRow:
    """Convert a Student model to a StudentRow."""
    return StudentRow(
        id=student.id,
        full_name=student.full_name,
        initials=initials(student),
        email=student.email,
        phone=student.phone,
        program=student.program,
        year=student.year.value,
        status=student.status,
        status_label=status_label(student.status),
        enrollment_date=student.enrollment_date,
        enrollment_date_display=format_date(student.enrollment_date),
    )


def student_to_detail(student: Any, today: date | None = None) -> StudentDetail:
    """Convert a Student model to a StudentDetail."""
    row = student_to_row(student)
    return StudentDetail(
        **row.model_dump(),
        first_name=student.first_name,
        last_name=student.last_name,
        enrollment_date_display_long=format_date(student.enrollment_date, long=True),
        dob=student.dob,
        dob_display=format_date(student.dob, long=True),
        age=calculate_age(student.dob, today),
    )


class FiltersView(BaseModel):
    search_term: str
    status: str
    year: str
    sort_field: str
    sort_direction: str
    active: bool


class PaginationView(BaseModel):
    total: int
    current_page: int
    limit: int
    total_pages: int
    showing_from: int
    showing_to: int
    summary: str
    pages: list[int]


class StudentListView(BaseModel):
    """The student list screen."""

    students: list[StudentRow]
    filters: FiltersView
    pagination: PaginationView
    empty_message: str | None = None


EMPTY_FILTERED = "No students match your search criteria. Try adjusting your filters."
EMPTY_UNFILTERED = (
    "You haven't added any students yet. Create your first student record to get started."
)


def controller_to_list_view(controller: Any) -> StudentListView:
    """Render the list controller's state."""
    filters = controller.filters
    pagination = controller.pagination

    empty_message = None
    if not controller.students:
        empty_message = EMPTY_FILTERED if filters.is_filtered else EMPTY_UNFILTERED

    return StudentListView(
        students=[student_to_row(s) for s in controller.students],
        filters=FiltersView(
            search_term=filters.search_term,
            status=filters.status,
            year=filters.year,
            sort_field=filters.sort_field,
            sort_direction=str(filters.sort_direction),
            active=filters.is_filtered,
        ),
        pagination=PaginationView(
            total=pagination.total,
            current_page=pagination.current_page,
            limit=pagination.limit,
            total_pages=controller.total_pages,
            showing_from=controller.showing_from,
            showing_to=controller.showing_to,
            summary=(
                f"Showing {controller.showing_from} to {controller.showing_to} "
                f"of {pagination.total} students"
            ),
            pages=list(range(1, controller.total_pages + 1)),
        ),
        empty_message=empty_message,
    )


# Dashboard


class DashboardStatsView(BaseModel):
    students: int
    active: int
    inactive: int


class DashboardView(BaseModel):
    """The dashboard screen."""

    stats: DashboardStatsView
    recent_students: list[StudentRow]


def dashboard_to_view(dashboard: Any) -> DashboardView:
    """Convert DashboardData to a DashboardView."""
    return DashboardView(
        stats=DashboardStatsView(
            students=dashboard.stats.students,
            active=dashboard.stats.active,
            inactive=dashboard.stats.inactive,
        ),
        recent_students=[student_to_row(s) for s in dashboard.recent_students],
    )


# Auth and public pages


class PageView(BaseModel):
    """A public page (login, signup, error)."""

    page: str
    title: str
    message: str | None = None
    redirect: str | None = None
    links: dict[str, str] = Field(default_factory=dict)


class CallbackRequest(BaseModel):
    """Outcome reported by the identity provider's widget."""

    user: dict[str, Any] | None = None
    current_path: str = "/"
    redirect: str | None = None


class NavigationResponse(BaseModel):
    """Where the client should navigate next."""

    redirect_to: str


# Preferences and notifications


class DarkModeResponse(BaseModel):
    dark_mode: bool


class NoticeResponse(BaseModel):
    level: str
    message: str
