"""Data models for students and the service result envelope."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date  # noqa: TC003 - used at runtime by pydantic
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from scholartrack.remote.models import SortDirection

T = TypeVar("T")

STUDENT_TABLE = "student"


class StudentStatus(StrEnum):
    """Enrollment status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class StudentYear(StrEnum):
    """Academic year."""

    FRESHMAN = "Freshman"
    SOPHOMORE = "Sophomore"
    JUNIOR = "Junior"
    SENIOR = "Senior"


class StudentField(StrEnum):
    """Field names as stored in the remote student table."""

    ID = "Id"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    PHONE = "phone"
    DOB = "dob"
    PROGRAM = "program"
    ENROLLMENT_DATE = "enrollmentDate"
    STATUS = "status"
    YEAR = "year"


# Fields matched by the free-text search box
SEARCH_FIELDS = (
    StudentField.FIRST_NAME,
    StudentField.LAST_NAME,
    StudentField.EMAIL,
    StudentField.PROGRAM,
)

DEFAULT_SORT_FIELD = StudentField.LAST_NAME.value
DEFAULT_SORT_DIRECTION = SortDirection.ASC
DEFAULT_LIMIT = 10


class Student(BaseModel):
    """A student record as held by the remote store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = Field(default=None, alias="Id")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    dob: date | None = None
    program: str = ""
    enrollment_date: date | None = Field(default=None, alias="enrollmentDate")
    status: StudentStatus = StudentStatus.ACTIVE
    year: StudentYear = StudentYear.FRESHMAN

    @field_validator("first_name", "last_name", "email", "phone", "program", mode="before")
    @classmethod
    def null_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dob", "enrollment_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("status", "year", mode="before")
    @classmethod
    def null_choice_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "":
            return StudentStatus.ACTIVE if info.field_name == "status" else StudentYear.FRESHMAN
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_record(self, include_id: bool = True) -> dict[str, Any]:
        """Serialize using the remote store's field names."""
        record = self.model_dump(by_alias=True, mode="json")
        if not include_id or record.get("Id") is None:
            record.pop("Id", None)
        return record


class ServiceResult(BaseModel, Generic[T]):
    """Uniform result of every student service operation.

    Callers branch on ``success`` instead of catching exceptions.
    """

    success: bool
    data: T | None = None
    total: int | None = None
    error: str | None = None


@dataclass
class StudentQueryOptions:
    """Filter, sort and page window for a student list query."""

    search_term: str = ""
    status: str = ""
    year: str = ""
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = DEFAULT_SORT_DIRECTION


@dataclass
class StudentFilters:
    """Filter and sort state of the student list."""

    search_term: str = ""
    status: str = ""
    year: str = ""
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = DEFAULT_SORT_DIRECTION

    @property
    def is_filtered(self) -> bool:
        return bool(self.search_term or self.status or self.year)


@dataclass
class Pagination:
    """Page position of the student list."""

    total: int = 0
    current_page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.limit


@dataclass
class DashboardStats:
    """Aggregate counts shown on the dashboard."""

    students: int = 0
    active: int = 0
    inactive: int = 0


@dataclass
class DashboardData:
    """Everything the dashboard renders."""

    stats: DashboardStats = field(default_factory=DashboardStats)
    recent_students: list[Student] = field(default_factory=list)
