"""Students - query service, list controller and form validation."""

from scholartrack.students.controller import StudentListController
from scholartrack.students.dashboard import load_dashboard
from scholartrack.students.models import (
    DashboardData,
    DashboardStats,
    Pagination,
    ServiceResult,
    Student,
    StudentField,
    StudentFilters,
    StudentQueryOptions,
    StudentStatus,
    StudentYear,
)
from scholartrack.students.service import StudentService
from scholartrack.students.validation import (
    StudentForm,
    StudentFormData,
    validate_student_form,
)

__all__ = [
    "DashboardData",
    "DashboardStats",
    "Pagination",
    "ServiceResult",
    "Student",
    "StudentField",
    "StudentFilters",
    "StudentForm",
    "StudentFormData",
    "StudentListController",
    "StudentQueryOptions",
    "StudentService",
    "StudentStatus",
    "StudentYear",
    "load_dashboard",
    "validate_student_form",
]
