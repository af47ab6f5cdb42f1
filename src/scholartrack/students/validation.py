"""Student form validation and submission."""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from scholartrack.students.models import StudentStatus, StudentYear

if TYPE_CHECKING:
    from scholartrack.students.models import Student

logger = logging.getLogger("scholartrack.students.validation")

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

# Required text fields, checked after trimming
REQUIRED_TEXT_FIELDS = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "phone": "Phone number is required",
    "program": "Program is required",
}

# Required date fields: (missing message, malformed message)
REQUIRED_DATE_FIELDS = {
    "dob": ("Date of birth is required", "Date of birth must be a valid date (YYYY-MM-DD)"),
    "enrollment_date": (
        "Enrollment date is required",
        "Enrollment date must be a valid date (YYYY-MM-DD)",
    ),
}

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Email is invalid"

SubmitHandler = Callable[["StudentFormData", bool], Awaitable[Any]]


@dataclass
class StudentFormData:
    """Raw values of the student form, as typed by the user."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    dob: str = ""
    program: str = ""
    enrollment_date: str = ""
    status: str = StudentStatus.ACTIVE.value
    year: str = StudentYear.FRESHMAN.value
    id: int | None = None

    @classmethod
    def from_student(cls, student: Student) -> StudentFormData:
        """Prefill the form for editing an existing record."""
        return cls(
            id=student.id,
            first_name=student.first_name or "",
            last_name=student.last_name or "",
            email=student.email or "",
            phone=student.phone or "",
            dob=student.dob.isoformat() if student.dob else "",
            program=student.program or "",
            enrollment_date=(
                student.enrollment_date.isoformat() if student.enrollment_date else ""
            ),
            status=student.status.value if student.status else StudentStatus.ACTIVE.value,
            year=student.year.value if student.year else StudentYear.FRESHMAN.value,
        )

    def to_record(self) -> dict[str, Any]:
        """Values keyed by the remote store's field names."""
        record: dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "dob": self.dob,
            "program": self.program,
            "enrollmentDate": self.enrollment_date,
            "status": self.status,
            "year": self.year,
        }
        if self.id is not None:
            record["Id"] = self.id
        return record


def validate_student_form(data: StudentFormData) -> dict[str, str]:
    """Check a form submission.

    Args:
        data: Form values

    Returns:
        Error message per invalid field; empty when the form is valid
    """
    errors: dict[str, str] = {}

    for name, message in REQUIRED_TEXT_FIELDS.items():
        if not (getattr(data, name) or "").strip():
            errors[name] = message

    email = (data.email or "").strip()
    if not email:
        errors["email"] = EMAIL_REQUIRED
    elif not EMAIL_PATTERN.search(data.email):
        errors["email"] = EMAIL_INVALID

    for name, (missing, malformed) in REQUIRED_DATE_FIELDS.items():
        value = getattr(data, name)
        if not value:
            errors[name] = missing
        elif not _is_iso_date(value):
            errors[name] = malformed

    return errors


def _is_iso_date(value: str) -> bool:
    if not ISO_DATE_PATTERN.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


@dataclass
class StudentForm:
    """Create/edit form state.

    Validation runs before the submit handler; the handler is never called
    while any field is invalid.
    """

    data: StudentFormData = field(default_factory=StudentFormData)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_editing(self) -> bool:
        return self.data.id is not None

    def reset(self, student: Student | None = None) -> None:
        """Load a record for editing (or blank values) and clear all errors."""
        self.data = StudentFormData.from_student(student) if student else StudentFormData()
        self.errors = {}

    def update_field(self, name: str, value: str) -> None:
        """Set one field, clearing any error shown for it."""
        if name not in asdict(self.data) or name == "id":
            raise AttributeError(f"Unknown form field: {name}")
        setattr(self.data, name, value)
        self.errors.pop(name, None)

    def validate(self) -> bool:
        self.errors = validate_student_form(self.data)
        return not self.errors

    async def submit(self, on_submit: SubmitHandler) -> Any:
        """Validate and hand the form to the caller's submit handler.

        Args:
            on_submit: Called with ``(data, is_editing)`` when the form is valid

        Returns:
            None if validation failed (see ``errors``), otherwise whatever the
            handler returned
        """
        if not self.validate():
            logger.debug("Form rejected: %s", ", ".join(sorted(self.errors)))
            return None
        return await on_submit(self.data, self.is_editing)
