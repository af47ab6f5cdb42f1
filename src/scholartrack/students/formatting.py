"""Display helpers for student screens."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from scholartrack.students.models import StudentStatus

if TYPE_CHECKING:
    from scholartrack.students.models import Student

NOT_AVAILABLE = "N/A"


def format_date(value: date | None, long: bool = False) -> str:
    """Render a date as "May 12, 1998" ("Sep 1, 2021" in short form)."""
    if value is None:
        return NOT_AVAILABLE
    month = value.strftime("%B" if long else "%b")
    return f"{month} {value.day}, {value.year}"


def calculate_age(dob: date | None, today: date | None = None) -> int | None:
    """Age in completed years on ``today``."""
    if dob is None:
        return None
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def initials(student: Student) -> str:
    return f"{student.first_name[:1]}{student.last_name[:1]}"


def status_label(status: StudentStatus) -> str:
    return "Active" if status is StudentStatus.ACTIVE else "Inactive"
