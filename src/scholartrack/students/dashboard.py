"""Dashboard queries: recent enrollments and aggregate counts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scholartrack.remote.models import SortDirection
from scholartrack.students.models import (
    DashboardData,
    DashboardStats,
    ServiceResult,
    StudentField,
    StudentQueryOptions,
    StudentStatus,
)

if TYPE_CHECKING:
    from scholartrack.students.service import StudentService

logger = logging.getLogger("scholartrack.students.dashboard")

RECENT_STUDENTS_LIMIT = 3


async def load_dashboard(service: StudentService) -> ServiceResult[DashboardData]:
    """Load the dashboard.

    The counts come from the ``total`` of two single-row queries (all students
    and active students) rather than from downloading every record.
    """
    recent = await service.fetch_students(
        StudentQueryOptions(
            limit=RECENT_STUDENTS_LIMIT,
            sort_field=StudentField.ENROLLMENT_DATE.value,
            sort_direction=SortDirection.DESC,
        )
    )
    if not recent.success:
        return ServiceResult(success=False, error=recent.error)

    all_students = await service.fetch_students(StudentQueryOptions(limit=1))
    active_students = await service.fetch_students(
        StudentQueryOptions(limit=1, status=StudentStatus.ACTIVE.value)
    )
    if not all_students.success or not active_students.success:
        error = all_students.error or active_students.error
        return ServiceResult(success=False, error=error)

    total = all_students.total or 0
    active = active_students.total or 0
    stats = DashboardStats(students=total, active=active, inactive=max(total - active, 0))
    logger.debug("Dashboard stats: %s", stats)

    return ServiceResult(
        success=True,
        data=DashboardData(stats=stats, recent_students=list(recent.data or [])),
    )
