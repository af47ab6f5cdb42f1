"""StudentService - student CRUD and queries over the remote record store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from scholartrack.remote.exceptions import RemoteConfigError, RemoteStoreError
from scholartrack.students.models import (
    STUDENT_TABLE,
    ServiceResult,
    Student,
    StudentQueryOptions,
)
from scholartrack.students.query import build_student_query

if TYPE_CHECKING:
    from collections.abc import Mapping

    from scholartrack.remote.client import RecordStoreClient

logger = logging.getLogger("scholartrack.students.service")

MISSING_CLIENT_ERROR = "Failed to initialize remote client"
MISSING_ID_ERROR = "Student ID is required for updates"
INVALID_DATA_ERROR = "Invalid student data"

# Failures that are turned into an unsuccessful result
SERVICE_ERRORS = (RemoteStoreError, ValidationError, KeyError, TypeError, ValueError)


class StudentService:
    """Student operations against the remote record store.

    Every operation returns a ServiceResult and never raises: transport
    errors, unsuccessful or malformed responses and a missing client all
    become ``success=False`` with an error message.
    """

    def __init__(self, client: RecordStoreClient | None, table: str = STUDENT_TABLE) -> None:
        """Initialize the service.

        Args:
            client: Remote store client, or None when it could not be configured
            table: Remote table holding student records
        """
        self._client = client
        self.table = table

    @property
    def client(self) -> RecordStoreClient:
        """The remote client.

        Raises:
            RemoteConfigError: If no client was configured
        """
        if self._client is None:
            raise RemoteConfigError(MISSING_CLIENT_ERROR)
        return self._client

    async def fetch_students(
        self, options: StudentQueryOptions | None = None
    ) -> ServiceResult[list[Student]]:
        """Fetch one page of students matching the filters.

        Args:
            options: Search, filters, sort and page window. Defaults apply when omitted.

        Returns:
            Result with the page of students and the total number of matches
        """
        options = options or StudentQueryOptions()
        try:
            params = build_student_query(options).to_dict()
            response = await self.client.fetch_records(self.table, params)
            students = [Student.model_validate(r) for r in response.get("data") or []]
            total = int(response.get("total") or 0)
            logger.debug("Fetched %d of %d student(s)", len(students), total)
            return ServiceResult(success=True, data=students, total=total)
        except SERVICE_ERRORS as e:
            logger.error("Error fetching students: %s", e)
            return ServiceResult(
                success=False,
                data=[],
                total=0,
                error=_message(e, "Failed to fetch students"),
            )

    async def get_student_by_id(self, student_id: int | str) -> ServiceResult[Student]:
        """Fetch one student.

        Args:
            student_id: The student's record ID

        Returns:
            Result with the student, or ``success=False`` when not found
        """
        try:
            response = await self.client.get_record_by_id(self.table, student_id)
            record = response.get("data")
            if not record:
                return ServiceResult(
                    success=False, error=f"Student with ID {student_id} not found"
                )
            return ServiceResult(success=True, data=Student.model_validate(record))
        except SERVICE_ERRORS as e:
            logger.error("Error fetching student with ID %s: %s", student_id, e)
            return ServiceResult(success=False, error=_message(e, "Failed to fetch student"))

    async def create_student(
        self, data: Student | Mapping[str, Any]
    ) -> ServiceResult[Student]:
        """Create a student record.

        Args:
            data: Student fields; any ID is dropped and assigned by the store

        Returns:
            Result with the stored record
        """
        try:
            student = _as_student(data)
            response = await self.client.create_record(
                self.table, {"records": [student.to_record(include_id=False)]}
            )
            created = _first_result(response, "Failed to create student record")
            logger.info("Created student %s", created.id)
            return ServiceResult(success=True, data=created)
        except SERVICE_ERRORS as e:
            logger.error("Error creating student record: %s", e)
            return ServiceResult(
                success=False, error=_message(e, "Failed to create student record")
            )

    async def update_student(
        self, data: Student | Mapping[str, Any]
    ) -> ServiceResult[Student]:
        """Replace a student record.

        Args:
            data: Full student record including its ID

        Returns:
            Result with the stored record. Fails without contacting the store
            when the ID is missing.
        """
        try:
            student = _as_student(data)
            if not student.id:
                raise ValueError(MISSING_ID_ERROR)
            response = await self.client.update_record(
                self.table, {"records": [student.to_record()]}
            )
            updated = _first_result(response, "Failed to update student record")
            logger.info("Updated student %s", student.id)
            return ServiceResult(success=True, data=updated)
        except SERVICE_ERRORS as e:
            logger.error("Error updating student record: %s", e)
            return ServiceResult(
                success=False, error=_message(e, "Failed to update student record")
            )

    async def delete_student(self, student_id: int | str) -> ServiceResult[None]:
        """Delete a student record.

        Args:
            student_id: The student's record ID

        Returns:
            Result without data
        """
        try:
            response = await self.client.delete_record(
                self.table, {"recordIds": [student_id]}
            )
            if not response.get("success"):
                raise RemoteStoreError(
                    response.get("message") or "Failed to delete student record"
                )
            logger.info("Deleted student %s", student_id)
            return ServiceResult(success=True)
        except SERVICE_ERRORS as e:
            logger.error("Error deleting student record: %s", e)
            return ServiceResult(
                success=False, error=_message(e, "Failed to delete student record")
            )


def _as_student(data: Student | Mapping[str, Any]) -> Student:
    """Parse caller-supplied fields; bad values fail before any request is made."""
    if isinstance(data, Student):
        return data
    try:
        return Student.model_validate(dict(data))
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise ValueError(f"{INVALID_DATA_ERROR}: {', '.join(fields)}") from e


def _first_result(response: dict[str, Any], default_error: str) -> Student:
    """Extract the record from a create/update response."""
    results = response.get("results") or []
    if response.get("success") and results:
        return Student.model_validate(results[0]["data"])
    raise RemoteStoreError(response.get("message") or default_error)


def _message(error: Exception, default: str) -> str:
    if isinstance(error, ValidationError):
        return default
    if isinstance(error, KeyError):
        return default
    return str(error) or default
