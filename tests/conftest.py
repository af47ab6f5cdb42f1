"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from scholartrack.remote import ApperClient


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


def make_record(record_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """A student record as returned by the remote store."""
    record = {
        "Id": record_id,
        "firstName": "Emma",
        "lastName": "Johnson",
        "email": "emma@example.com",
        "phone": "555-0100",
        "dob": "2002-03-14",
        "program": "Computer Science",
        "enrollmentDate": "2021-09-01",
        "status": "active",
        "year": "Sophomore",
    }
    record.update(overrides)
    return record


@pytest.fixture
def record_factory() -> Callable[..., dict[str, Any]]:
    """Factory for student records with overridable fields."""
    return make_record


@pytest.fixture
def student_record() -> dict[str, Any]:
    """A single student record."""
    return make_record()


@pytest.fixture
def mock_client() -> AsyncMock:
    """A remote store client whose every call succeeds with no data."""
    client = AsyncMock(spec=ApperClient)
    client.fetch_records.return_value = {"data": [], "total": 0}
    client.get_record_by_id.return_value = {"data": None}
    client.create_record.return_value = {"success": True, "results": []}
    client.update_record.return_value = {"success": True, "results": []}
    client.delete_record.return_value = {"success": True}
    return client
