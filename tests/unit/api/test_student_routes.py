"""Unit tests for student routes."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from fastapi.testclient import TestClient

from scholartrack.api.dependencies import (
    get_auth_session,
    get_list_controller,
    get_student_service,
)
from scholartrack.api.models import EMPTY_FILTERED, EMPTY_UNFILTERED
from scholartrack.api.routes import students
from scholartrack.auth import AuthenticationRequired, AuthSession
from scholartrack.students import StudentListController, StudentService

VALID_PAYLOAD = {
    "first_name": "John",
    "last_name": "Davis",
    "email": "john.davis@example.com",
    "phone": "555-0123",
    "dob": "2001-05-12",
    "program": "Mathematics",
    "enrollment_date": "2020-09-01",
    "status": "active",
    "year": "Senior",
}


@pytest.fixture
def session() -> AuthSession:
    """A signed-in session."""
    session = AuthSession()
    session.set_user({"emailAddress": "admin@example.com"})
    return session


@pytest.fixture
def service(mock_client: AsyncMock) -> StudentService:
    return StudentService(mock_client)


@pytest.fixture
def controller(service: StudentService) -> StudentListController:
    return StudentListController(service, page_size=10, notify=MagicMock())


@pytest.fixture
def app(session, service, controller):
    """Create a test FastAPI app with overridden dependencies."""
    app = FastAPI()

    def override_get_auth_session():
        yield session

    def override_get_student_service():
        yield service

    def override_get_list_controller():
        yield controller

    app.dependency_overrides[get_auth_session] = override_get_auth_session
    app.dependency_overrides[get_student_service] = override_get_student_service
    app.dependency_overrides[get_list_controller] = override_get_list_controller

    @app.exception_handler(AuthenticationRequired)
    async def authentication_required_handler(request: Request, exc: AuthenticationRequired):
        return RedirectResponse(exc.redirect_to, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    app.include_router(students.router)

    return app


@pytest.fixture
def client(app: FastAPI):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False, follow_redirects=False) as client:
        yield client


@pytest.mark.unit
class TestAuthGate:
    """Tests for the protected-route redirect."""

    def test_signed_out_redirects_to_login(self, client, session) -> None:
        session.clear_user()

        response = client.get("/students?page=2")

        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"] == "/login?redirect=/students?page=2"

    def test_detail_redirect(self, client, session, mock_client) -> None:
        session.clear_user()

        response = client.get("/students/7")

        assert response.headers["location"] == "/login?redirect=/students/7"
        mock_client.get_record_by_id.assert_not_called()


@pytest.mark.unit
class TestListStudents:
    """Tests for GET /students."""

    def test_list(self, client, mock_client, record_factory) -> None:
        mock_client.fetch_records.return_value = {
            "data": [record_factory(1), record_factory(2, firstName="Liam", status="inactive")],
            "total": 12,
        }

        response = client.get("/students")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [s["full_name"] for s in data["students"]] == ["Emma Johnson", "Liam Johnson"]
        assert data["students"][0]["initials"] == "EJ"
        assert data["students"][0]["enrollment_date_display"] == "Sep 1, 2021"
        assert data["students"][1]["status_label"] == "Inactive"
        assert data["pagination"]["summary"] == "Showing 1 to 10 of 12 students"
        assert data["pagination"]["pages"] == [1, 2]
        assert data["empty_message"] is None

    def test_loads_once(self, client, mock_client) -> None:
        client.get("/students")
        client.get("/students")

        assert mock_client.fetch_records.await_count == 1

    def test_empty_unfiltered(self, client) -> None:
        data = client.get("/students").json()["data"]

        assert data["students"] == []
        assert data["empty_message"] == EMPTY_UNFILTERED

    def test_load_failure_reports_error(self, client, mock_client) -> None:
        mock_client.fetch_records.return_value = {"data": [{"Id": "x"}], "total": 1}

        body = client.get("/students").json()

        assert body["error"] == "Failed to fetch students"
        assert body["data"]["students"] == []


@pytest.mark.unit
class TestListState:
    """Tests for filter, sort and page endpoints."""

    def test_filters(self, client, mock_client) -> None:
        response = client.patch("/students/filters", json={"search_term": "ann", "year": "Junior"})

        data = response.json()["data"]
        assert data["filters"]["search_term"] == "ann"
        assert data["filters"]["year"] == "Junior"
        assert data["filters"]["active"] is True
        assert data["empty_message"] == EMPTY_FILTERED
        _, params = mock_client.fetch_records.call_args.args
        assert params["whereGroups"][0]["operator"] == "OR"

    def test_invalid_filter_value(self, client) -> None:
        response = client.patch("/students/filters", json={"status": "graduated"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_clear_filters(self, client) -> None:
        client.patch("/students/filters", json={"status": "active"})

        data = client.delete("/students/filters").json()["data"]

        assert data["filters"]["status"] == ""
        assert data["filters"]["active"] is False

    def test_sort_toggle(self, client) -> None:
        first = client.post("/students/sort", json={"field": "lastName"}).json()["data"]
        second = client.post("/students/sort", json={"field": "email"}).json()["data"]

        assert first["filters"]["sort_direction"] == "desc"
        assert second["filters"]["sort_field"] == "email"
        assert second["filters"]["sort_direction"] == "asc"

    def test_sort_unknown_field(self, client) -> None:
        response = client.post("/students/sort", json={"field": "gpa"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_page_change(self, client, mock_client) -> None:
        mock_client.fetch_records.return_value = {"data": [], "total": 30}
        client.get("/students")

        data = client.post("/students/page", json={"page": 3}).json()["data"]

        assert data["pagination"]["current_page"] == 3
        assert mock_client.fetch_records.call_args.args[1]["pagingInfo"] == {
            "limit": 10,
            "offset": 20,
        }

    def test_page_out_of_range_ignored(self, client, mock_client) -> None:
        mock_client.fetch_records.return_value = {"data": [], "total": 5}
        client.get("/students")

        data = client.post("/students/page", json={"page": 2}).json()["data"]

        assert data["pagination"]["current_page"] == 1
        assert mock_client.fetch_records.await_count == 1

    def test_page_size(self, client, mock_client) -> None:
        data = client.post("/students/page", json={"limit": 25}).json()["data"]

        assert data["pagination"]["limit"] == 25

    def test_page_size_out_of_bounds(self, client) -> None:
        response = client.post("/students/page", json={"limit": 0})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.unit
class TestStudentDetail:
    """Tests for GET /students/{id}."""

    def test_detail(self, client, mock_client, record_factory) -> None:
        mock_client.get_record_by_id.return_value = {"data": record_factory(7)}

        response = client.get("/students/7")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["id"] == 7
        assert data["first_name"] == "Emma"
        assert data["dob_display"] == "March 14, 2002"
        assert data["enrollment_date_display_long"] == "September 1, 2021"
        assert isinstance(data["age"], int)

    def test_not_found(self, client) -> None:
        response = client.get("/students/99")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"data": None, "error": "Student with ID 99 not found"}


@pytest.mark.unit
class TestCreateStudent:
    """Tests for POST /students."""

    def test_create(self, client, mock_client, record_factory) -> None:
        mock_client.create_record.return_value = {
            "success": True,
            "results": [{"success": True, "data": record_factory(21, firstName="John")}],
        }

        response = client.post("/students", json=VALID_PAYLOAD)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["id"] == 21
        record = mock_client.create_record.call_args.args[1]["records"][0]
        assert record["firstName"] == "John"
        assert record["enrollmentDate"] == "2020-09-01"
        assert "Id" not in record

    def test_validation_errors(self, client, mock_client) -> None:
        response = client.post("/students", json={**VALID_PAYLOAD, "email": "john", "phone": " "})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json() == {
            "data": {"email": "Email is invalid", "phone": "Phone number is required"},
            "error": "Validation failed",
        }
        mock_client.create_record.assert_not_called()

    def test_malformed_date_is_a_validation_error(self, client, mock_client) -> None:
        response = client.post("/students", json={**VALID_PAYLOAD, "dob": "05/12/1998"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["data"] == {
            "dob": "Date of birth must be a valid date (YYYY-MM-DD)"
        }
        mock_client.create_record.assert_not_called()

    def test_remote_failure(self, client, mock_client) -> None:
        mock_client.create_record.return_value = {"success": False, "message": "Quota exceeded"}

        response = client.post("/students", json=VALID_PAYLOAD)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error"] == "Quota exceeded"


@pytest.mark.unit
class TestUpdateAndDelete:
    """Tests for PUT and DELETE /students/{id}."""

    def test_update(self, client, mock_client, record_factory) -> None:
        mock_client.update_record.return_value = {
            "success": True,
            "results": [{"success": True, "data": record_factory(7, year="Senior")}],
        }

        response = client.put("/students/7", json=VALID_PAYLOAD)

        assert response.status_code == status.HTTP_200_OK
        record = mock_client.update_record.call_args.args[1]["records"][0]
        assert record["Id"] == 7
        assert record["year"] == "Senior"

    def test_delete(self, client, mock_client) -> None:
        response = client.delete("/students/7")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_client.delete_record.assert_awaited_once_with("student", {"recordIds": [7]})

    def test_delete_failure(self, client, mock_client) -> None:
        mock_client.delete_record.return_value = {"success": False, "message": "Locked"}

        response = client.delete("/students/7")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json() == {"data": None, "error": "Locked"}
