"""Unit tests for student form validation."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from scholartrack.students import (
    Student,
    StudentForm,
    StudentFormData,
    validate_student_form,
)
from scholartrack.students.validation import EMAIL_INVALID, EMAIL_REQUIRED


def _valid_data(**overrides) -> StudentFormData:
    values = {
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
    values.update(overrides)
    return StudentFormData(**values)


@pytest.mark.unit
class TestValidateStudentForm:
    """Tests for validate_student_form."""

    def test_valid(self) -> None:
        assert validate_student_form(_valid_data()) == {}

    def test_empty_form(self) -> None:
        """Every required field reports its own message."""
        errors = validate_student_form(StudentFormData())

        assert errors == {
            "first_name": "First name is required",
            "last_name": "Last name is required",
            "phone": "Phone number is required",
            "program": "Program is required",
            "email": EMAIL_REQUIRED,
            "dob": "Date of birth is required",
            "enrollment_date": "Enrollment date is required",
        }

    def test_whitespace_only_text_is_missing(self) -> None:
        errors = validate_student_form(_valid_data(first_name="   ", program="\t"))

        assert set(errors) == {"first_name", "program"}

    def test_whitespace_email_is_required(self) -> None:
        errors = validate_student_form(_valid_data(email="  "))

        assert errors == {"email": EMAIL_REQUIRED}

    @pytest.mark.parametrize("email", ["john", "john@example", "john @example.com", "@."])
    def test_invalid_email(self, email: str) -> None:
        assert validate_student_form(_valid_data(email=email)) == {"email": EMAIL_INVALID}

    @pytest.mark.parametrize("email", ["a@b.c", "first.last@uni.example.edu"])
    def test_valid_email(self, email: str) -> None:
        assert validate_student_form(_valid_data(email=email)) == {}

    @pytest.mark.parametrize("value", ["05/12/1998", "1998-5-12", "1998-02-30", "19980512"])
    def test_malformed_dates(self, value: str) -> None:
        errors = validate_student_form(_valid_data(dob=value, enrollment_date=value))

        assert errors == {
            "dob": "Date of birth must be a valid date (YYYY-MM-DD)",
            "enrollment_date": "Enrollment date must be a valid date (YYYY-MM-DD)",
        }


@pytest.mark.unit
class TestStudentFormData:
    """Tests for StudentFormData conversions."""

    def test_defaults(self) -> None:
        data = StudentFormData()

        assert data.status == "active"
        assert data.year == "Freshman"
        assert data.id is None

    def test_to_record_without_id(self) -> None:
        record = _valid_data().to_record()

        assert record["firstName"] == "John"
        assert record["enrollmentDate"] == "2020-09-01"
        assert "Id" not in record

    def test_from_student(self) -> None:
        student = Student(
            id=7,
            first_name="John",
            last_name="Davis",
            dob=date(2001, 5, 12),
            enrollment_date=None,
            status="inactive",
            year="Junior",
        )

        data = StudentFormData.from_student(student)

        assert data.id == 7
        assert data.dob == "2001-05-12"
        assert data.enrollment_date == ""
        assert data.status == "inactive"
        assert data.year == "Junior"
        assert data.to_record()["Id"] == 7


@pytest.mark.unit
class TestStudentForm:
    """Tests for StudentForm."""

    def test_update_field_clears_its_error(self) -> None:
        form = StudentForm()
        form.validate()

        form.update_field("first_name", "Ann")

        assert "first_name" not in form.errors
        assert "last_name" in form.errors
        assert form.data.first_name == "Ann"

    @pytest.mark.parametrize("name", ["nickname", "id"])
    def test_update_unknown_field(self, name: str) -> None:
        with pytest.raises(AttributeError):
            StudentForm().update_field(name, "x")

    def test_reset(self) -> None:
        form = StudentForm()
        form.validate()

        form.reset(Student(id=3, first_name="Ann"))

        assert form.errors == {}
        assert form.is_editing is True
        assert form.data.first_name == "Ann"

        form.reset()
        assert form.is_editing is False
        assert form.data.first_name == ""

    @pytest.mark.asyncio
    async def test_submit_invalid_skips_handler(self) -> None:
        handler = AsyncMock()
        form = StudentForm(data=_valid_data(email="not-an-email"))

        result = await form.submit(handler)

        assert result is None
        assert form.errors == {"email": EMAIL_INVALID}
        handler.assert_not_called()

    @pytest.mark.asyncio
    async def test_submit_edit(self) -> None:
        """Editing an existing record passes its data and is_editing=True."""
        handler = AsyncMock(return_value="saved")
        form = StudentForm()
        form.reset(Student(id=7, first_name="John", last_name="Davis", year="Senior"))
        for name, value in (
            ("email", "john.davis@example.com"),
            ("phone", "555-0123"),
            ("dob", "2001-05-12"),
            ("program", "Mathematics"),
            ("enrollment_date", "2020-09-01"),
        ):
            form.update_field(name, value)

        result = await form.submit(handler)

        assert result == "saved"
        data, is_editing = handler.call_args.args
        assert is_editing is True
        assert data.to_record()["Id"] == 7
        assert data.year == "Senior"
