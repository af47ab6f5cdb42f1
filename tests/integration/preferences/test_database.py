"""Integration tests for the preference database."""

from pathlib import Path

import pytest
from sqlalchemy import inspect

from scholartrack.preferences.database import Database
from scholartrack.preferences.models import Preference


@pytest.fixture
def database(tmp_path: Path):
    """Create a file-backed database instance with tables."""
    db = Database(str(tmp_path / "scholartrack.db"))
    db.create_tables()
    yield db
    db.close()


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_creates_file_in_new_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "data" / "scholartrack.db"
        db = Database(str(db_path))
        db.create_tables()

        assert db_path.exists()
        db.close()

    def test_creates_preferences_table(self, database: Database) -> None:
        assert inspect(database.engine).get_table_names() == ["preferences"]

    def test_wal_mode(self, database: Database) -> None:
        assert database.journal_mode() == "wal"

    def test_create_tables_is_idempotent(self, database: Database) -> None:
        database.create_tables()

        assert inspect(database.engine).get_table_names() == ["preferences"]

    def test_close_allows_reopen(self, database: Database) -> None:
        database.close()

        # Engine is recreated on next use
        assert inspect(database.engine).get_table_names() == ["preferences"]


@pytest.mark.integration
class TestSessions:
    """Tests for the session context manager."""

    def test_commits_on_success(self, database: Database) -> None:
        with database.session() as session:
            session.add(Preference(key="darkMode", value="true"))

        with database.session() as session:
            assert session.get(Preference, "darkMode").value == "true"

    def test_rolls_back_on_error(self, database: Database) -> None:
        with pytest.raises(RuntimeError), database.session() as session:
            session.add(Preference(key="darkMode", value="true"))
            raise RuntimeError("boom")

        with database.session() as session:
            assert session.get(Preference, "darkMode") is None
