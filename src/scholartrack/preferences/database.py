"""SQLite engine and session handling for the preference store."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scholartrack.preferences.models import Base

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Engine

MEMORY_PATH = ":memory:"


def _enable_wal(dbapi_connection: object, _connection_record: object) -> None:
    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(db_path: str) -> Engine:
    """Create the engine for a preferences file, or a shared in-memory DB.

    The in-memory variant keeps a single connection usable from any thread so
    a TestClient and the test body see the same rows.
    """
    if db_path == MEMORY_PATH:
        engine = create_engine(
            f"sqlite:///{MEMORY_PATH}",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(f"sqlite:///{db_path}")

    event.listen(engine, "connect", _enable_wal)
    return engine


class Database:
    """Lazily opened SQLite database holding the preferences table."""

    def __init__(self, db_path: str = "scholartrack.db") -> None:
        self.db_path = db_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = build_engine(self.db_path)
        return self._engine

    def _session_factory(self) -> sessionmaker[Session]:
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions

    def create_tables(self) -> None:
        """Create the preferences table if missing."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def journal_mode(self) -> str:
        with self.engine.connect() as conn:
            return str(conn.execute(text("PRAGMA journal_mode")).scalar())

    def close(self) -> None:
        """Dispose of the engine; it is reopened on next use."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
