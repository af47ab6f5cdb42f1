"""PreferenceStore - locally persisted user preferences."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from scholartrack.preferences.database import Database
from scholartrack.preferences.exceptions import InvalidPreferenceError, PreferenceStoreError
from scholartrack.preferences.models import Preference

logger = logging.getLogger("scholartrack.preferences")

DARK_MODE_KEY = "darkMode"


class PreferenceStore:
    """Key/value preferences stored in SQLite.

    Values are stored as strings; booleans use "true"/"false".
    """

    def __init__(self, db_path: str = "scholartrack.db") -> None:
        """Open the store, creating the database and table if needed.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def get(self, key: str) -> str | None:
        """Get a stored value, or None if never set."""
        with self._db.session() as session:
            preference = session.get(Preference, key)
            return preference.value if preference is not None else None

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            PreferenceStoreError: If the database write fails
        """
        try:
            with self._db.session() as session:
                preference = session.get(Preference, key)
                if preference is None:
                    session.add(Preference(key=key, value=value))
                else:
                    preference.value = value
        except SQLAlchemyError as e:
            raise PreferenceStoreError(f"Failed to store preference {key!r}: {e}") from e

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean value.

        Raises:
            InvalidPreferenceError: If the stored value is not "true" or "false"
        """
        value = self.get(key)
        if value is None:
            return default
        if value not in ("true", "false"):
            raise InvalidPreferenceError(f"Preference {key!r} is not a boolean: {value!r}")
        return value == "true"

    def set_bool(self, key: str, value: bool) -> None:
        self.set(key, "true" if value else "false")

    # --- Dark mode ---

    @property
    def dark_mode(self) -> bool:
        """Whether dark mode is on; unreadable values count as off."""
        try:
            return self.get_bool(DARK_MODE_KEY)
        except InvalidPreferenceError as e:
            logger.warning("Ignoring stored dark mode value: %s", e)
            return False

    def toggle_dark_mode(self) -> bool:
        """Flip dark mode and persist it.

        Returns:
            The new value
        """
        enabled = not self.dark_mode
        self.set_bool(DARK_MODE_KEY, enabled)
        logger.info("Dark mode %s", "enabled" if enabled else "disabled")
        return enabled
