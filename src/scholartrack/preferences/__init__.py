"""Preferences - locally persisted user settings such as dark mode."""

from scholartrack.preferences.exceptions import InvalidPreferenceError, PreferenceStoreError
from scholartrack.preferences.store import DARK_MODE_KEY, PreferenceStore

__all__ = [
    "DARK_MODE_KEY",
    "InvalidPreferenceError",
    "PreferenceStore",
    "PreferenceStoreError",
]
