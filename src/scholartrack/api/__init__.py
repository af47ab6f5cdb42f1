"""Page API for ScholarTrack."""

from scholartrack.api.app import app, create_app
from scholartrack.api.models import (
    APIResponse,
    StudentDetail,
    StudentListView,
    StudentPayload,
)

__all__ = [
    "APIResponse",
    "StudentDetail",
    "StudentListView",
    "StudentPayload",
    "app",
    "create_app",
]
