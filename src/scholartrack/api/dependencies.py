"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Request

from scholartrack.auth import AuthenticationRequired, AuthSession, login_redirect
from scholartrack.notifications import NoticeQueue
from scholartrack.preferences import PreferenceStore
from scholartrack.students import StudentListController, StudentService

# Global PreferenceStore instance (initialized on app startup)
_preferences: PreferenceStore | None = None


def init_preferences(db_path: str = "scholartrack.db") -> PreferenceStore:
    """Initialize the global PreferenceStore instance."""
    global _preferences  # noqa: PLW0603
    _preferences = PreferenceStore(db_path)
    return _preferences


def close_preferences() -> None:
    """Close the global PreferenceStore instance."""
    global _preferences  # noqa: PLW0603
    if _preferences is not None:
        _preferences.close()
        _preferences = None


def get_preferences() -> Generator[PreferenceStore, None, None]:
    """Dependency that provides the PreferenceStore instance."""
    if _preferences is None:
        raise RuntimeError("PreferenceStore not initialized. Call init_preferences() first.")
    yield _preferences


PreferencesDep = Annotated[PreferenceStore, Depends(get_preferences)]

# Global NoticeQueue instance
_notices: NoticeQueue | None = None


def init_notices() -> NoticeQueue:
    """Initialize the global NoticeQueue instance."""
    global _notices  # noqa: PLW0603
    _notices = NoticeQueue()
    return _notices


def get_notices() -> Generator[NoticeQueue, None, None]:
    """Dependency that provides the NoticeQueue instance."""
    if _notices is None:
        raise RuntimeError("NoticeQueue not initialized. Call init_notices() first.")
    yield _notices


NoticesDep = Annotated[NoticeQueue, Depends(get_notices)]

# Global StudentService and list controller (initialized on app startup)
_student_service: StudentService | None = None
_list_controller: StudentListController | None = None


def init_students(
    service: StudentService,
    page_size: int,
    notices: NoticeQueue,
) -> StudentListController:
    """Initialize the global StudentService and its list controller."""
    global _student_service, _list_controller  # noqa: PLW0603
    _student_service = service
    _list_controller = StudentListController(service, page_size=page_size, notify=notices)
    return _list_controller


def close_students() -> None:
    """Drop the global StudentService and list controller."""
    global _student_service, _list_controller  # noqa: PLW0603
    _student_service = None
    _list_controller = None


def get_student_service() -> Generator[StudentService, None, None]:
    """Dependency that provides the StudentService instance."""
    if _student_service is None:
        raise RuntimeError("StudentService not initialized. Call init_students() first.")
    yield _student_service


def get_list_controller() -> Generator[StudentListController, None, None]:
    """Dependency that provides the StudentListController instance."""
    if _list_controller is None:
        raise RuntimeError("StudentListController not initialized. Call init_students() first.")
    yield _list_controller


StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
ListControllerDep = Annotated[StudentListController, Depends(get_list_controller)]

# Global AuthSession instance (initialized on app startup)
_auth_session: AuthSession | None = None


def init_auth_session(session: AuthSession) -> AuthSession:
    """Initialize the global AuthSession instance."""
    global _auth_session  # noqa: PLW0603
    _auth_session = session
    return _auth_session


def close_auth_session() -> None:
    """Drop the global AuthSession instance."""
    global _auth_session  # noqa: PLW0603
    _auth_session = None


def get_auth_session() -> Generator[AuthSession, None, None]:
    """Dependency that provides the AuthSession instance."""
    if _auth_session is None:
        raise RuntimeError("AuthSession not initialized. Call init_auth_session() first.")
    yield _auth_session


AuthSessionDep = Annotated[AuthSession, Depends(get_auth_session)]


def require_authenticated(request: Request, session: AuthSessionDep) -> AuthSession:
    """Guard for protected pages.

    Raises:
        AuthenticationRequired: With the login URL that returns to this page
    """
    if not session.is_authenticated:
        raise AuthenticationRequired(login_redirect(request.url.path, request.url.query))
    return session
