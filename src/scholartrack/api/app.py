"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scholartrack import __version__
from scholartrack.api.dependencies import (
    close_auth_session,
    close_preferences,
    close_students,
    init_auth_session,
    init_notices,
    init_preferences,
    init_students,
)
from scholartrack.api.models import APIResponse
from scholartrack.api.routes import auth, dashboard, preferences, students
from scholartrack.auth import AuthenticationRequired, AuthSession
from scholartrack.config import Settings, load_settings
from scholartrack.preferences import PreferenceStoreError
from scholartrack.remote import initialize_client
from scholartrack.students import StudentService

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from scholartrack.remote import RecordStoreClient

logger = logging.getLogger("scholartrack.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings: Settings = app.state.settings or load_settings()
    client: RecordStoreClient | None = app.state.client
    owns_client = client is None
    if owns_client:
        client = initialize_client(settings.remote)

    init_preferences(settings.db_path)
    notices = init_notices()
    init_students(StudentService(client), page_size=settings.page_size, notices=notices)
    # The record store also hosts the identity session
    init_auth_session(AuthSession(provider=client, notify=notices))  # type: ignore[arg-type]
    logger.info("ScholarTrack started (remote client %s)", "ready" if client else "unavailable")

    yield
    # Shutdown
    close_auth_session()
    close_students()
    close_preferences()
    if owns_client and client is not None:
        await client.close()  # type: ignore[attr-defined]


def create_app(
    settings: Settings | None = None,
    client: RecordStoreClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment at startup if omitted
        client: Remote store client to use instead of building one from settings
    """
    app = FastAPI(
        title="ScholarTrack API",
        description="Student records management backed by a hosted record store",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(AuthenticationRequired)
    async def authentication_required_handler(
        _request: Request, exc: AuthenticationRequired
    ) -> RedirectResponse:
        return RedirectResponse(exc.redirect_to, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        error = "Page not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=APIResponse[None](data=None, error=error).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # ("body", "status") -> "status"; ("path", "student_id") -> "student_id"
        errors = {
            ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]): err["msg"]
            for err in exc.errors()
        }
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=APIResponse[dict[str, str]](data=errors, error="Invalid request").model_dump(),
        )

    @app.exception_handler(PreferenceStoreError)
    async def preference_store_error_handler(
        _request: Request, _exc: PreferenceStoreError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(students.router)
    app.include_router(preferences.router)

    return app


# Default app instance
app = create_app()
