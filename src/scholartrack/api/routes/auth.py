"""Public authentication pages and session endpoints."""

from urllib.parse import parse_qs

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from scholartrack.api.dependencies import AuthSessionDep
from scholartrack.api.models import (
    APIResponse,
    CallbackRequest,
    NavigationResponse,
    PageView,
)
from scholartrack.auth.routing import split_path

router = APIRouter(tags=["auth"])

APP_NAME = "ScholarTrack"


@router.get("/login", response_model=APIResponse[PageView])
def login_page(redirect: str | None = Query(default=None)) -> APIResponse[PageView]:
    """Login page hosting the identity provider's sign-in widget."""
    return APIResponse(
        data=PageView(
            page="login",
            title=f"Welcome to {APP_NAME}",
            message="Sign in to your account",
            redirect=redirect,
            links={"signup": "/signup"},
        )
    )


@router.get("/signup", response_model=APIResponse[PageView])
def signup_page(redirect: str | None = Query(default=None)) -> APIResponse[PageView]:
    """Signup page hosting the identity provider's sign-up widget."""
    return APIResponse(
        data=PageView(
            page="signup",
            title=f"Create your {APP_NAME} account",
            message="Sign up to get started",
            redirect=redirect,
            links={"login": "/login"},
        )
    )


@router.get("/error", response_model=APIResponse[PageView])
def error_page(message: str | None = Query(default=None)) -> APIResponse[PageView]:
    """Authentication error page."""
    return APIResponse(
        data=PageView(
            page="error",
            title="Authentication Error",
            message=message or "An error occurred during authentication",
            links={"login": "/login"},
        )
    )


@router.post("/callback", response_model=APIResponse[NavigationResponse])
def auth_callback(
    callback: CallbackRequest, session: AuthSessionDep
) -> APIResponse[NavigationResponse]:
    """Record the identity provider's outcome and say where to go next."""
    redirect = callback.redirect
    if redirect is None:
        _, query = split_path(callback.current_path)
        redirect = parse_qs(query).get("redirect", [None])[0]

    next_path = session.handle_callback(callback.user, callback.current_path, redirect)
    return APIResponse(data=NavigationResponse(redirect_to=next_path))


@router.post("/logout", response_model=APIResponse[NavigationResponse])
async def logout(session: AuthSessionDep) -> APIResponse[NavigationResponse] | JSONResponse:
    """Sign out."""
    next_path = await session.logout()
    if next_path is None:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error="Logout failed").model_dump(),
        )
    return APIResponse(data=NavigationResponse(redirect_to=next_path))
