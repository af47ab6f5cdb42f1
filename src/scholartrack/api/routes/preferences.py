"""Local preference and notification endpoints."""

from fastapi import APIRouter

from scholartrack.api.dependencies import NoticesDep, PreferencesDep
from scholartrack.api.models import APIResponse, DarkModeResponse, NoticeResponse

router = APIRouter(tags=["preferences"])


@router.get("/preferences/dark-mode", response_model=APIResponse[DarkModeResponse])
def get_dark_mode(preferences: PreferencesDep) -> APIResponse[DarkModeResponse]:
    """Current dark mode setting."""
    return APIResponse(data=DarkModeResponse(dark_mode=preferences.dark_mode))


@router.post("/preferences/dark-mode/toggle", response_model=APIResponse[DarkModeResponse])
def toggle_dark_mode(preferences: PreferencesDep) -> APIResponse[DarkModeResponse]:
    """Flip dark mode and persist it."""
    return APIResponse(data=DarkModeResponse(dark_mode=preferences.toggle_dark_mode()))


@router.get("/notifications", response_model=APIResponse[list[NoticeResponse]])
def drain_notifications(notices: NoticesDep) -> APIResponse[list[NoticeResponse]]:
    """Pending notifications, oldest first. Each is returned once."""
    return APIResponse(
        data=[NoticeResponse(level=n.level.value, message=n.message) for n in notices.drain()]
    )
