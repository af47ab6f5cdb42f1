"""AuthSession - signed-in user state fed by the external identity provider."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from scholartrack.auth.routing import LOGIN_PATH, resolve_auth_redirect
from scholartrack.notifications import NoticeLevel, Notifier, log_notifier
from scholartrack.remote.exceptions import RemoteStoreError

logger = logging.getLogger("scholartrack.auth")


class IdentityProvider(Protocol):
    """Interface for the external identity service."""

    async def logout(self) -> None:
        """End the provider-side session."""
        ...


class AuthSession:
    """Holds the current user as reported by the identity provider."""

    def __init__(
        self,
        provider: IdentityProvider | None = None,
        notify: Notifier = log_notifier,
    ) -> None:
        self.provider = provider
        self.notify = notify
        self.user: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def set_user(self, user: dict[str, Any]) -> None:
        self.user = user
        logger.info("User signed in: %s", user.get("emailAddress") or user.get("email") or "?")

    def clear_user(self) -> None:
        self.user = None

    def handle_callback(
        self,
        user: dict[str, Any] | None,
        current_path: str,
        redirect_param: str | None = None,
    ) -> str:
        """Apply the provider's outcome and decide where to navigate.

        Args:
            user: The signed-in user, or None when nobody is signed in
            current_path: Path plus query string being shown
            redirect_param: ``redirect`` query parameter, if any

        Returns:
            The next path
        """
        if user:
            self.set_user(user)
        else:
            self.clear_user()
        return resolve_auth_redirect(self.is_authenticated, current_path, redirect_param)

    async def logout(self) -> str | None:
        """Sign out through the provider.

        Returns:
            The login path on success, None if the provider call failed (the
            user then stays signed in)
        """
        try:
            if self.provider is not None:
                await self.provider.logout()
        except RemoteStoreError as e:
            logger.error("Logout failed: %s", e)
            self.notify(NoticeLevel.ERROR, f"Logout failed: {str(e) or 'Please try again'}")
            return None

        self.clear_user()
        self.notify(NoticeLevel.INFO, "Logged out successfully")
        return LOGIN_PATH
