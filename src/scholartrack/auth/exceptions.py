"""Custom exceptions for the authentication gate."""


class AuthError(Exception):
    """Base exception for authentication errors."""


class AuthenticationRequired(AuthError):
    """A protected page was requested without a signed-in user."""

    def __init__(self, redirect_to: str) -> None:
        super().__init__(f"Authentication required, redirecting to {redirect_to}")
        self.redirect_to = redirect_to
