"""Authentication gate - session state, route protection and redirects."""

from scholartrack.auth.exceptions import AuthenticationRequired, AuthError
from scholartrack.auth.routing import (
    ROUTES,
    Route,
    RouteMatch,
    is_safe_redirect,
    login_redirect,
    match_route,
    resolve_auth_redirect,
)
from scholartrack.auth.session import AuthSession, IdentityProvider

__all__ = [
    "ROUTES",
    "AuthError",
    "AuthSession",
    "AuthenticationRequired",
    "IdentityProvider",
    "Route",
    "RouteMatch",
    "is_safe_redirect",
    "login_redirect",
    "match_route",
    "resolve_auth_redirect",
]
