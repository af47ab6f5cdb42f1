"""Route table and post-authentication navigation rules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
HOME_PATH = "/"
AUTH_PAGES = frozenset({LOGIN_PATH, SIGNUP_PATH})


@dataclass(frozen=True)
class Route:
    """A page route."""

    name: str
    pattern: str
    protected: bool

    @property
    def regex(self) -> re.Pattern[str]:
        return re.compile("^" + re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", self.pattern) + "$")


@dataclass(frozen=True)
class RouteMatch:
    """A route matched against a concrete path."""

    route: Route
    params: dict[str, str] = field(default_factory=dict)

    @property
    def protected(self) -> bool:
        return self.route.protected


ROUTES = (
    Route("login", LOGIN_PATH, protected=False),
    Route("signup", SIGNUP_PATH, protected=False),
    Route("callback", "/callback", protected=False),
    Route("error", "/error", protected=False),
    Route("dashboard", HOME_PATH, protected=True),
    Route("students", "/students", protected=True),
    Route("student_detail", "/students/{id}", protected=True),
)


def match_route(path: str) -> RouteMatch | None:
    """Find the page route for a path (query string ignored).

    Returns:
        The match, or None when the path is not a page (not found)
    """
    path = split_path(path)[0]
    for route in ROUTES:
        m = route.regex.match(path)
        if m:
            return RouteMatch(route=route, params=m.groupdict())
    return None


def split_path(current_path: str) -> tuple[str, str]:
    """Split "/students?page=2" into ("/students", "page=2")."""
    path, _, query = current_path.partition("?")
    return path or HOME_PATH, query


def login_redirect(path: str, query: str = "") -> str:
    """Login URL that returns to ``path`` afterwards.

    The original path and query are appended verbatim, without URL encoding:
    ``/login?redirect=/students?page=2``.
    """
    search = f"?{query}" if query else ""
    return f"{LOGIN_PATH}?redirect={path}{search}"


def is_safe_redirect(target: str | None) -> bool:
    """Only same-site absolute paths may be used as a redirect target."""
    if not target:
        return False
    return target.startswith("/") and not target.startswith("//") and "\\" not in target


def resolve_auth_redirect(
    is_authenticated: bool,
    current_path: str,
    redirect_param: str | None = None,
) -> str:
    """Where to navigate once the identity provider reports the session state.

    Args:
        is_authenticated: Whether a user is signed in
        current_path: Path plus query string being shown, e.g. "/login?redirect=/students"
        redirect_param: Value of the ``redirect`` query parameter, if any

    Returns:
        The next path. Truth table:

        ===============  ===================  ================  ==========================
        authenticated    page                 safe redirect     next path
        ===============  ===================  ================  ==========================
        yes              any                  yes               redirect_param
        yes              /login or /signup    no                "/"
        yes              other                no                current_path
        no               /login or /signup    (any)             current_path (stay)
        no               protected page       (any)             /login?redirect=current
        no               other                (any)             "/login"
        ===============  ===================  ================  ==========================
    """
    path, query = split_path(current_path)
    on_auth_page = path in AUTH_PAGES

    if is_authenticated:
        if redirect_param is not None and is_safe_redirect(redirect_param):
            return redirect_param
        if on_auth_page:
            return HOME_PATH
        return current_path

    if on_auth_page:
        return current_path

    match = match_route(path)
    if match is not None and match.protected:
        return login_redirect(path, query)
    return LOGIN_PATH
