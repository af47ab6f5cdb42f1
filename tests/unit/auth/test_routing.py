"""Unit tests for route protection and auth redirects."""

import pytest

from scholartrack.auth import (
    is_safe_redirect,
    login_redirect,
    match_route,
    resolve_auth_redirect,
)


@pytest.mark.unit
class TestMatchRoute:
    """Tests for match_route."""

    def test_static_routes(self) -> None:
        assert match_route("/").route.name == "dashboard"
        assert match_route("/students").route.name == "students"
        assert match_route("/login").protected is False

    def test_detail_route_params(self) -> None:
        match = match_route("/students/42?tab=notes")

        assert match.route.name == "student_detail"
        assert match.params == {"id": "42"}
        assert match.protected is True

    def test_unknown_path(self) -> None:
        assert match_route("/nowhere") is None
        assert match_route("/students/4/edit") is None


@pytest.mark.unit
class TestLoginRedirect:
    def test_path_only(self) -> None:
        assert login_redirect("/students") == "/login?redirect=/students"

    def test_query_appended_verbatim(self) -> None:
        assert (
            login_redirect("/students", "page=2&status=active")
            == "/login?redirect=/students?page=2&status=active"
        )


@pytest.mark.unit
class TestIsSafeRedirect:
    @pytest.mark.parametrize("target", ["/", "/students?page=2", "/students/4"])
    def test_safe(self, target: str) -> None:
        assert is_safe_redirect(target) is True

    @pytest.mark.parametrize(
        "target", [None, "", "https://evil.test", "//evil.test", "/\\evil.test", "students"]
    )
    def test_unsafe(self, target) -> None:
        assert is_safe_redirect(target) is False


@pytest.mark.unit
class TestResolveAuthRedirect:
    """Tests for resolve_auth_redirect."""

    def test_authenticated_with_redirect(self) -> None:
        assert (
            resolve_auth_redirect(True, "/login?redirect=/students/4", "/students/4")
            == "/students/4"
        )

    def test_authenticated_redirect_wins_on_any_page(self) -> None:
        assert resolve_auth_redirect(True, "/students", "/students/9") == "/students/9"

    def test_authenticated_unsafe_redirect_ignored(self) -> None:
        assert resolve_auth_redirect(True, "/login", "https://evil.test") == "/"

    @pytest.mark.parametrize("page", ["/login", "/signup"])
    def test_authenticated_on_auth_page_goes_home(self, page: str) -> None:
        assert resolve_auth_redirect(True, page) == "/"

    def test_authenticated_elsewhere_stays(self) -> None:
        assert resolve_auth_redirect(True, "/students?page=2") == "/students?page=2"

    @pytest.mark.parametrize("page", ["/login?redirect=/students", "/signup"])
    def test_unauthenticated_on_auth_page_stays(self, page: str) -> None:
        assert resolve_auth_redirect(False, page, "/students") == page

    def test_unauthenticated_protected_page(self) -> None:
        assert (
            resolve_auth_redirect(False, "/students?page=2")
            == "/login?redirect=/students?page=2"
        )

    def test_unauthenticated_dashboard(self) -> None:
        assert resolve_auth_redirect(False, "/") == "/login?redirect=/"

    @pytest.mark.parametrize("page", ["/callback", "/nowhere"])
    def test_unauthenticated_other_page(self, page: str) -> None:
        assert resolve_auth_redirect(False, page) == "/login"
