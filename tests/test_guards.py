import pytest
import httpx

from medibook.client import ApiClient, AuthSession, AuthStore
from medibook.client.guards import (
    Allow, Loading, Redirect, admin_route, authenticated_route, dashboard_for,
    patient_route, protected_route, public_route, role_based_redirect
)


def make_session(role=None, authenticating=False):
    session = AuthSession(ApiClient(httpx.Client(base_url="http://unused.test"), AuthStore()))
    session.is_authenticating = authenticating
    if role:
        session.user = {"id": 1, "role": role}
        session.role = role
        session.is_logged_in = True
    return session


class TestProtectedRoutes:

    def test_loading_while_authenticating(self):
        session = make_session(authenticating=True)
        assert admin_route(session, "/admin/dashboard") == Loading()
        assert patient_route(session, "/patient/dashboard") == Loading()
        assert public_route(session) == Loading()
        assert role_based_redirect(session) == Loading()

    def test_anonymous_admin_goes_to_admin_login(self):
        decision = admin_route(make_session(), "/admin/appointments")
        assert decision == Redirect(to="/admin/login", from_path="/admin/appointments")
        assert decision.replace is True

    def test_anonymous_patient_goes_to_login(self):
        decision = patient_route(make_session(), "/patient/dashboard")
        assert decision == Redirect(to="/login", from_path="/patient/dashboard")

    def test_matching_role_is_allowed(self):
        assert admin_route(make_session("Admin"), "/admin/dashboard") == Allow()
        assert patient_route(make_session("Patient"), "/patient/dashboard") == Allow()

    @pytest.mark.parametrize("role, guard, target", [
        ("Patient", admin_route, "/patient/dashboard"),
        ("Admin", patient_route, "/admin/dashboard"),
        ("Doctor", admin_route, "/doctor/dashboard"),
    ])
    def test_wrong_role_goes_to_own_dashboard(self, role, guard, target):
        assert guard(make_session(role), "/somewhere") == Redirect(to=target)

    def test_allowed_roles(self):
        session = make_session("Doctor")
        assert authenticated_route(session, "/profile") == Allow()
        assert protected_route(session, "/staff", allowed_roles=("Admin",)) == Redirect(
            to="/doctor/dashboard"
        )

    def test_authenticated_route_requires_login(self):
        assert authenticated_route(make_session(), "/profile") == Redirect(
            to="/login", from_path="/profile"
        )


class TestPublicRoutes:

    def test_anonymous_user_sees_public_page(self):
        assert public_route(make_session()) == Allow()

    def test_logged_in_user_leaves_public_page(self):
        assert public_route(make_session("Admin")) == Redirect(to="/admin/dashboard")

    def test_root_redirects(self):
        assert role_based_redirect(make_session()) == Redirect(to="/login")
        assert role_based_redirect(make_session("Patient")) == Redirect(to="/patient/dashboard")

    def test_unknown_role_defaults_to_patient_dashboard(self):
        assert dashboard_for("Receptionist") == "/patient/dashboard"
        assert dashboard_for(None) == "/patient/dashboard"
