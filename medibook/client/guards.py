"""
Route guards for role-gated dashboards.

Each guard looks at an ``AuthSession`` and returns what the caller should
do with the requested path: show a loading placeholder, redirect, or render.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .constants import ADMIN, ALL_ROLES, DASHBOARDS, PATIENT, Routes
from .session import AuthSession


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Redirect:
    to: str
    # Path the user originally asked for, so login can send them back
    from_path: Optional[str] = None
    replace: bool = True


Decision = Union[Loading, Allow, Redirect]


def dashboard_for(role: Optional[str]) -> str:
    return DASHBOARDS.get(role, Routes.PATIENT_DASHBOARD)


def protected_route(
    session: AuthSession,
    path: str,
    required_role: Optional[str] = None,
    allowed_roles: Iterable[str] = (),
    redirect_to: str = Routes.LOGIN,
) -> Decision:
    if session.is_authenticating:
        return Loading()

    if not session.is_logged_in:
        return Redirect(to=redirect_to, from_path=path)

    allowed_roles = tuple(allowed_roles)
    if required_role and not session.has_role(required_role):
        return Redirect(to=dashboard_for(session.role))
    if allowed_roles and session.role not in allowed_roles:
        return Redirect(to=dashboard_for(session.role))

    return Allow()


def admin_route(session: AuthSession, path: str) -> Decision:
    return protected_route(session, path, required_role=ADMIN, redirect_to=Routes.ADMIN_LOGIN)


def patient_route(session: AuthSession, path: str) -> Decision:
    return protected_route(session, path, required_role=PATIENT, redirect_to=Routes.LOGIN)


def authenticated_route(session: AuthSession, path: str) -> Decision:
    return protected_route(session, path, allowed_roles=ALL_ROLES)


def public_route(session: AuthSession) -> Decision:
    """Pages such as login and register; logged-in users go to their dashboard."""
    if session.is_authenticating:
        return Loading()
    if session.is_logged_in:
        return Redirect(to=dashboard_for(session.role))
    return Allow()


def role_based_redirect(session: AuthSession) -> Decision:
    """Where the site root sends the user."""
    if session.is_authenticating:
        return Loading()
    if not session.is_logged_in:
        return Redirect(to=Routes.LOGIN)
    return Redirect(to=dashboard_for(session.role))
