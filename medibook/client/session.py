"""
Client-side session state.

``AuthSession`` mirrors the server's view of who is logged in. It is an
ordinary object: create one per client and hand it to whatever needs it,
including the route guards in ``medibook.client.guards``.
"""
from typing import Any, Dict, Optional, Tuple
import logging

from .api import ApiClient, ApiError
from .constants import ADMIN, PATIENT, Endpoints

logger = logging.getLogger(__name__)


class AuthSession:
    def __init__(self, api: ApiClient):
        self.api = api
        self.store = api.store

        self.user: Optional[Dict[str, Any]] = None
        self.role: Optional[str] = None
        self.is_logged_in = False
        # True until initialize() has settled the cached state
        self.is_authenticating = True

    def initialize(self) -> bool:
        """Restore a cached session after re-validating it with the server.

        Any failure along the way leaves the session logged out with local
        auth state cleared.
        """
        self.is_authenticating = True
        try:
            stored_user = self.store.get_user()
            stored_role = self.store.get_role()

            if (
                self.store.is_authenticated()
                and not self.store.is_token_expired()
                and stored_user
                and stored_role
            ):
                self.api.restore_session_cookie(stored_role)
                user = self.verify(stored_role)
                if user:
                    self._set_logged_in(user)
                    return True
            self.logout()
        except Exception as e:
            logger.warning(f"Session initialization failed: {e}")
            self.logout()
        finally:
            self.is_authenticating = False
        return False

    def verify(self, role: str) -> Optional[Dict[str, Any]]:
        """Ask the profile endpoint for ``role`` who the current session belongs to."""
        endpoint = Endpoints.ADMIN_PROFILE if role == ADMIN else Endpoints.PATIENT_PROFILE
        try:
            response = self.api.get(endpoint)
        except ApiError:
            self.store.clear()
            return None

        user = response.get("user")
        if response.get("success") and user:
            self.store.set_user(user)
            self.store.set_role(user.get("role"))
            return user
        return None

    def login(self, email: str, password: str, confirm_password: str, role: str) -> Dict[str, Any]:
        self.is_authenticating = True
        try:
            response = self.api.post(Endpoints.LOGIN, json={
                "email": email,
                "password": password,
                "confirmPassword": confirm_password,
                "role": role,
            })
            user = response.get("user")
            if not (response.get("success") and user):
                raise ApiError(response.get("message") or "Login failed", error_type="LOGIN_ERROR")

            self.store.set_token(response.get("token"))
            self.store.set_user(user)
            self.store.set_role(user.get("role"))
            self._set_logged_in(user)
            return {"success": True, "user": user, "role": self.role}
        except ApiError:
            self._reset()
            raise
        finally:
            self.is_authenticating = False

    def register_patient(self, patient_data: Dict[str, Any]) -> Dict[str, Any]:
        response = self.api.post(Endpoints.PATIENT_REGISTER, json=patient_data)
        return {
            "success": True,
            "message": response.get("message") or "Registration successful",
            "user": response.get("user"),
        }

    def register_admin(self, admin_data: Dict[str, Any]) -> Dict[str, Any]:
        response = self.api.post(Endpoints.ADMIN_REGISTER, json=admin_data)
        return {
            "success": True,
            "message": response.get("message") or "Admin registered successfully",
            "user": response.get("admin"),
        }

    def register_doctor(
        self,
        doctor_data: Dict[str, Any],
        avatar: Tuple[str, bytes, str]
    ) -> Dict[str, Any]:
        """``avatar`` is a ``(filename, content, content_type)`` triple."""
        response = self.api.post_file(
            Endpoints.DOCTOR_REGISTER,
            data=doctor_data,
            files={"docAvatar": avatar},
        )
        return {
            "success": True,
            "message": response.get("message") or "Doctor registered successfully",
            "doctor": response.get("doctor"),
        }

    def logout(self) -> None:
        """End the session on the server when possible, and always locally."""
        role = self.role or self.store.get_role()
        endpoint = {
            ADMIN: Endpoints.ADMIN_LOGOUT,
            PATIENT: Endpoints.PATIENT_LOGOUT,
        }.get(role)

        if endpoint:
            try:
                self.api.get(endpoint)
            except ApiError as e:
                logger.info(f"Server logout failed, clearing local session anyway: {e.message}")

        self.store.clear()
        self._reset()

    def refresh_user_data(self) -> Optional[Dict[str, Any]]:
        if not self.role:
            return None
        endpoint = Endpoints.ADMIN_PROFILE if self.role == ADMIN else Endpoints.PATIENT_PROFILE
        response = self.api.get(endpoint)
        user = response.get("user")
        if response.get("success") and user:
            self.user = user
            self.store.set_user(user)
        return self.user

    def has_role(self, required_role: str) -> bool:
        return self.role == required_role

    def is_admin(self) -> bool:
        return self.role == ADMIN

    def is_patient(self) -> bool:
        return self.role == PATIENT

    def _set_logged_in(self, user: Dict[str, Any]) -> None:
        self.user = user
        self.role = user.get("role")
        self.is_logged_in = True

    def _reset(self) -> None:
        self.user = None
        self.role = None
        self.is_logged_in = False
