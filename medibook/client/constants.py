"""Paths, storage keys and messages shared by the client modules."""

API_BASE_PATH = "/api/v1"
DEFAULT_TIMEOUT = 10.0

# Storage keys
TOKEN_KEY = "healthcare_token"
USER_KEY = "healthcare_user"
ROLE_KEY = "healthcare_user_role"

# Roles, as the server spells them
ADMIN = "Admin"
DOCTOR = "Doctor"
PATIENT = "Patient"
ALL_ROLES = (ADMIN, DOCTOR, PATIENT)

# Session cookies set by the server; doctors share the patient cookie
ADMIN_COOKIE = "adminToken"
PATIENT_COOKIE = "patientToken"


class Endpoints:
    LOGIN = "/user/login"
    PATIENT_REGISTER = "/user/patient/register"
    ADMIN_REGISTER = "/user/admin/addnew"
    DOCTOR_REGISTER = "/user/doctor/addnew"
    PATIENT_PROFILE = "/user/patient/me"
    ADMIN_PROFILE = "/user/admin/me"
    PATIENT_LOGOUT = "/user/patient/logout"
    ADMIN_LOGOUT = "/user/admin/logout"
    DOCTORS = "/user/doctors"
    REFRESH_TOKEN = "/auth/refresh"

    CREATE_APPOINTMENT = "/appointment/post"
    ALL_APPOINTMENTS = "/appointment/getall"
    MY_APPOINTMENTS = "/appointment/patient"
    UPDATE_APPOINTMENT = "/appointment/update"
    DELETE_APPOINTMENT = "/appointment/delete"

    SEND_MESSAGE = "/message/send"
    ALL_MESSAGES = "/message/getall"


class Routes:
    LOGIN = "/login"
    ADMIN_LOGIN = "/admin/login"
    REGISTER = "/register"

    PATIENT_DASHBOARD = "/patient/dashboard"
    DOCTOR_DASHBOARD = "/doctor/dashboard"
    ADMIN_DASHBOARD = "/admin/dashboard"


DASHBOARDS = {
    ADMIN: Routes.ADMIN_DASHBOARD,
    DOCTOR: Routes.DOCTOR_DASHBOARD,
    PATIENT: Routes.PATIENT_DASHBOARD,
}

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please login again."
