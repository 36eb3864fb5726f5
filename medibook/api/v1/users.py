from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from ...core.database import get_db
from ...core.config import settings
from ...core.security import (
    ADMIN_COOKIE, PATIENT_COOKIE, cookie_expiry, cookie_name_for
)
from ...api.deps import get_admin_user, get_patient_user, rate_limit_check
from ...services.auth_service import AuthService
from ...services.avatar_storage import AvatarStorage, AvatarUpload, get_avatar_storage
from ...schemas.auth import (
    AdminCreate, AdminCreatedResponse, AuthResponse, DoctorCreate,
    DoctorCreatedResponse, DoctorListResponse, LoginRequest, PatientRegister,
    UserDetailsResponse, UserResponse
)
from ...schemas.common import StatusResponse
from ...models.user import User

router = APIRouter(prefix="/user", tags=["Users"])


def set_session_cookie(response: Response, user: User, token: str) -> None:
    response.set_cookie(
        key=cookie_name_for(user.role),
        value=token,
        expires=cookie_expiry(),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response, cookie_name: str) -> None:
    response.delete_cookie(
        key=cookie_name,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/patient/register", response_model=AuthResponse)
async def register_patient(
    patient_data: PatientRegister,
    response: Response,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Register a new patient and log them in."""
    auth_service = AuthService(db)
    user, token = auth_service.register_patient(patient_data)
    set_session_cookie(response, user, token)

    return AuthResponse(
        message="User registered",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate a user for the requested role."""
    auth_service = AuthService(db)
    user, token = auth_service.authenticate(login_data)
    set_session_cookie(response, user, token)

    return AuthResponse(
        message="User logged in successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post("/admin/addnew", response_model=AdminCreatedResponse, status_code=201)
async def add_new_admin(
    admin_data: AdminCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_admin_user)
):
    """Create another admin account (admin only)."""
    admin = AuthService(db).add_admin(admin_data)
    return AdminCreatedResponse(
        message="New Admin created successfully",
        admin=UserResponse.model_validate(admin),
    )


@router.post("/doctor/addnew", response_model=DoctorCreatedResponse, status_code=201)
async def add_new_doctor(
    first_name: str = Form(..., alias="firstName"),
    last_name: str = Form(..., alias="lastName"),
    email: str = Form(...),
    phone: str = Form(...),
    nic: str = Form(...),
    dob: date = Form(...),
    gender: str = Form(...),
    password: str = Form(...),
    doctor_department: str = Form(..., alias="doctorDepartment"),
    doc_avatar: Optional[UploadFile] = File(None, alias="docAvatar"),
    db: Session = Depends(get_db),
    storage: AvatarStorage = Depends(get_avatar_storage),
    current_admin: User = Depends(get_admin_user)
):
    """Create a doctor account from a multipart form with an avatar image (admin only)."""
    doctor_data = DoctorCreate(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        nic=nic,
        dob=dob,
        gender=gender,
        password=password,
        doctor_department=doctor_department,
    )

    avatar = None
    if doc_avatar is not None:
        avatar = AvatarUpload(
            content=await doc_avatar.read(),
            content_type=doc_avatar.content_type,
            filename=doc_avatar.filename,
        )

    doctor = AuthService(db).add_doctor(doctor_data, avatar, storage)
    return DoctorCreatedResponse(
        message="New Doctor registered",
        doctor=UserResponse.model_validate(doctor),
    )


@router.get("/doctors", response_model=DoctorListResponse)
async def get_all_doctors(db: Session = Depends(get_db)):
    """List every doctor (public)."""
    doctors = AuthService(db).list_doctors()
    return DoctorListResponse(doctors=[UserResponse.model_validate(d) for d in doctors])


@router.get("/admin/me", response_model=UserDetailsResponse)
async def get_admin_details(current_user: User = Depends(get_admin_user)):
    """Get the logged-in admin."""
    return UserDetailsResponse(user=UserResponse.model_validate(current_user))


@router.get("/patient/me", response_model=UserDetailsResponse)
async def get_patient_details(current_user: User = Depends(get_patient_user)):
    """Get the logged-in patient."""
    return UserDetailsResponse(user=UserResponse.model_validate(current_user))


@router.get("/admin/logout", response_model=StatusResponse)
async def logout_admin(
    response: Response,
    current_user: User = Depends(get_admin_user)
):
    clear_session_cookie(response, ADMIN_COOKIE)
    return StatusResponse(message="Admin logged out successfully")


@router.get("/patient/logout", response_model=StatusResponse)
async def logout_patient(
    response: Response,
    current_user: User = Depends(get_patient_user)
):
    clear_session_cookie(response, PATIENT_COOKIE)
    return StatusResponse(message="Patient logged out successfully")
