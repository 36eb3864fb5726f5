from datetime import date, datetime
from typing import Annotated, List, Optional
from pydantic import EmailStr, Field

from ..core.security import UserRole
from .common import CamelModel, PersonalDetails, RequiredText

Password = Annotated[str, Field(min_length=8)]


class PatientRegister(PersonalDetails):
    password: Password


class AdminCreate(PersonalDetails):
    password: Password


class DoctorCreate(PersonalDetails):
    password: Password
    doctor_department: RequiredText


class LoginRequest(CamelModel):
    email: EmailStr
    password: RequiredText
    confirm_password: RequiredText
    role: UserRole


class AvatarInfo(CamelModel):
    public_id: str
    url: str


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    nic: str
    dob: date
    gender: str
    role: UserRole
    doctor_department: Optional[str] = None
    doc_avatar: Optional[AvatarInfo] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    user: UserResponse
    token: str


class UserDetailsResponse(CamelModel):
    success: bool = True
    user: UserResponse


class AdminCreatedResponse(CamelModel):
    success: bool = True
    message: str
    admin: UserResponse


class DoctorCreatedResponse(CamelModel):
    success: bool = True
    message: str
    doctor: UserResponse


class DoctorListResponse(CamelModel):
    success: bool = True
    doctors: List[UserResponse]


class TokenRefreshResponse(CamelModel):
    success: bool = True
    message: str
    token: str
