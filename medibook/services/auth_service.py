from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
import logging

from ..models.user import User, Admin
from ..models.patient import Patient
from ..models.doctor import Doctor
from ..core.errors import (
    DuplicateUser, InvalidCredentials, RoleMismatch, ValidationError
)
from ..core.security import verify_password, get_password_hash, create_access_token
from ..schemas.auth import AdminCreate, DoctorCreate, LoginRequest, PatientRegister
from .avatar_storage import AvatarStorage, AvatarUpload

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register_patient(self, data: PatientRegister) -> Tuple[Patient, str]:
        """Register a new patient and open a session for them."""
        self._ensure_email_available(data.email)
        patient = self._create(Patient, data)
        logger.info(f"Registered patient {patient.id}")
        return patient, self.issue_token(patient)

    def authenticate(self, login_data: LoginRequest) -> Tuple[User, str]:
        """Check credentials and role, returning the user and a fresh token."""
        # No lookup happens for a request that is already invalid
        if login_data.password != login_data.confirm_password:
            raise ValidationError("Password and confirm password do not match")

        user = self.db.query(User).filter(User.email == login_data.email).first()
        if not user or not verify_password(login_data.password, user.password_hash):
            logger.info(f"Failed login for {login_data.email}")
            raise InvalidCredentials()

        if user.role != login_data.role:
            raise RoleMismatch()

        logger.info(f"User {user.id} logged in as {user.role.value}")
        return user, self.issue_token(user)

    def add_admin(self, data: AdminCreate) -> Admin:
        self._ensure_email_available(data.email, by_role=True)
        admin = self._create(Admin, data)
        logger.info(f"Created admin {admin.id}")
        return admin

    def add_doctor(
        self,
        data: DoctorCreate,
        avatar: Optional[AvatarUpload],
        storage: AvatarStorage
    ) -> Doctor:
        """Create a doctor account with an uploaded avatar."""
        if avatar is None:
            raise ValidationError("Doctor avatar required")
        self._ensure_email_available(data.email, by_role=True)

        stored = storage.save(avatar)
        try:
            doctor = self._create(
                Doctor,
                data,
                avatar_public_id=stored.public_id,
                avatar_url=stored.url,
            )
        except Exception:
            storage.delete(stored.public_id)
            raise

        logger.info(f"Created doctor {doctor.id} in {doctor.doctor_department}")
        return doctor

    def list_doctors(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.last_name, Doctor.first_name).all()

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.role)

    def _ensure_email_available(self, email: str, by_role: bool = False):
        existing = self.db.query(User).filter(User.email == email).first()
        if existing:
            if by_role:
                raise DuplicateUser(f"{existing.role.value} with this email already exists")
            raise DuplicateUser()

    def _create(self, model, data, **extra):
        fields = data.model_dump(exclude={"password"})
        user = model(
            password_hash=get_password_hash(data.password),
            **fields,
            **extra,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise DuplicateUser()
        self.db.refresh(user)
        return user
