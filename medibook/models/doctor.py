from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from ..core.security import UserRole
from .user import User


class Doctor(User):
    __mapper_args__ = {"polymorphic_identity": UserRole.DOCTOR}

    # Professional information, stored on the shared users table
    doctor_department = Column(String(100), nullable=True, index=True)
    avatar_public_id = Column(String(255), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    appointments = relationship(
        "Appointment",
        back_populates="doctor",
        foreign_keys="Appointment.doctor_id",
    )

    @property
    def doc_avatar(self):
        if not self.avatar_url:
            return None
        return {"public_id": self.avatar_public_id, "url": self.avatar_url}
