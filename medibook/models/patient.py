from sqlalchemy.orm import relationship

from ..core.security import UserRole
from .user import User


class Patient(User):
    __mapper_args__ = {"polymorphic_identity": UserRole.PATIENT}

    appointments = relationship(
        "Appointment",
        back_populates="patient",
        foreign_keys="Appointment.patient_id",
    )
