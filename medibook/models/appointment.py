from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Boolean, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Patient contact snapshot, as submitted with the booking
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(11), nullable=False)
    nic = Column(String(13), nullable=False)
    dob = Column(Date, nullable=False)
    gender = Column(String(10), nullable=False)
    address = Column(String(255), nullable=False)

    # Appointment details
    appointment_date = Column(String(50), nullable=False)
    department = Column(String(100), nullable=False)
    doctor_first_name = Column(String(100), nullable=False)
    doctor_last_name = Column(String(100), nullable=False)
    has_visited = Column(Boolean, default=False, nullable=False)
    status = Column(
        SQLEnum(AppointmentStatus, name="appointment_status"),
        default=AppointmentStatus.PENDING,
        nullable=False,
    )

    # References
    doctor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())

    doctor = relationship("Doctor", back_populates="appointments", foreign_keys=[doctor_id])
    patient = relationship("Patient", back_populates="appointments", foreign_keys=[patient_id])

    @property
    def doctor_name(self):
        return {"first_name": self.doctor_first_name, "last_name": self.doctor_last_name}

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, status='{self.status}')>"
