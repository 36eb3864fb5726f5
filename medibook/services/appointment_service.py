from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import Doctor
from ..models.user import User
from ..core.errors import DoctorConflict, DoctorNotFound, NotFound
from ..schemas.appointment import AppointmentCreate, AppointmentStatusUpdate

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, db: Session):
        self.db = db

    def resolve_doctor(self, first_name: str, last_name: str, department: str) -> Doctor:
        """Find the single doctor with this name in this department.

        Ambiguous names are refused rather than guessed.
        """
        matches = self.db.query(Doctor).filter(
            Doctor.first_name == first_name,
            Doctor.last_name == last_name,
            Doctor.doctor_department == department,
        ).limit(2).all()

        if not matches:
            raise DoctorNotFound()
        if len(matches) > 1:
            raise DoctorConflict()
        return matches[0]

    def book(self, data: AppointmentCreate, patient: User) -> Appointment:
        doctor = self.resolve_doctor(
            data.doctor_first_name, data.doctor_last_name, data.department
        )

        appointment = Appointment(
            **data.model_dump(),
            doctor_id=doctor.id,
            patient_id=patient.id,
            status=AppointmentStatus.PENDING,
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(
            f"Appointment {appointment.id} booked by patient {patient.id} "
            f"with doctor {doctor.id}"
        )
        return appointment

    def get(self, appointment_id: int) -> Appointment:
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).first()
        if not appointment:
            raise NotFound("Appointment not found")
        return appointment

    def list_all(
        self,
        doctor_id: Optional[int] = None,
        patient_id: Optional[int] = None
    ) -> List[Appointment]:
        query = self.db.query(Appointment)
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        return query.order_by(Appointment.id).all()

    def list_for_patient(self, patient: User) -> List[Appointment]:
        return self.list_all(patient_id=patient.id)

    def update_status(self, appointment_id: int, patch: AppointmentStatusUpdate) -> Appointment:
        appointment = self.get(appointment_id)

        for field, value in patch.model_dump(exclude_none=True).items():
            setattr(appointment, field, value)

        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} updated: status={appointment.status.value}")
        return appointment

    def delete(self, appointment_id: int) -> None:
        appointment = self.get(appointment_id)
        self.db.delete(appointment)
        self.db.commit()
        logger.info(f"Appointment {appointment_id} deleted")
