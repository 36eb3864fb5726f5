from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ...core.database import get_db
from ...api.deps import get_admin_user, get_patient_user
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import (
    AppointmentCreate, AppointmentEnvelope, AppointmentListResponse,
    AppointmentResponse, AppointmentStatusUpdate
)
from ...schemas.common import StatusResponse
from ...models.user import User

router = APIRouter(prefix="/appointment", tags=["Appointments"])


@router.post("/post", response_model=AppointmentEnvelope)
async def post_appointment(
    appointment_data: AppointmentCreate,
    db: Session = Depends(get_db),
    current_patient: User = Depends(get_patient_user)
):
    """Book an appointment with a doctor named by first/last name and department."""
    appointment = AppointmentService(db).book(appointment_data, current_patient)
    return AppointmentEnvelope(
        message="Appointment sent successfully",
        appointment=AppointmentResponse.model_validate(appointment),
    )


@router.get("/getall", response_model=AppointmentListResponse)
async def get_all_appointments(
    doctor_id: Optional[int] = Query(None, alias="doctorId"),
    patient_id: Optional[int] = Query(None, alias="patientId"),
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_admin_user)
):
    appointments = AppointmentService(db).list_all(doctor_id=doctor_id, patient_id=patient_id)
    return AppointmentListResponse(
        appointments=[AppointmentResponse.model_validate(a) for a in appointments]
    )


@router.get("/patient", response_model=AppointmentListResponse)
async def get_my_appointments(
    db: Session = Depends(get_db),
    current_patient: User = Depends(get_patient_user)
):
    appointments = AppointmentService(db).list_for_patient(current_patient)
    return AppointmentListResponse(
        appointments=[AppointmentResponse.model_validate(a) for a in appointments]
    )


@router.put("/update/{appointment_id}", response_model=AppointmentEnvelope)
async def update_appointment_status(
    appointment_id: int,
    patch: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_admin_user)
):
    appointment = AppointmentService(db).update_status(appointment_id, patch)
    return AppointmentEnvelope(
        message="Appointment status updated",
        appointment=AppointmentResponse.model_validate(appointment),
    )


@router.delete("/delete/{appointment_id}", response_model=StatusResponse)
async def delete_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_admin_user)
):
    AppointmentService(db).delete(appointment_id)
    return StatusResponse(message="Appointment deleted successfully")
