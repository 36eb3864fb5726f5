from datetime import date, datetime
from typing import List, Optional
from pydantic import AliasChoices, ConfigDict, Field, model_validator

from ..models.appointment import AppointmentStatus
from .common import CamelModel, PersonalDetails, RequiredText


class AppointmentCreate(PersonalDetails):
    appointment_date: RequiredText = Field(
        validation_alias=AliasChoices("appointmentDate", "appointment_date", "appointment_data")
    )
    department: RequiredText
    doctor_first_name: RequiredText = Field(alias="doctor_firstName")
    doctor_last_name: RequiredText = Field(alias="doctor_lastName")
    has_visited: bool = False
    address: RequiredText


class AppointmentStatusUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    status: Optional[AppointmentStatus] = None
    has_visited: Optional[bool] = None

    @model_validator(mode="after")
    def require_a_change(self):
        if self.status is None and self.has_visited is None:
            raise ValueError("Provide a status or hasVisited value to update")
        return self


class DoctorName(CamelModel):
    first_name: str
    last_name: str


class AppointmentResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    nic: str
    dob: date
    gender: str
    address: str
    appointment_date: str
    department: str
    doctor: DoctorName = Field(validation_alias="doctor_name", serialization_alias="doctor")
    doctor_id: int
    patient_id: int
    has_visited: bool
    status: AppointmentStatus
    created_at: Optional[datetime] = None


class AppointmentEnvelope(CamelModel):
    success: bool = True
    message: str
    appointment: AppointmentResponse


class AppointmentListResponse(CamelModel):
    success: bool = True
    appointments: List[AppointmentResponse]
