from typing import Any, Dict, List, Optional

from .api import ApiClient
from .constants import Endpoints


class BookingClient:
    """Doctor listing, appointments and contact messages."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list_doctors(self) -> List[Dict[str, Any]]:
        return self.api.get(Endpoints.DOCTORS).get("doctors", [])

    def book_appointment(self, appointment_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post(Endpoints.CREATE_APPOINTMENT, json=appointment_data)["appointment"]

    def my_appointments(self) -> List[Dict[str, Any]]:
        return self.api.get(Endpoints.MY_APPOINTMENTS).get("appointments", [])

    def all_appointments(
        self,
        doctor_id: Optional[int] = None,
        patient_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        params = {}
        if doctor_id is not None:
            params["doctorId"] = doctor_id
        if patient_id is not None:
            params["patientId"] = patient_id
        return self.api.get(Endpoints.ALL_APPOINTMENTS, params=params).get("appointments", [])

    def update_appointment_status(self, appointment_id: int, status: str) -> Dict[str, Any]:
        response = self.api.put(
            f"{Endpoints.UPDATE_APPOINTMENT}/{appointment_id}",
            json={"status": status},
        )
        return response["appointment"]

    def delete_appointment(self, appointment_id: int) -> str:
        return self.api.delete(f"{Endpoints.DELETE_APPOINTMENT}/{appointment_id}").get("message", "")

    def send_message(self, message_data: Dict[str, Any]) -> str:
        return self.api.post(Endpoints.SEND_MESSAGE, json=message_data).get("message", "")

    def list_messages(self) -> List[Dict[str, Any]]:
        return self.api.get(Endpoints.ALL_MESSAGES).get("messages", [])
