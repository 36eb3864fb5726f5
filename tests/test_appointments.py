import pytest

from tests.conftest import ADMIN_PASSWORD, create_doctor, patient_data, patient_login


def appointment_payload(**overrides):
    payload = {
        "firstName": "Alice",
        "lastName": "Patient",
        "email": "a@x.com",
        "phone": "03001234567",
        "nic": "1234567890123",
        "dob": "1990-01-01",
        "gender": "Female",
        "appointmentDate": "2025-01-15",
        "department": "Neurology",
        "doctor_firstName": "Gregory",
        "doctor_lastName": "House",
        "hasVisited": False,
        "address": "221B Baker Street",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def house(db_session):
    return create_doctor(db_session, "Gregory", "House", "Neurology")


@pytest.fixture
def booked(patient_client, house):
    """Two appointments booked by the logged-in patient."""
    ids = []
    for day in ("2025-01-15", "2025-02-20"):
        response = patient_client.post(
            "/api/v1/appointment/post",
            json=appointment_payload(appointmentDate=day),
        )
        assert response.status_code == 200
        ids.append(response.json()["appointment"]["id"])
    return ids


def login_as_admin(client, admin):
    """Switch the shared client to an admin session alongside the patient one."""
    response = client.post(
        "/api/v1/user/login",
        json=patient_login(email=admin.email, password=ADMIN_PASSWORD, role="Admin"),
    )
    assert response.status_code == 200


class TestBooking:

    def test_book_appointment(self, patient_client, house):
        response = patient_client.post("/api/v1/appointment/post", json=appointment_payload())
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Appointment sent successfully"

        appointment = data["appointment"]
        assert appointment["doctorId"] == house.id
        assert appointment["status"] == "pending"
        assert appointment["hasVisited"] is False
        assert appointment["doctor"] == {"firstName": "Gregory", "lastName": "House"}
        assert appointment["appointmentDate"] == "2025-01-15"

        me = patient_client.get("/api/v1/user/patient/me").json()["user"]
        assert appointment["patientId"] == me["id"]

    def test_legacy_date_key_is_accepted(self, patient_client, house):
        payload = appointment_payload()
        payload["appointment_data"] = payload.pop("appointmentDate")

        response = patient_client.post("/api/v1/appointment/post", json=payload)
        assert response.status_code == 200
        assert response.json()["appointment"]["appointmentDate"] == "2025-01-15"

    def test_unknown_doctor(self, patient_client, house):
        response = patient_client.post(
            "/api/v1/appointment/post",
            json=appointment_payload(doctor_lastName="Wilson"),
        )
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Doctor not found"}

    def test_doctor_in_other_department_is_not_matched(self, patient_client, house):
        response = patient_client.post(
            "/api/v1/appointment/post",
            json=appointment_payload(department="Oncology"),
        )
        assert response.status_code == 404

    def test_ambiguous_doctor_is_refused(self, patient_client, db_session, house):
        create_doctor(db_session, "Gregory", "House", "Neurology", email="other.house@x.com")

        response = patient_client.post("/api/v1/appointment/post", json=appointment_payload())
        assert response.status_code == 404
        assert response.json()["message"] == "Doctor conflict! Please contact through email or phone"

    def test_namesake_in_another_department_is_not_a_conflict(self, patient_client, db_session, house):
        create_doctor(db_session, "Gregory", "House", "Diagnostics")

        response = patient_client.post("/api/v1/appointment/post", json=appointment_payload())
        assert response.status_code == 200
        assert response.json()["appointment"]["doctorId"] == house.id

    def test_missing_field(self, patient_client, house):
        payload = appointment_payload()
        del payload["address"]

        response = patient_client.post("/api/v1/appointment/post", json=payload)
        assert response.status_code == 400
        assert "address" in response.json()["message"]

    def test_booking_requires_patient_session(self, client, house):
        response = client.post("/api/v1/appointment/post", json=appointment_payload())
        assert response.status_code == 400
        assert response.json()["message"] == "Patient not authenticated"

    def test_booking_never_trusts_client_status(self, patient_client, house):
        response = patient_client.post(
            "/api/v1/appointment/post",
            json=appointment_payload(status="approved"),
        )
        assert response.status_code == 200
        assert response.json()["appointment"]["status"] == "pending"


class TestListing:

    def test_admin_lists_all(self, patient_client, booked, admin, db_session):
        wilson = create_doctor(db_session, "James", "Wilson", "Oncology")
        patient_client.post(
            "/api/v1/appointment/post",
            json=appointment_payload(
                department="Oncology", doctor_firstName="James", doctor_lastName="Wilson"
            ),
        )
        login_as_admin(patient_client, admin)

        response = patient_client.get("/api/v1/appointment/getall")
        assert response.status_code == 200
        assert len(response.json()["appointments"]) == 3

        filtered = patient_client.get(
            "/api/v1/appointment/getall", params={"doctorId": wilson.id}
        ).json()["appointments"]
        assert len(filtered) == 1
        assert filtered[0]["doctor"]["lastName"] == "Wilson"

    def test_admin_filters_by_patient(self, patient_client, booked, admin):
        patient_id = patient_client.get("/api/v1/user/patient/me").json()["user"]["id"]
        login_as_admin(patient_client, admin)

        response = patient_client.get(
            "/api/v1/appointment/getall", params={"patientId": patient_id + 1}
        )
        assert response.json()["appointments"] == []

    def test_getall_requires_admin(self, patient_client, booked):
        response = patient_client.get("/api/v1/appointment/getall")
        assert response.status_code == 400

    def test_patient_sees_only_own(self, patient_client, booked, house):
        patient_client.cookies.clear()
        other = dict(patient_data, email="bob@x.com", firstName="Bobby")
        assert patient_client.post("/api/v1/user/patient/register", json=other).status_code == 200

        response = patient_client.get("/api/v1/appointment/patient")
        assert response.status_code == 200
        assert response.json()["appointments"] == []

        patient_client.post("/api/v1/appointment/post", json=appointment_payload())
        mine = patient_client.get("/api/v1/appointment/patient").json()["appointments"]
        assert len(mine) == 1
        assert mine[0]["id"] not in booked


class TestLifecycle:

    def test_update_status(self, patient_client, booked, admin):
        login_as_admin(patient_client, admin)

        response = patient_client.put(
            f"/api/v1/appointment/update/{booked[0]}", json={"status": "approved"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Appointment status updated"
        assert data["appointment"]["status"] == "approved"
        assert data["appointment"]["hasVisited"] is False

    def test_mark_visited(self, patient_client, booked, admin):
        login_as_admin(patient_client, admin)

        response = patient_client.put(
            f"/api/v1/appointment/update/{booked[0]}", json={"hasVisited": True}
        )
        assert response.status_code == 200
        assert response.json()["appointment"]["hasVisited"] is True
        assert response.json()["appointment"]["status"] == "pending"

    @pytest.mark.parametrize("patch", [
        {"status": "cancelled"},
        {"status": "approved", "doctorId": 99},
        {},
    ])
    def test_invalid_update(self, patient_client, booked, admin, patch):
        login_as_admin(patient_client, admin)

        response = patient_client.put(f"/api/v1/appointment/update/{booked[0]}", json=patch)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_update_unknown_appointment(self, admin_client):
        response = admin_client.put("/api/v1/appointment/update/9999", json={"status": "rejected"})
        assert response.status_code == 404
        assert response.json()["message"] == "Appointment not found"

    def test_patient_cannot_update(self, patient_client, booked):
        response = patient_client.put(
            f"/api/v1/appointment/update/{booked[0]}", json={"status": "approved"}
        )
        assert response.status_code == 400

    def test_delete_removes_only_that_appointment(self, patient_client, booked, admin):
        login_as_admin(patient_client, admin)

        response = patient_client.delete(f"/api/v1/appointment/delete/{booked[0]}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Appointment deleted successfully"}

        remaining = patient_client.get("/api/v1/appointment/getall").json()["appointments"]
        assert [a["id"] for a in remaining] == [booked[1]]

    def test_delete_unknown_appointment(self, admin_client):
        response = admin_client.delete("/api/v1/appointment/delete/9999")
        assert response.status_code == 404
