import os

# Set testing environment before the application reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from medibook.main import app
from medibook.core.database import get_db, get_redis, Base
from medibook.core.security import get_password_hash
from medibook.models.user import Admin
from medibook.models.doctor import Doctor
from medibook.services.avatar_storage import AvatarStorage, get_avatar_storage

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class FakeRedis:
    """Dict-backed stand-in for the few Redis commands the rate limiter uses."""

    def __init__(self):
        self.data = {}

    def setex(self, key, ttl, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, 0)) + 1)
        return int(self.data[key])


@pytest.fixture(scope="function")
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_redis():
    fake = FakeRedis()
    app.dependency_overrides[get_redis] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_redis, None)


@pytest.fixture
def avatar_storage(tmp_path):
    storage = AvatarStorage(str(tmp_path / "media"), "/media")
    app.dependency_overrides[get_avatar_storage] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_avatar_storage, None)


@pytest.fixture
def client(test_db, fake_redis, avatar_storage):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


# Test data
ADMIN_PASSWORD = "adminpass123"

patient_data = {
    "firstName": "Alice",
    "lastName": "Patient",
    "email": "a@x.com",
    "phone": "03001234567",
    "nic": "1234567890123",
    "dob": "1990-01-01",
    "gender": "Female",
    "password": "secret123",
}


def patient_login(email="a@x.com", password="secret123", role="Patient"):
    return {
        "email": email,
        "password": password,
        "confirmPassword": password,
        "role": role,
    }


def create_admin(db, email="admin@x.com"):
    admin = Admin(
        first_name="Admin",
        last_name="Istrator",
        email=email,
        phone="03000000000",
        nic="9999999999999",
        dob=date(1980, 5, 5),
        gender="other",
        password_hash=get_password_hash(ADMIN_PASSWORD),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def create_doctor(db, first_name="Gregory", last_name="House", department="Neurology", email=None):
    doctor = Doctor(
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name}.{last_name}.{department}@x.com".lower(),
        phone="03111111111",
        nic="1111111111111",
        dob=date(1970, 1, 1),
        gender="male",
        password_hash=get_password_hash("doctorpass1"),
        doctor_department=department,
    )
    db.add(doctor)
    db.commit()
    db.refresh(doctor)
    return doctor


@pytest.fixture
def admin(db_session):
    return create_admin(db_session)


@pytest.fixture
def admin_client(client, admin):
    """Client holding an ``adminToken`` cookie."""
    response = client.post(
        "/api/v1/user/login",
        json=patient_login(email=admin.email, password=ADMIN_PASSWORD, role="Admin"),
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def patient_client(client):
    """Client holding a ``patientToken`` cookie for a freshly registered patient."""
    response = client.post("/api/v1/user/patient/register", json=patient_data)
    assert response.status_code == 200
    return client
